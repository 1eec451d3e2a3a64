from __future__ import annotations

from .config import load_default_config, parse_config, read_config
from .setting_line import apply_setting_line, parse_setting_line
from .session import process_lines, process_stream

__all__ = [
    "parse_config",
    "read_config",
    "load_default_config",
    "parse_setting_line",
    "apply_setting_line",
    "process_lines",
    "process_stream",
]

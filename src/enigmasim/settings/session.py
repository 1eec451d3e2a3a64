from __future__ import annotations

from typing import Iterable, Iterator, TextIO

from enigmasim.core.errors import ConfigError
from enigmasim.core.machine import Machine
from enigmasim.core.utils import group_blocks

from .setting_line import apply_setting_line, is_setting_line


def process_lines(machine: Machine, lines: Iterable[str], *, block: int = 5) -> Iterator[str]:
    """
    Yield one output line per message line.

    Setting lines ("* ...") reconfigure MACHINE and produce no output; each
    message line is converted with the current setup and grouped in blocks.
    """
    configured = False
    for lineno, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if is_setting_line(line):
            apply_setting_line(machine, line)
            configured = True
            continue
        if not configured:
            if not line.strip():
                continue
            raise ConfigError(f"Line {lineno}: message before any setting line (missing '*').")
        yield group_blocks(machine.convert(line.strip()), block)


def process_stream(machine: Machine, infile: TextIO, outfile: TextIO, *, block: int = 5) -> int:
    """Convert INFILE into OUTFILE; returns the number of message lines written."""
    count = 0
    for out in process_lines(machine, infile, block=block):
        outfile.write(out + "\n")
        count += 1
    return count

from __future__ import annotations

from typing import Iterable


def chunked(seq: Iterable, size: int):
    buf = []
    for x in seq:
        buf.append(x)
        if len(buf) == size:
            yield buf
            buf = []
    if buf:
        yield buf


def group_blocks(text: str, size: int = 5) -> str:
    """'QVPQSOKOIL' -> 'QVPQS OKOIL'; the last group may be shorter."""
    return " ".join("".join(block) for block in chunked(text, size))

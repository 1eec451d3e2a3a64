from __future__ import annotations

import re
from typing import List

from enigmasim.core.errors import ConfigError

# One whitespace-free token made only of parenthesised groups: "(AB)(CD)" or "(AELT)".
_CYCLE_TOKEN_RE = re.compile(r"^(\([^\s()]*\))+$")
_GROUP_RE = re.compile(r"\(([^\s()]*)\)")


def is_cycle_token(token: str) -> bool:
    return bool(_CYCLE_TOKEN_RE.match(token))


def has_parens(token: str) -> bool:
    return "(" in token or ")" in token


def cycle_groups(cycles: str) -> List[str]:
    """'(AB) (CDE)' -> ['AB', 'CDE']."""
    return _GROUP_RE.findall(cycles)


def parse_count(token: str | None, what: str) -> int:
    """Parse a non-negative integer token from a config file."""
    if token is None:
        raise ConfigError(f"Configuration truncated: missing {what}.")
    try:
        value = int(token)
    except ValueError as e:
        raise ConfigError(f"Wrong {what}: expected an integer, got {token!r}.") from e
    if value < 0:
        raise ConfigError(f"Wrong {what}: {value} is negative.")
    return value


class TokenStream:
    """Whitespace-separated tokens with one-token lookahead."""

    def __init__(self, text: str) -> None:
        self._tokens = text.split()
        self._pos = 0

    def peek(self) -> str | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def next(self) -> str | None:
        tok = self.peek()
        if tok is not None:
            self._pos += 1
        return tok

    def take_cycles(self) -> str:
        """Consume consecutive cycle tokens and return them joined by spaces."""
        out = []
        while (tok := self.peek()) is not None and is_cycle_token(tok):
            out.append(tok)
            self._pos += 1
        return " ".join(out)

    def __bool__(self) -> bool:
        return self._pos < len(self._tokens)

from __future__ import annotations

from typing import List, Union

from .alphabet import Alphabet
from .errors import ConfigError


def parse_cycles(cycles: str, alphabet: Alphabet) -> List[str]:
    """
    Split cycle notation like "(AELT) (BKNW)" into ["AELT", "BKNW"].

    Whitespace between cycles is ignored; empty cycles "()" are allowed.
    Raises ConfigError on unbalanced parentheses, stray text, symbols outside
    the alphabet, or a symbol used more than once.
    """
    out: List[str] = []
    seen: set[str] = set()
    current: list[str] | None = None

    for ch in cycles:
        if ch == "(":
            if current is not None:
                raise ConfigError(f"Nested '(' in cycles {cycles!r}.")
            current = []
        elif ch == ")":
            if current is None:
                raise ConfigError(f"Unmatched ')' in cycles {cycles!r}.")
            out.append("".join(current))
            current = None
        elif ch.isspace():
            if current is not None:
                raise ConfigError(f"Whitespace inside a cycle in {cycles!r}.")
        elif current is None:
            raise ConfigError(f"Symbol {ch!r} outside of a cycle in {cycles!r}.")
        else:
            if ch not in alphabet:
                raise ConfigError(f"Symbol {ch!r} in cycles is not in the alphabet.")
            if ch in seen:
                raise ConfigError(f"Symbol {ch!r} appears more than once in cycles.")
            seen.add(ch)
            current.append(ch)

    if current is not None:
        raise ConfigError(f"Unclosed '(' in cycles {cycles!r}.")
    return out


class Permutation:
    """A bijection over the indices of an Alphabet, given in cycle notation.

    Symbols that appear in no cycle map to themselves.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self._alphabet = alphabet
        n = alphabet.size()

        forward = list(range(n))
        for cycle in parse_cycles(cycles, alphabet):
            idx = [alphabet.to_int(ch) for ch in cycle]
            # last element closes the cycle back to the first
            for a, b in zip(idx, idx[1:] + idx[:1]):
                forward[a] = b

        inverse = [0] * n
        for i, j in enumerate(forward):
            inverse[j] = i

        self._forward = forward
        self._inverse = inverse

    @classmethod
    def identity(cls, alphabet: Alphabet) -> "Permutation":
        return cls("", alphabet)

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    def size(self) -> int:
        return self._alphabet.size()

    def wrap(self, p: int) -> int:
        return p % self.size()

    def permute(self, p: Union[int, str]) -> Union[int, str]:
        """Apply the permutation to an index (taken modulo size) or a symbol."""
        if isinstance(p, str):
            return self._alphabet.to_char(self._forward[self._alphabet.to_int(p)])
        return self._forward[self.wrap(p)]

    def invert(self, c: Union[int, str]) -> Union[int, str]:
        """Apply the inverse permutation to an index (taken modulo size) or a symbol."""
        if isinstance(c, str):
            return self._alphabet.to_char(self._inverse[self._alphabet.to_int(c)])
        return self._inverse[self.wrap(c)]

    def derangement(self) -> bool:
        return all(i != j for i, j in enumerate(self._forward))

    def cycles(self) -> str:
        """Canonical cycle notation, omitting fixed points."""
        parts: list[str] = []
        done: set[int] = set()
        for start in range(self.size()):
            if start in done or self._forward[start] == start:
                continue
            cycle = []
            i = start
            while i not in done:
                done.add(i)
                cycle.append(self._alphabet.to_char(i))
                i = self._forward[i]
            parts.append("(" + "".join(cycle) + ")")
        return " ".join(parts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Permutation):
            return NotImplemented
        return self._alphabet == other._alphabet and self._forward == other._forward

    def __repr__(self) -> str:
        return f"<Permutation {self.cycles() or '()'}>"

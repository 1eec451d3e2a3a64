from __future__ import annotations

from .errors import ConfigError, NotFoundError, RangeError

DEFAULT_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Reserved by the cycle notation and the setting-line format.
_RESERVED = set("()*")


class Alphabet:
    """Ordered set of symbols with dense indices 0..size-1."""

    def __init__(self, chars: str = DEFAULT_ALPHABET) -> None:
        if not chars:
            raise ConfigError("Alphabet must contain at least one symbol.")

        index: dict[str, int] = {}
        for i, ch in enumerate(chars):
            if ch.isspace() or ch in _RESERVED:
                raise ConfigError(f"Symbol {ch!r} cannot be used in an alphabet.")
            if ch in index:
                raise ConfigError(f"Symbol {ch!r} appears twice in the alphabet.")
            index[ch] = i

        self._chars = chars
        self._index = index

    def size(self) -> int:
        return len(self._chars)

    def contains(self, ch: str) -> bool:
        return ch in self._index

    def to_char(self, index: int) -> str:
        if not (0 <= index < len(self._chars)):
            hi = len(self._chars) - 1
            raise RangeError(f"Index {index} out of range 0-{hi}")
        return self._chars[index]

    def to_int(self, ch: str) -> int:
        try:
            return self._index[ch]
        except KeyError:
            raise NotFoundError(f"Symbol {ch!r} is not in the alphabet.") from None

    def __len__(self) -> int:
        return len(self._chars)

    def __contains__(self, ch: object) -> bool:
        return ch in self._index

    def __iter__(self):
        return iter(self._chars)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._chars == other._chars

    def __hash__(self) -> int:
        return hash(self._chars)

    def __str__(self) -> str:
        return self._chars

    def __repr__(self) -> str:
        return f"<Alphabet {self._chars!r}>"

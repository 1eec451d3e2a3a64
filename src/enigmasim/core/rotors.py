from __future__ import annotations

from typing import Protocol, Union

from .alphabet import Alphabet
from .errors import ConfigError
from .permutation import Permutation


class Rotor(Protocol):
    """Capability interface shared by MovingRotor, FixedRotor and Reflector."""

    name: str

    @property
    def alphabet(self) -> Alphabet:
        ...

    @property
    def permutation(self) -> Permutation:
        ...

    @property
    def setting(self) -> int:
        ...

    @property
    def ring_setting(self) -> int:
        ...

    def size(self) -> int:
        ...

    def rotates(self) -> bool:
        ...

    def reflecting(self) -> bool:
        ...

    def notches(self) -> str:
        ...

    def at_notch(self) -> bool:
        ...

    def advance(self) -> None:
        ...

    def set(self, posn: Union[int, str]) -> None:
        ...

    def set_ring_setting(self, ring: Union[int, str]) -> None:
        ...

    def reset(self) -> None:
        ...

    def convert_forward(self, p: int) -> int:
        ...

    def convert_backward(self, e: int) -> int:
        ...


class _Wheel:
    # Mechanics common to every variant: offsets and the shifted lookup.
    kind = ""

    def __init__(self, name: str, perm: Permutation) -> None:
        self.name = name
        self._perm = perm
        self._setting = 0
        self._ring = 0

    @property
    def alphabet(self) -> Alphabet:
        return self._perm.alphabet

    @property
    def permutation(self) -> Permutation:
        return self._perm

    @property
    def setting(self) -> int:
        return self._setting

    @property
    def ring_setting(self) -> int:
        return self._ring

    def size(self) -> int:
        return self._perm.size()

    def rotates(self) -> bool:
        return False

    def reflecting(self) -> bool:
        return False

    def notches(self) -> str:
        return ""

    def at_notch(self) -> bool:
        return False

    def advance(self) -> None:
        pass

    def _index(self, value: Union[int, str]) -> int:
        if isinstance(value, str):
            return self.alphabet.to_int(value)
        return value % self.size()

    def set(self, posn: Union[int, str]) -> None:
        self._setting = self._index(posn)

    def set_ring_setting(self, ring: Union[int, str]) -> None:
        self._ring = self._index(ring)

    def reset(self) -> None:
        self._setting = 0
        self._ring = 0

    def _shift(self) -> int:
        return (self._setting - self._ring) % self.size()

    def convert_forward(self, p: int) -> int:
        shift = self._shift()
        result = self._perm.permute((p + shift) % self.size())
        return (result - shift) % self.size()

    def convert_backward(self, e: int) -> int:
        shift = self._shift()
        result = self._perm.invert((e + shift) % self.size())
        return (result - shift) % self.size()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name} pos={self._setting} ring={self._ring}>"


class FixedRotor(_Wheel):
    """A rotor that never moves by itself (e.g. the thin Beta/Gamma wheels)."""

    kind = "N"


class MovingRotor(_Wheel):
    """A rotor driven by a pawl, with notches at the given symbols."""

    kind = "M"

    def __init__(self, name: str, perm: Permutation, notches: str) -> None:
        super().__init__(name, perm)
        bad = [ch for ch in notches if ch not in perm.alphabet]
        if bad:
            raise ConfigError(f"Rotor {name}: notch {bad[0]!r} is not in the alphabet.")
        self._notches = notches
        self._notch_set = {perm.alphabet.to_int(ch) for ch in notches}

    def rotates(self) -> bool:
        return True

    def notches(self) -> str:
        return self._notches

    def at_notch(self) -> bool:
        return self._setting in self._notch_set

    def advance(self) -> None:
        self._setting = (self._setting + 1) % self.size()


class Reflector(_Wheel):
    """A fixed, non-rotating wheel whose wiring has no fixed points."""

    kind = "R"

    def __init__(self, name: str, perm: Permutation) -> None:
        if not perm.derangement():
            raise ConfigError(f"Reflector {name} must map every symbol to a different one.")
        super().__init__(name, perm)

    def reflecting(self) -> bool:
        return True

    def set(self, posn: Union[int, str]) -> None:
        if self._index(posn) != 0:
            raise ConfigError(f"Reflector {self.name} has only one position.")
        self._setting = 0


def make_rotor(name: str, kind: str, perm: Permutation) -> Rotor:
    """
    Build a rotor from a config-style type token:
      "M<notches>" -> MovingRotor, "N" -> FixedRotor, "R" -> Reflector.
    """
    if kind.startswith("M"):
        return MovingRotor(name, perm, kind[1:])
    if kind == "N":
        return FixedRotor(name, perm)
    if kind == "R":
        return Reflector(name, perm)
    raise ConfigError(f"Rotor {name} has an unknown type {kind!r} (expected M..., N or R).")

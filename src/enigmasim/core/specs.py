from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .alphabet import Alphabet
from .machine import Machine
from .permutation import Permutation
from .rotors import Rotor, make_rotor
from .trace import Tracer


@dataclass(frozen=True)
class RotorSpec:
    name: str
    # "M<notches>", "N" or "R", exactly as written in a config file
    kind: str
    cycles: str = ""

    @property
    def notches(self) -> str:
        return self.kind[1:] if self.kind.startswith("M") else ""

    def build(self, alphabet: Alphabet) -> Rotor:
        return make_rotor(self.name, self.kind, Permutation(self.cycles, alphabet))

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "kind": self.kind, "cycles": self.cycles}


@dataclass(frozen=True)
class MachineSpec:
    alphabet: str
    num_rotors: int
    num_pawls: int
    rotors: tuple[RotorSpec, ...] = ()

    def build(self, *, tracer: Optional[Tracer] = None) -> Machine:
        alpha = Alphabet(self.alphabet)
        return Machine(
            alpha,
            self.num_rotors,
            self.num_pawls,
            [r.build(alpha) for r in self.rotors],
            tracer=tracer,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "alphabet": self.alphabet,
            "num_rotors": self.num_rotors,
            "num_pawls": self.num_pawls,
            "rotors": [r.to_dict() for r in self.rotors],
        }


@dataclass(frozen=True)
class SetupSpec:
    """One '* ...' line: which rotors, where they start, rings and plugs."""

    rotors: tuple[str, ...]
    positions: str
    ring: Optional[str] = None
    plugboard: str = ""

    def apply(self, machine: Machine) -> None:
        machine.insert_rotors(list(self.rotors))
        machine.set_rotors(self.positions)
        if self.ring is not None:
            machine.set_ring_setting(self.ring)
        machine.set_plugboard(Permutation(self.plugboard, machine.alphabet))

    def to_dict(self) -> dict[str, Any]:
        return {
            "rotors": list(self.rotors),
            "positions": self.positions,
            "ring": self.ring,
            "plugboard": self.plugboard,
        }

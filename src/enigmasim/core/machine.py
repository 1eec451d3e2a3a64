from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from .alphabet import Alphabet
from .errors import ConfigError, RangeError
from .permutation import Permutation
from .rotors import Rotor
from .trace import Tracer


class Machine:
    """
    A complete rotor machine.

    Slot 0 holds the reflector and slot num_rotors - 1 the fast rotor. Rotors
    come from a catalog keyed by name; the same rotor objects are reused by
    every insert_rotors() call, so each insertion resets their settings.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        num_pawls: int,
        all_rotors: Iterable[Rotor],
        *,
        tracer: Optional[Tracer] = None,
    ) -> None:
        if num_rotors < 2:
            raise ConfigError(f"A machine needs at least 2 rotor slots, got {num_rotors}.")
        if not (0 <= num_pawls < num_rotors):
            raise ConfigError(
                f"Number of pawls must be in 0..{num_rotors - 1}, got {num_pawls}."
            )

        catalog: Dict[str, Rotor] = {}
        for rotor in all_rotors:
            if rotor.alphabet != alphabet:
                raise ConfigError(f"Rotor {rotor.name} uses a different alphabet.")
            if rotor.name in catalog:
                raise ConfigError(f"Rotor {rotor.name} is defined twice.")
            catalog[rotor.name] = rotor

        self._alphabet = alphabet
        self._num_rotors = num_rotors
        self._num_pawls = num_pawls
        self._catalog = catalog
        self._slots: List[Rotor] = []
        self._plugboard = Permutation.identity(alphabet)
        self.tracer = tracer or Tracer()

    # ── accessors ──────────────────────────────────────────────

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def num_rotors(self) -> int:
        return self._num_rotors

    @property
    def num_pawls(self) -> int:
        return self._num_pawls

    @property
    def plugboard(self) -> Permutation:
        return self._plugboard

    def get_rotor(self, k: int) -> Rotor:
        """Rotor in slot k; slot 0 is the reflector."""
        self._require_rotors()
        return self._slots[k]

    def available_rotors(self) -> List[str]:
        return sorted(self._catalog)

    def catalog(self) -> List[Rotor]:
        return [self._catalog[name] for name in self.available_rotors()]

    def positions(self) -> str:
        """Window letters of slots 1..N-1, leftmost first."""
        self._require_rotors()
        return "".join(self._alphabet.to_char(r.setting) for r in self._slots[1:])

    # ── setup ──────────────────────────────────────────────

    def insert_rotors(self, names: Sequence[str]) -> None:
        """
        Fill the slots with the rotors NAMES (names[0] is the reflector).
        Inserted rotors start at setting 0 with ring setting 0.
        """
        if len(names) != self._num_rotors:
            raise ConfigError(
                f"Expected {self._num_rotors} rotor names, got {len(names)}."
            )

        chosen: List[Rotor] = []
        for name in names:
            if name not in self._catalog:
                raise ConfigError(f"Unknown rotor {name!r}.")
            if name in (r.name for r in chosen):
                raise ConfigError(f"Rotor {name} is used more than once.")
            chosen.append(self._catalog[name])

        moving = sum(1 for r in chosen if r.rotates())
        if moving != self._num_pawls:
            raise ConfigError(
                f"{moving} moving rotors inserted but the machine has {self._num_pawls} pawls."
            )
        if not chosen[0].reflecting():
            raise ConfigError(f"Slot 0 must hold a reflector, not {chosen[0].name}.")
        for left, right in zip(chosen, chosen[1:]):
            if left.rotates() and not right.rotates():
                raise ConfigError(
                    f"Non-moving rotor {right.name} cannot sit right of moving rotor {left.name}."
                )

        for rotor in chosen:
            rotor.reset()
        self._slots = chosen

    def set_rotors(self, setting: str) -> None:
        """Set slots 1..N-1 from SETTING, one symbol per slot, leftmost first."""
        for rotor, ch in zip(self._non_reflectors(setting, "setting"), setting):
            rotor.set(ch)

    def set_ring_setting(self, ring: str) -> None:
        """Set ring offsets of slots 1..N-1 from RING, leftmost first."""
        for rotor, ch in zip(self._non_reflectors(ring, "ring setting"), ring):
            rotor.set_ring_setting(ch)

    def set_plugboard(self, plugboard: Permutation) -> None:
        if plugboard.alphabet != self._alphabet:
            raise ConfigError("Plugboard uses a different alphabet.")
        self._plugboard = plugboard

    def _non_reflectors(self, value: str, what: str) -> List[Rotor]:
        self._require_rotors()
        if len(value) != self._num_rotors - 1:
            raise ConfigError(
                f"The {what} {value!r} must have {self._num_rotors - 1} symbols."
            )
        bad = [ch for ch in value if ch not in self._alphabet]
        if bad:
            raise ConfigError(f"The {what} {value!r} uses {bad[0]!r}, not in the alphabet.")
        return self._slots[1:]

    def _require_rotors(self) -> None:
        if not self._slots:
            raise ConfigError("No rotors inserted.")

    # ── conversion ──────────────────────────────────────────────

    def convert(self, c):
        """
        int: advance the rotors, then return the encoding of index C.
        str: encode every non-space symbol of C in order and return the result.
        """
        if isinstance(c, str):
            return self._convert_message(c)
        return self._convert_index(c)

    def _convert_message(self, msg: str) -> str:
        out: List[str] = []
        for ch in msg:
            if ch == " ":
                continue
            out.append(self._alphabet.to_char(self._convert_index(self._alphabet.to_int(ch))))
        return "".join(out)

    def _convert_index(self, c: int) -> int:
        self._require_rotors()
        size = self._alphabet.size()
        if not (0 <= c < size):
            raise RangeError(f"Index {c} out of range 0-{size - 1}")

        self._advance_rotors()
        trace = self.tracer.active("encipher")
        path = [self._alphabet.to_char(c)] if trace else []

        c = self._plugboard.permute(c)
        self.tracer.log("plugboard", "in %s", self._alphabet.to_char(c))
        if trace:
            path.append(self._alphabet.to_char(c))

        c = self._apply_rotors(c, path if trace else None)

        c = self._plugboard.permute(c)
        self.tracer.log("plugboard", "out %s", self._alphabet.to_char(c))
        if trace:
            path.append(self._alphabet.to_char(c))
            self.tracer.log("encipher", "[%s] %s", self.positions(), " -> ".join(path))
        return c

    def _advance_rotors(self) -> None:
        """Step once, reproducing the double-step of the middle rotors."""
        slots = self._slots
        for i in range(1, self._num_rotors - 1):
            if slots[i + 1].at_notch():
                slots[i].advance()
            elif slots[i].at_notch() and slots[i - 1].rotates():
                slots[i].advance()
        slots[-1].advance()
        self.tracer.log("stepping", "positions %s", self.positions())

    def _apply_rotors(self, c: int, path: Optional[List[str]]) -> int:
        for i in range(self._num_rotors - 1, -1, -1):
            rotor = self._slots[i]
            c = rotor.convert_forward(c)
            component = "reflector" if i == 0 else "rotor"
            self.tracer.log(component, "%s forward -> %s", rotor.name, self._alphabet.to_char(c))
            if path is not None:
                path.append(self._alphabet.to_char(c))
        for i in range(1, self._num_rotors):
            rotor = self._slots[i]
            c = rotor.convert_backward(c)
            self.tracer.log("rotor", "%s backward -> %s", rotor.name, self._alphabet.to_char(c))
            if path is not None:
                path.append(self._alphabet.to_char(c))
        return c

    def __repr__(self) -> str:
        names = " ".join(r.name for r in self._slots) or "empty"
        return f"<Machine slots={self._num_rotors} pawls={self._num_pawls} [{names}]>"

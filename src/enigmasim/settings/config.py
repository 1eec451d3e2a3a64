from __future__ import annotations

from importlib import resources
from pathlib import Path

from enigmasim.core.alphabet import Alphabet
from enigmasim.core.errors import ConfigError
from enigmasim.core.specs import MachineSpec, RotorSpec

from .common import TokenStream, has_parens, is_cycle_token, parse_count


def _read_kind(tokens: TokenStream, name: str, alphabet: Alphabet) -> str:
    kind = tokens.next()
    if kind is None:
        raise ConfigError(f"Rotor {name}: description truncated, missing type.")
    if kind in ("N", "R"):
        return kind
    if kind.startswith("M") and all(ch in alphabet for ch in kind[1:]):
        return kind
    raise ConfigError(f"Rotor {name}: wrong type/notches {kind!r}.")


def _read_rotor(tokens: TokenStream, alphabet: Alphabet) -> RotorSpec:
    name = tokens.next()
    if name is None or has_parens(name):
        raise ConfigError(f"Wrong rotor name {name!r}.")
    kind = _read_kind(tokens, name, alphabet)
    spec = RotorSpec(name=name, kind=kind, cycles=tokens.take_cycles())

    # Build once so bad cycles and non-deranged reflectors fail at load time.
    spec.build(alphabet)
    return spec


def parse_config(text: str) -> MachineSpec:
    """
    Parse a machine description:

        ABCDEFGHIJKLMNOPQRSTUVWXYZ
        5 3
        I MQ      (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
        Beta N    (ALBEVFCYODJWUGNMQTZSKPR) (HIX)
        B R       (AE) (BN) (CK) ...
    """
    tokens = TokenStream(text)

    raw_alpha = tokens.next()
    if raw_alpha is None or has_parens(raw_alpha):
        raise ConfigError(f"Wrong alphabet {raw_alpha!r}.")
    alphabet = Alphabet(raw_alpha)

    num_rotors = parse_count(tokens.next(), "number of rotor slots")
    num_pawls = parse_count(tokens.next(), "number of pawls")
    if num_rotors < 2:
        raise ConfigError(f"Wrong number of rotor slots: {num_rotors} (need at least 2).")
    if num_pawls >= num_rotors:
        raise ConfigError(
            f"Wrong number of pawls: {num_pawls} pawls for {num_rotors} rotor slots."
        )

    rotors: list[RotorSpec] = []
    seen: set[str] = set()
    while tokens:
        if is_cycle_token(tokens.peek() or ""):
            raise ConfigError(f"Cycles {tokens.peek()!r} do not follow a rotor type.")
        spec = _read_rotor(tokens, alphabet)
        if spec.name in seen:
            raise ConfigError(f"Rotor {spec.name} is defined twice.")
        seen.add(spec.name)
        rotors.append(spec)

    return MachineSpec(
        alphabet=raw_alpha,
        num_rotors=num_rotors,
        num_pawls=num_pawls,
        rotors=tuple(rotors),
    )


def read_config(path: str | Path) -> MachineSpec:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not open {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"Could not read {path}: not valid UTF-8 ({e.reason}).") from e
    return parse_config(text)


def load_default_config() -> MachineSpec:
    """The naval five-slot catalog shipped with the package."""
    text = resources.files("enigmasim.data").joinpath("default.conf").read_text(encoding="utf-8")
    return parse_config(text)

from __future__ import annotations

from enigmasim.core.errors import ConfigError
from enigmasim.core.machine import Machine
from enigmasim.core.specs import SetupSpec

from .common import cycle_groups, is_cycle_token


def is_setting_line(line: str) -> bool:
    return line.lstrip().startswith("*")


def parse_setting_line(line: str, num_rotors: int) -> SetupSpec:
    """
    Parse "* B Beta III IV I AXLE [RING] (HQ) (EX) ..." for a machine with
    NUM_ROTORS slots.
    """
    body = line.lstrip()
    if not body.startswith("*"):
        raise ConfigError(f"Setting line must start with '*': {line!r}")
    tokens = body[1:].split()

    if len(tokens) < num_rotors + 1:
        raise ConfigError(
            f"Setting line needs {num_rotors} rotor names and a position string: {line.strip()!r}"
        )
    rotors = tuple(tokens[:num_rotors])
    positions = tokens[num_rotors]
    rest = tokens[num_rotors + 1:]

    ring = None
    if rest and not rest[0].startswith("("):
        ring, rest = rest[0], rest[1:]

    for tok in rest:
        if not is_cycle_token(tok):
            raise ConfigError(f"Unexpected token {tok!r} in setting line.")
    plugboard = " ".join(rest)
    for group in cycle_groups(plugboard):
        if len(group) > 2:
            raise ConfigError(f"Plugboard entry ({group}) must swap at most two symbols.")

    return SetupSpec(
        rotors=rotors,
        positions=positions,
        ring=ring,
        plugboard=plugboard,
    )


def apply_setting_line(machine: Machine, line: str) -> SetupSpec:
    spec = parse_setting_line(line, machine.num_rotors)
    spec.apply(machine)
    return spec

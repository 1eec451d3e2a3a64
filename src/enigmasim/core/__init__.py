from .errors import ConfigError, EnigmaError, NotFoundError, RangeError
from .alphabet import Alphabet, DEFAULT_ALPHABET
from .permutation import Permutation
from .rotors import FixedRotor, MovingRotor, Reflector, Rotor, make_rotor
from .machine import Machine
from .trace import Tracer, configure_logging
from .specs import MachineSpec, RotorSpec, SetupSpec

__all__ = [
    "EnigmaError",
    "ConfigError",
    "RangeError",
    "NotFoundError",
    "Alphabet",
    "DEFAULT_ALPHABET",
    "Permutation",
    "Rotor",
    "MovingRotor",
    "FixedRotor",
    "Reflector",
    "make_rotor",
    "Machine",
    "Tracer",
    "configure_logging",
    "MachineSpec",
    "RotorSpec",
    "SetupSpec",
]

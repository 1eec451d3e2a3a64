import pytest

from enigmasim.core.alphabet import Alphabet
from enigmasim.settings.config import load_default_config, parse_config

# Enigma I style machine: wide reflector B, three moving rotors.
M3_CONFIG = """
ABCDEFGHIJKLMNOPQRSTUVWXYZ
4 3
I MQ      (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
II ME     (FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)
III MV    (ABDHPEJT) (CFLVMZOYQIRWUKXSG) (N)
UKWB R    (AY) (BR) (CU) (DH) (EQ) (FS) (GL) (IP) (JX) (KN) (MO) (TZ) (VW)
"""


@pytest.fixture
def alpha():
    return Alphabet()


@pytest.fixture
def naval():
    return load_default_config().build()


@pytest.fixture
def m3():
    return parse_config(M3_CONFIG).build()

import logging

import pytest

from enigmasim.core.alphabet import Alphabet
from enigmasim.core.errors import ConfigError, NotFoundError, RangeError
from enigmasim.core.machine import Machine
from enigmasim.core.permutation import Permutation
from enigmasim.core.trace import Tracer


def _setup(machine, names, positions, ring=None, plugs=""):
    machine.insert_rotors(names.split())
    machine.set_rotors(positions)
    if ring is not None:
        machine.set_ring_setting(ring)
    machine.set_plugboard(Permutation(plugs, machine.alphabet))


def test_reference_ciphertext_naval(naval):
    _setup(naval, "B Beta I II III", "AAAA")
    assert naval.convert("AAAAA") == "BDZGO"


def test_reference_ciphertext_wide_reflector(m3):
    _setup(m3, "UKWB I II III", "AAA")
    assert m3.convert("AAAAA") == "BDZGO"


def test_reference_ciphertext_with_ring_settings(m3):
    _setup(m3, "UKWB I II III", "AAA", ring="BBB")
    assert m3.convert("AAAAA") == "EWTYX"


def test_double_step_sequence(naval):
    _setup(naval, "B Beta I II III", "AADU")
    seen = []
    for _ in range(4):
        naval.convert(0)
        seen.append(naval.positions())
    assert seen == ["AADV", "AAEW", "ABFX", "ABFY"]


def test_leftmost_moving_rotor_does_not_double_step(naval):
    # Rotor I sits at its notch, but its left neighbour (Beta) has no pawl.
    _setup(naval, "B Beta I II III", "AQAA")
    naval.convert(0)
    assert naval.positions() == "AQAB"


def test_stepping_is_deterministic(naval):
    _setup(naval, "B Beta I II III", "AAAA")
    for _ in range(26):
        naval.convert(0)
    assert naval.positions() == "AABA"


def test_fast_rotor_always_steps(m3):
    _setup(m3, "UKWB I II III", "AAA")
    m3.convert(0)
    assert m3.positions() == "AAB"


def test_encoding_is_self_inverse(naval):
    setup = ("B Beta III IV I", "AXLE", "AAAA", "(HQ) (EX) (IP) (TR) (BY)")
    plain = "FROMHISSHOULDERHIAWATHA"
    _setup(naval, *setup[:2], ring=setup[2], plugs=setup[3])
    cipher = naval.convert(plain)
    assert cipher != plain
    _setup(naval, *setup[:2], ring=setup[2], plugs=setup[3])
    assert naval.convert(cipher) == plain


def test_no_letter_encodes_to_itself(naval):
    _setup(naval, "B Gamma V VI VII", "QRST", plugs="(AZ) (BY)")
    text = "ABCDEFGHIJKLMNOPQRSTUVWXYZ" * 4
    out = naval.convert(text)
    assert all(a != b for a, b in zip(text, out))


def test_spaces_are_skipped_without_stepping(naval):
    _setup(naval, "B Beta I II III", "AAAA")
    assert naval.convert("AA AA A") == "BDZGO"
    assert naval.positions() == "AAAF"


def test_insert_resets_reused_rotors(naval):
    _setup(naval, "B Beta I II III", "AAAA", ring="BBBB")
    naval.convert("HELLO")
    naval.insert_rotors("B Beta I II III".split())
    assert naval.positions() == "AAAA"
    assert all(naval.get_rotor(k).ring_setting == 0 for k in range(5))


def test_convert_index_range(naval):
    _setup(naval, "B Beta I II III", "AAAA")
    with pytest.raises(RangeError):
        naval.convert(26)
    with pytest.raises(RangeError):
        naval.convert(-1)
    assert naval.positions() == "AAAA"


def test_convert_unknown_symbol(naval):
    _setup(naval, "B Beta I II III", "AAAA")
    with pytest.raises(NotFoundError):
        naval.convert("AB1")


@pytest.mark.parametrize(
    "names, match",
    [
        ("B Beta III IV XX", "Unknown rotor"),
        ("Beta B III IV I", "reflector"),
        ("B Beta Gamma IV I", "pawls"),
        ("B III Beta IV I", "right of moving"),
        ("B Beta III IV", "Expected 5"),
        ("B Beta I I III", "more than once"),
    ],
)
def test_insert_rotors_rejects(naval, names, match):
    with pytest.raises(ConfigError, match=match):
        naval.insert_rotors(names.split())


def test_failed_insert_keeps_previous_rotors(naval):
    _setup(naval, "B Beta I II III", "AAAA")
    with pytest.raises(ConfigError):
        naval.insert_rotors("B III Beta IV I".split())
    assert [naval.get_rotor(k).name for k in range(5)] == ["B", "Beta", "I", "II", "III"]


@pytest.mark.parametrize("value", ["AAA", "AAAAA", "AAA1"])
def test_setting_strings_are_checked(naval, value):
    naval.insert_rotors("B Beta I II III".split())
    with pytest.raises(ConfigError):
        naval.set_rotors(value)
    with pytest.raises(ConfigError):
        naval.set_ring_setting(value)


def test_setup_requires_rotors(naval):
    with pytest.raises(ConfigError):
        naval.set_rotors("AAAA")
    with pytest.raises(ConfigError):
        naval.convert(0)


def test_plugboard_alphabet_must_match(naval):
    with pytest.raises(ConfigError):
        naval.set_plugboard(Permutation("(AB)", Alphabet("ABC")))


def test_plugboard_swaps_both_ways(naval):
    _setup(naval, "B Beta I II III", "AAAA", plugs="(AB)")
    # Swapping A/B on input and output turns "AAAAA" into the encoding of "BBBBB".
    with_plugs = naval.convert("AAAAA")
    _setup(naval, "B Beta I II III", "AAAA")
    plain = naval.convert("BBBBB")
    swap = str.maketrans("AB", "BA")
    assert with_plugs == plain.translate(swap)


def test_machine_shape_is_validated(alpha):
    with pytest.raises(ConfigError):
        Machine(alpha, 1, 0, [])
    with pytest.raises(ConfigError):
        Machine(alpha, 3, 3, [])


def test_catalog_listing(naval):
    assert naval.available_rotors() == sorted(
        ["I", "II", "III", "IV", "V", "VI", "VII", "VIII", "Beta", "Gamma", "B", "C"]
    )
    assert naval.num_rotors == 5
    assert naval.num_pawls == 3


def test_trace_logs_signal_path(naval, caplog):
    naval.tracer = Tracer()
    naval.tracer.enable("encipher")
    _setup(naval, "B Beta I II III", "AAAA")
    caplog.set_level(logging.DEBUG, logger="enigmasim")

    assert naval.convert(0) == 1

    messages = [r.getMessage() for r in caplog.records if r.name == "enigmasim"]
    assert messages == [
        "[ENCIPHER] [AAAB] A -> A -> C -> D -> F -> C -> K -> S -> S -> E -> B -> B"
    ]


def test_trace_does_not_change_results(naval):
    _setup(naval, "B Beta I II III", "AAAA")
    quiet = naval.convert("HELLOWORLD")
    naval.tracer = Tracer.verbose()
    _setup(naval, "B Beta I II III", "AAAA")
    assert naval.convert("HELLOWORLD") == quiet

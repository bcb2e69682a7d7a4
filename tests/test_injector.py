import pytest

from calcemu.injector import (
    INPUT_BUFFER_ADDR,
    MEM_EDIT_BASE_ADDR,
    Injector,
    parse_hex_string,
)

IN = INPUT_BUFFER_ADDR - MEM_EDIT_BASE_ADDR


@pytest.fixture
def ram():
    return bytearray(0x2800)


def test_parse_pairs_with_spaces():
    assert parse_hex_string("12 34") == bytes([0x12, 0x34])


def test_parse_skips_invalid_characters():
    assert parse_hex_string("zz0a") == bytes([0x0A])


def test_parse_drops_odd_trailing_digit():
    assert parse_hex_string("abc") == bytes([0xAB])


def test_parse_comment_to_end_of_line():
    assert parse_hex_string("01 ; note\n02") == bytes([0x01, 0x02])


def test_parse_comment_without_newline_ends_input():
    assert parse_hex_string("1;23") == b""


def test_parse_stops_at_nul():
    assert parse_hex_string("11\x0022") == bytes([0x11])


def test_parse_uppercase():
    assert parse_hex_string("FF") == bytes([0xFF])


def test_math_io(ram):
    ram[0x11E] = 7
    Injector(ram).set_math_io()
    assert ram[0xD112 - 0xD000] == 0xC4
    assert ram[0xD11E - 0xD000] == 0x00


def test_enter_an_short(ram):
    Injector(ram).enter_an(5)
    assert ram[IN:IN + 5] == b"\x31" * 5
    assert ram[IN + 5] == 0xFD
    assert ram[IN + 6] == 0x20


def test_enter_an_long(ram):
    Injector(ram).enter_an(102)
    assert ram[IN:IN + 100] == b"\x31" * 100
    assert ram[IN + 100] == 0xA6
    assert ram[IN + 101] == 0x31
    assert ram[IN + 102] == 0xFD
    assert ram[IN + 103] == 0x20


def test_enter_an_negative(ram):
    with pytest.raises(ValueError):
        Injector(ram).enter_an(-1)


def test_load_copies_to_ram_and_buffer(ram):
    inj = Injector(ram)
    payload = b"\x01\x02\x03"
    assert inj.load(payload) == payload
    assert ram[IN:IN + 3] == payload
    assert inj.data[:3] == payload


def test_load_too_long(ram):
    with pytest.raises(ValueError):
        Injector(ram).load(bytes(2000))


def test_load_outside_ram():
    with pytest.raises(ValueError):
        Injector(bytearray(0x100)).load(b"\x01")


def test_load_hex_string(ram):
    inj = Injector(ram)
    result = inj.load_hex_string("de ad ; tail")
    assert result == parse_hex_string("de ad ; tail")
    assert ram[IN:IN + len(result)] == result
    assert inj.data[:len(result)] == result
"""Writes crafted input into the calculator's input buffer in RAM."""

import string

MEM_EDIT_BASE_ADDR = 0xD000
INPUT_BUFFER_ADDR = 0xD180
DATA_BUFFER_SIZE = 1024

_MATH_IO_ADDR = 0xD112
_MATH_IO_VALUE = 0xC4
_MODE_ADDR = 0xD11E

_DIGIT_ONE = 0x31
_AN_SEPARATOR = 0xA6
_AN_TAIL = b"\xfd\x20"
_PLAIN_RUN = 100

_HEX_DIGITS = frozenset(string.hexdigits)


def parse_hex_string(text):
    """Turn text of hexadecimal digit pairs into bytes.

    Characters that do not form a pair of hex digits are skipped one at a
    time.  A ';' starts a comment that runs to the end of the line; a comment
    with no newline after it ends the input.  A NUL character ends the input.
    """
    text = text.split("\0", 1)[0]
    out = bytearray()
    i = 0
    while i + 1 < len(text):
        first, second = text[i], text[i + 1]
        if first == ";" or second == ";":
            newline = text.find("\n", i)
            if newline < 0:
                break
            i = newline + 1
            continue
        if first in _HEX_DIGITS and second in _HEX_DIGITS:
            out.append(int(first + second, 16))
            i += 2
        else:
            i += 1
    return bytes(out)


class Injector:
    """Edits a RAM image whose first byte sits at base_addr."""

    def __init__(self, ram, base_addr=MEM_EDIT_BASE_ADDR):
        self.ram = ram
        self.base_addr = base_addr
        self.data = bytearray(DATA_BUFFER_SIZE)

    def _write(self, addr, payload):
        start = addr - self.base_addr
        if start < 0 or start + len(payload) > len(self.ram):
            raise ValueError(
                f"write of {len(payload)} bytes at {addr:#06x} falls outside RAM"
            )
        self.ram[start:start + len(payload)] = payload

    def set_math_io(self):
        """Switch the calculator to Math I/O input mode."""
        self._write(_MATH_IO_ADDR, bytes([_MATH_IO_VALUE]))
        self._write(_MODE_ADDR, b"\x00")

    def enter_an(self, offset):
        """Fill the input buffer so that the payload starts at the given offset."""
        if offset < 0:
            raise ValueError("offset must not be negative")
        if offset > _PLAIN_RUN:
            filler = (
                bytes([_DIGIT_ONE]) * _PLAIN_RUN
                + bytes([_AN_SEPARATOR])
                + bytes([_DIGIT_ONE]) * (offset - _PLAIN_RUN)
            )
        else:
            filler = bytes([_DIGIT_ONE]) * offset
        self._write(INPUT_BUFFER_ADDR, filler)
        self._write(INPUT_BUFFER_ADDR + offset, _AN_TAIL)

    def _store(self, payload):
        payload = bytes(payload)
        if len(payload) > len(self.data):
            raise ValueError(f"payload longer than {len(self.data)} bytes")
        self._write(INPUT_BUFFER_ADDR, payload)
        self.data[:len(payload)] = payload
        return payload

    def load(self, data):
        """Copy data into the input buffer and keep it as the edit buffer."""
        return self._store(data)

    def load_hex_string(self, text):
        """Parse a hex string and copy its bytes into the input buffer."""
        return self._store(parse_hex_string(text))
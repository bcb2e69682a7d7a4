"""Disassembly listing with code breakpoints and single-step support."""

import re
from bisect import bisect_left
from dataclasses import dataclass
from enum import IntFlag

from calcemu import logger

_SOURCE_COLUMN = 28
_SOURCE_WIDTH = 39

# Breakpoint states kept in CodeViewer.breakpoints.
_ARMED = 1
_HIT = 2
_STEP = 3

_HEX = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]+)")


def _parse_hex_prefix(text):
    """Parse the leading hexadecimal number of text, ignoring what follows."""
    match = _HEX.match(text)
    if match is None:
        raise ValueError(f"no hexadecimal digits in {text!r}")
    sign, digits = match.groups()
    value = int(digits, 16)
    return -value if sign == "-" else value


def real_pc(segment, offset):
    """Combine a code segment and a 16-bit offset into one address."""
    return (segment << 16) | offset


@dataclass(frozen=True)
class CodeElem:
    """One line of the disassembly listing."""

    segment: int
    offset: int
    source: str = ""

    @property
    def pc(self):
        return real_pc(self.segment, self.offset)


class DebugFlag(IntFlag):
    """Conditions under which execution stops."""

    BREAKPOINT = 1
    STEP = 2
    RET_TRACE = 4


class CodeViewer:
    """Holds a disassembly listing and the code breakpoints set on it."""

    def __init__(self, path):
        self.path = path
        self.codes = []
        self.breakpoints = {}
        self.max_col = 0
        self.current_row = 0
        self.need_roll = False
        self.current_break = None
        self.selected_addr = None
        self.debug_flags = DebugFlag.BREAKPOINT
        self.is_loaded = False
        self.load_error = ""
        self.on_resume = None

        try:
            listing = open(path, encoding="utf-8", errors="replace")
        except OSError:
            self.load_error = "Disassembly file is missing: " + path
            logger.info("%s\n", self.load_error)
            return

        logger.info("Start to read code src ...\n")
        with listing:
            for raw in listing:
                line = raw[:-1] if raw.endswith("\n") else raw
                elem = self._parse_line(line)
                if elem is not None:
                    self.codes.append(elem)
        logger.info("Read src codes over!\n")
        self.is_loaded = True

    def _parse_line(self, line):
        if not line:
            return None
        self.max_col = max(self.max_col, len(line))
        if len(line) < 6 or not "0" <= line[1] <= "9":
            return None
        try:
            offset = _parse_hex_prefix(line[2:6]) & 0xFFFF
        except ValueError:
            return None
        source = line[_SOURCE_COLUMN:][:_SOURCE_WIDTH]
        return CodeElem(int(line[1]), offset, source)

    @property
    def max_row(self):
        return len(self.codes)

    @property
    def is_breaked(self):
        return self.current_break is not None

    def look_up(self, segment, offset):
        """Return (index, element) of the first line at or after the address.

        Addresses past the end of the listing map to the first line.
        """
        if not self.codes:
            raise LookupError("no code loaded")
        index = bisect_left(self.codes, real_pc(segment, offset), key=lambda e: e.pc)
        if index == len(self.codes):
            index = 0
        return index, self.codes[index]

    def _break_at(self, segment, offset, pc):
        if self.codes:
            self.current_row, _ = self.look_up(segment, offset)
            self.need_roll = True
        self.current_break = pc

    def try_trigger_breakpoint(self, segment, offset, bp_mode=True):
        """Stop at the address if a breakpoint or step mode asks for it."""
        pc = real_pc(segment, offset)
        if self.breakpoints.get(pc) == _ARMED:
            self.breakpoints[pc] = _HIT
            self._break_at(segment, offset, pc)
            return True
        if not bp_mode and self.debug_flags & (DebugFlag.STEP | DebugFlag.RET_TRACE):
            self.breakpoints[pc] = _STEP
            self._break_at(segment, offset, pc)
            return True
        return False

    def toggle_breakpoint(self, segment, offset):
        """Arm or remove the breakpoint at the address; return whether it is armed."""
        pc = real_pc(segment, offset)
        if self.breakpoints.get(pc) == _ARMED or pc == self.current_break:
            self.breakpoints.pop(pc, None)
            return False
        self.breakpoints[pc] = _ARMED
        return True

    def jump_to(self, segment, offset):
        """Scroll the listing to the address; return the row index."""
        index, elem = self.look_up(segment, offset)
        self.current_row = index
        self.need_roll = True
        self.selected_addr = elem.pc
        return index

    def jump_to_text(self, text):
        """Jump to a hexadecimal address typed by the user; None if unusable."""
        if not text:
            return None
        try:
            addr = _parse_hex_prefix(text) & 0xFFFFFFFF
        except ValueError:
            return None
        try:
            return self.jump_to((addr >> 16) & 0xFF, addr & 0xFFFF)
        except LookupError:
            return None

    def resume(self):
        """Continue after a stop, re-arming a hit breakpoint or dropping a step stop."""
        if self.current_break is not None:
            state = self.breakpoints.get(self.current_break)
            if state == _STEP:
                del self.breakpoints[self.current_break]
            elif state is not None:
                self.breakpoints[self.current_break] = _ARMED
        self.current_break = None
        if self.on_resume is not None:
            self.on_resume()

    def set_debug_flags(self, step, trace):
        flags = DebugFlag.BREAKPOINT
        if step:
            flags |= DebugFlag.STEP
        if trace:
            flags |= DebugFlag.RET_TRACE
        self.debug_flags = flags
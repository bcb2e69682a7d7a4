"""Memory access watchpoints that record which code touched an address."""

import re
from dataclasses import dataclass, field

_HEX = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]+)")


def _parse_hex_or_zero(text):
    match = _HEX.match(text)
    if match is None:
        return 0
    sign, digits = match.groups()
    value = int(digits, 16)
    return -value if sign == "-" else value


@dataclass
class MemBreakpoint:
    """A watched address and the program counters that accessed it."""

    addr: int
    enable_write: bool = False
    records: dict = field(default_factory=dict)


class MemBreakpointMonitor:
    """A list of watched addresses, at most one of which is actively listened to."""

    def __init__(self):
        self.breakpoints = []
        self.target = None

    @property
    def watched(self):
        return None if self.target is None else self.breakpoints[self.target]

    def add(self, addr):
        """Add a watchpoint on a 16-bit address and return its index."""
        self.breakpoints.append(MemBreakpoint(addr & 0xFFFF))
        return len(self.breakpoints) - 1

    def add_text(self, text):
        """Add a watchpoint from hexadecimal text; unreadable text means 0."""
        return self.add(_parse_hex_or_zero(text))

    def delete(self, index):
        bp = self.breakpoints[index]
        bp.records.clear()
        if self.target == index:
            self.target = None
        elif self.target is not None and self.target > index:
            self.target -= 1
        del self.breakpoints[index]

    def watch(self, index, write):
        """Listen for reads (write False) or writes (write True) at a watchpoint."""
        bp = self.breakpoints[index]
        bp.enable_write = bool(write)
        bp.records.clear()
        self.target = index

    def clear_records(self):
        if self.target is not None:
            self.breakpoints[self.target].records.clear()

    def try_trigger(self, addr, write, pc):
        """Record pc if the access matches the watched address and kind."""
        bp = self.watched
        if bp is None:
            return False
        if bp.addr == addr and bp.enable_write == bool(write):
            bp.records[pc] = bool(write)
            return True
        return False
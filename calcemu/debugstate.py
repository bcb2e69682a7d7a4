"""State shared by the debugger panels: RAM window, visibility, marked spans."""

import threading

from calcemu.emulator import HardwareId

MEM_EDIT_BASE_ADDR = 0xD000
MEM_EDIT_MEM_SIZE = 0x2800
_EMULATOR_EXTRA_RAM = 0x100

_RAM_WINDOWS = {
    HardwareId.ES_PLUS: (0x8000, 0x0E00),
    HardwareId.CLASSWIZ: (0xD000, 0x2000),
    HardwareId.CLASSWIZ_II: (0x9000, 0x6000),
}


def ram_window(hardware_id, real_hardware):
    """Return (start, length) of the RAM shown in the memory editor."""
    try:
        key = HardwareId(hardware_id)
    except ValueError:
        key = None
    start, length = _RAM_WINDOWS.get(key, (MEM_EDIT_BASE_ADDR, MEM_EDIT_MEM_SIZE))
    if not real_hardware:
        length += _EMULATOR_EXTRA_RAM
    return start, length


class DebugState:
    """What the debugger window shows and which memory spans are highlighted."""

    def __init__(self, hardware_id, real_hardware):
        self.ram_start, self.ram_length = ram_window(hardware_id, real_hardware)
        self.visible = False
        self.show_memory = False
        self.show_debug_components = False
        self._spans_lock = threading.Lock()
        self._marked_spans = None

    def toggle_visible(self):
        """Flip visibility and return the new state."""
        self.visible = not self.visible
        return self.visible

    def update_marked_spans(self, spans):
        """Replace the highlighted spans; None clears them."""
        copy = None if spans is None else list(spans)
        with self._spans_lock:
            self._marked_spans = copy

    def marked_spans(self):
        """Return a copy of the highlighted spans, or None."""
        with self._spans_lock:
            return None if self._marked_spans is None else list(self._marked_spans)
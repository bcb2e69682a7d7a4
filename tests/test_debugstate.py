import threading

from calcemu.debugstate import DebugState, ram_window
from calcemu.emulator import HardwareId


def test_es_plus_window():
    assert ram_window(HardwareId.ES_PLUS, True) == (0x8000, 0x0E00)


def test_classwiz_window():
    assert ram_window(HardwareId.CLASSWIZ, True) == (0xD000, 0x2000)


def test_classwiz_ii_window():
    assert ram_window(HardwareId.CLASSWIZ_II, True) == (0x9000, 0x6000)


def test_unknown_hardware_uses_default():
    assert ram_window(99, True) == (0xD000, 0x2800)


def test_emulated_hardware_adds_extra_ram():
    for hw in HardwareId:
        start, length = ram_window(hw, True)
        assert ram_window(hw, False) == (start, length + 0x100)


def test_state_uses_window():
    state = DebugState(int(HardwareId.CLASSWIZ), True)
    assert (state.ram_start, state.ram_length) == ram_window(HardwareId.CLASSWIZ, True)


def test_toggle_visible():
    state = DebugState(HardwareId.ES_PLUS, True)
    assert state.visible is False
    assert state.toggle_visible() is True
    assert state.toggle_visible() is False
    assert state.visible is False


def test_marked_spans_default_none():
    assert DebugState(HardwareId.ES_PLUS, True).marked_spans() is None


def test_marked_spans_are_copied():
    state = DebugState(HardwareId.ES_PLUS, True)
    spans = [(0x8000, 4)]
    state.update_marked_spans(spans)
    spans.append((0x9000, 1))
    got = state.marked_spans()
    assert got == [(0x8000, 4)]
    got.clear()
    assert state.marked_spans() == [(0x8000, 4)]


def test_marked_spans_cleared():
    state = DebugState(HardwareId.ES_PLUS, True)
    state.update_marked_spans([(1, 2)])
    state.update_marked_spans(None)
    assert state.marked_spans() is None


def test_marked_spans_from_threads():
    state = DebugState(HardwareId.ES_PLUS, True)
    threads = [
        threading.Thread(target=state.update_marked_spans, args=([(i, 1)],))
        for i in range(8)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    result = state.marked_spans()
    assert len(result) == 1
    assert result[0][0] in range(8)
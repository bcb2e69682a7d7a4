import pytest

from calcemu.membreakpoint import MemBreakpoint, MemBreakpointMonitor


@pytest.fixture
def monitor():
    m = MemBreakpointMonitor()
    m.add(0xD180)
    m.add(0xD112)
    return m


def test_add_returns_index_and_masks(monitor):
    index = monitor.add(0x1D000)
    assert index == len(monitor.breakpoints) - 1
    assert monitor.breakpoints[index].addr == 0xD000


def test_add_text(monitor):
    index = monitor.add_text("d180")
    assert monitor.breakpoints[index].addr == 0xD180
    bad = monitor.add_text("zz")
    assert monitor.breakpoints[bad].addr == 0


def test_default_breakpoint():
    bp = MemBreakpoint(0xD000)
    assert bp.enable_write is False
    assert bp.records == {}


def test_no_target_does_not_trigger(monitor):
    assert monitor.try_trigger(0xD180, False, 0x1234) is False
    assert monitor.watched is None


def test_read_watch_records(monitor):
    monitor.watch(0, False)
    assert monitor.try_trigger(0xD180, False, 0x12345) is True
    assert monitor.try_trigger(0xD180, True, 0x2222) is False
    assert monitor.try_trigger(0xD112, False, 0x3333) is False
    assert monitor.watched.records == {0x12345: False}


def test_write_watch_records(monitor):
    monitor.watch(1, True)
    assert monitor.try_trigger(0xD112, True, 0x4444) is True
    assert monitor.watched.records == {0x4444: True}


def test_watch_clears_records(monitor):
    monitor.watch(0, False)
    monitor.try_trigger(0xD180, False, 0x10)
    monitor.watch(0, True)
    assert monitor.breakpoints[0].records == {}


def test_clear_records(monitor):
    monitor.watch(0, False)
    monitor.try_trigger(0xD180, False, 0x10)
    monitor.clear_records()
    assert monitor.watched.records == {}


def test_delete_target_stops_listening(monitor):
    monitor.watch(1, False)
    monitor.delete(1)
    assert monitor.target is None
    assert [bp.addr for bp in monitor.breakpoints] == [0xD180]


def test_delete_earlier_keeps_target(monitor):
    monitor.watch(1, False)
    monitor.delete(0)
    assert monitor.watched.addr == 0xD112


def test_watch_invalid_index(monitor):
    with pytest.raises(IndexError):
        monitor.watch(5, False)
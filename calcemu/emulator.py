"""Emulator core: timing, tick hooks, pause control and window geometry."""

import re
import threading
import time
from enum import IntEnum

from calcemu import logger
from calcemu.fairmutex import FairRecursiveMutex

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1

_NUMBER = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")


class HardwareId(IntEnum):
    """Supported calculator hardware families."""

    ES_PLUS = 3
    CLASSWIZ = 4
    CLASSWIZ_II = 5


class CycleCounter:
    """Tracks how many CPU cycles must be emulated per timer interval.

    get_delta is expected to be called once every timer_interval milliseconds.
    """

    def __init__(self):
        self.ticks_now = 0
        self.cycles_emulated = 0
        self.cycles_per_second = 0
        self.timer_interval = 0

    def setup(self, cycles_per_second, timer_interval):
        self.ticks_now = 0
        self.cycles_emulated = 0
        self.cycles_per_second = cycles_per_second
        self.timer_interval = timer_interval

    def reset(self):
        self.ticks_now = 0
        self.cycles_emulated = 0

    def get_delta(self):
        self.ticks_now += self.timer_interval
        target = self.ticks_now * self.cycles_per_second // 1000
        diff = target - self.cycles_emulated
        self.cycles_emulated = target
        return diff


def constrain_window_size(base_width, base_height, requested_width, requested_height):
    """Return the size closest to the request that keeps the base aspect ratio."""
    if requested_width <= 0 or requested_height <= 0:
        return requested_width, requested_height
    aspect = base_width / base_height
    height_from_width = int(requested_width / aspect + 0.5)
    width_from_height = int(requested_height * aspect + 0.5)
    delta_height = abs(height_from_width - requested_height)
    delta_width = abs(width_from_height - requested_width)
    if delta_height <= delta_width:
        return requested_width, height_from_width
    return width_from_height, requested_height


def parse_dimension(name, text):
    """Parse an integer with C-style base prefixes (0x hex, leading 0 octal)."""
    match = _NUMBER.match(text)
    if match is None:
        raise ValueError("invalid width/height parameter")
    sign, digits = match.groups()
    if digits[:2] in ("0x", "0X"):
        value = int(digits[2:], 16)
    elif digits.startswith("0"):
        value = int(digits, 8)
    else:
        value = int(digits)
    if sign == "-":
        value = -value
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError("out of range width/height parameter")
    if match.end() != len(text):
        raise ValueError(f"{name} parameter has extraneous trailing characters")
    return value


class Emulator:
    """Drives a chipset in real time and exposes control hooks.

    The chipset must provide setup(), setup_internals(), reset(), tick() and
    require_frame().  The model info mapping must hold "hardware_id" and
    "rsd_interface" (a mapping with a "dest" of (x, y, w, h)).
    """

    def __init__(self, argv_map, chipset, model_info, paused=False):
        self.access_mx = FairRecursiveMutex()
        self.argv_map = argv_map
        self.chipset = chipset
        self.model_info = model_info
        self.paused = paused
        self.running = True
        self.model_path = argv_map.get("model", "")
        self.pre_tick_hook = None
        self.post_tick_hook = None
        self.on_frame_request = None
        self._thread = None
        self._applying_size_constraint = False

        with self.access_mx:
            raw_id = model_info["hardware_id"]
            try:
                self.hardware_id = HardwareId(raw_id)
            except ValueError:
                raise ValueError(f"Unknown hardware id {raw_id}") from None

            if self.hardware_id is HardwareId.ES_PLUS:
                cycles_per_second = 128 * 1024
            elif self.hardware_id is HardwareId.CLASSWIZ:
                cycles_per_second = 1024 * 1024 * 2
            else:
                cycles_per_second = 2048 * 1024
            self.timer_interval = 10 if self.hardware_id is HardwareId.CLASSWIZ_II else 20

            self.cycles = CycleCounter()
            self.cycles.setup(cycles_per_second, self.timer_interval)
            chipset.setup()

            x, y, w, h = model_info["rsd_interface"]["dest"]
            if x != 0 or y != 0:
                raise ValueError("rsd_interface must have dest x and y coordinate zero")
            self.base_width = w
            self.base_height = h
            self.width = w
            self.height = h
            if "width" in argv_map:
                self.width = parse_dimension("width", argv_map["width"])
            if "height" in argv_map:
                self.height = parse_dimension("height", argv_map["height"])

            chipset.setup_internals()
            self.cycles.reset()
            chipset.reset()

            if "paused" in argv_map:
                self.set_paused(True)
            self.pause_on_mem_error = "pause_on_mem_error" in argv_map

    @property
    def cycles_per_second(self):
        return self.cycles.cycles_per_second

    def start(self):
        """Start the background thread that calls timer_callback periodically."""
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self):
        interval = self.timer_interval / 1000
        iteration_end = time.monotonic()
        while True:
            with self.access_mx:
                if not self.running:
                    break
                self.timer_callback()
            iteration_end += interval
            now = time.monotonic()
            if iteration_end > now:
                time.sleep(iteration_end - now)
            else:
                iteration_end = now

    def join(self):
        """Wait for the background thread to finish."""
        if self._thread is not None:
            self._thread.join()

    def _run_hook(self, hook, label):
        try:
            hook()
        except Exception as exc:
            logger.info("%s hook failed: %s\n", label, exc)
            logger.info("  %s hook unregistered\n", label)
            return False
        return True

    def tick(self):
        if self.pre_tick_hook is not None:
            if not self._run_hook(self.pre_tick_hook, "pre-tick"):
                self.pre_tick_hook = None
        self.chipset.tick()
        if self.post_tick_hook is not None:
            if not self._run_hook(self.post_tick_hook, "post-tick"):
                self.post_tick_hook = None

    def timer_callback(self):
        with self.access_mx:
            for _ in range(self.cycles.get_delta()):
                if not self.paused:
                    self.tick()
            if self.chipset.require_frame() and self.on_frame_request is not None:
                self.on_frame_request()

    def shutdown(self):
        with self.access_mx:
            self.running = False

    def handle_memory_error(self):
        if self.pause_on_mem_error:
            logger.info("execution paused due to memory error\n")
            self.set_paused(True)

    def set_paused(self, paused):
        self.paused = bool(paused)

    def set_pre_tick(self, hook):
        self.pre_tick_hook = hook

    def set_post_tick(self, hook):
        self.post_tick_hook = hook

    def window_resize(self, width, height):
        """Apply a new window size, constrained to the interface aspect ratio."""
        with self.access_mx:
            new_width, new_height = constrain_window_size(
                self.base_width, self.base_height, width, height
            )
            if not self._applying_size_constraint and (new_width, new_height) != (width, height):
                self._applying_size_constraint = True
                self._applying_size_constraint = False
            self.width = new_width
            self.height = new_height
            return new_width, new_height

    def scale_mouse_position(self, x, y):
        """Map window coordinates back to interface coordinates."""
        with self.access_mx:
            return (
                int(x * (self.base_width / self.width)),
                int(y * (self.base_height / self.height)),
            )

    def model_file_path(self, relative_path):
        return self.model_path + "/" + relative_path

    def is_resizable(self):
        return self.argv_map.get("resizable") != "0"
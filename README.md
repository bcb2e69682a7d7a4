# calcemu

This package holds the parts of a scientific-calculator emulator that do not draw anything:

- cycle timing and the tick loop,
- a fair recursive lock,
- the state behind the debugger panels (code breakpoints, memory watchpoints, register editing, input injection).

It has no dependencies outside the standard library.

## Installing

```
pip install .
pip install ".[test]"   # adds pytest, for running the tests
```

## What is inside

### `calcemu.emulator`

- `Emulator(argv_map, chipset, model_info, paused=False)` drives a chipset you supply.
  - The chipset object needs `setup()`, `setup_internals()`, `reset()`, `tick()` and `require_frame()`.
  - `model_info` needs a `"hardware_id"` key and an `"rsd_interface"` mapping whose `"dest"` is `(x, y, w, h)`. Both `x` and `y` must be zero.
  - `argv_map` options:
    - `model` is the model directory used by `model_file_path`.
    - `width` and `height` set the window size.
    - `paused` starts the emulator paused.
    - `pause_on_mem_error` makes `handle_memory_error` pause execution.
    - `resizable` set to `"0"` makes `is_resizable` return false.
  - `start()` runs `timer_callback` on a background thread every `timer_interval` ms: 20 ms, or 10 ms for `CLASSWIZ_II`. The thread stops after `shutdown()`. `join()` waits for it.
  - `timer_callback()` does these things:
    - It runs as many `tick()` calls as the cycle counter asks for, unless the emulator is paused.
    - If the chipset asks for a frame, it calls `on_frame_request` when that is set.
  - `set_pre_tick(hook)` and `set_post_tick(hook)` register callables that run around each chipset tick. A hook that raises is logged and unregistered.
  - `window_resize(width, height)` keeps the interface's aspect ratio and returns the size it applied.
  - `scale_mouse_position(x, y)` maps window coordinates back to interface coordinates.
- `CycleCounter` works out how many CPU cycles each timer interval must emulate.
- `HardwareId` names the supported families: `ES_PLUS`, `CLASSWIZ` and `CLASSWIZ_II`.
- `constrain_window_size(base_width, base_height, requested_width, requested_height)`.
- `parse_dimension(name, text)` parses a 32-bit integer with C-style prefixes: `0x` for hex, a leading `0` for octal. It raises `ValueError` on bad or trailing input.

### `calcemu.fairmutex`

- `FairRecursiveMutex` is a recursive lock handed to waiting threads in arrival order.
- It can be used as a context manager.

### `calcemu.logger`

- `info(fmt, *args)` writes a printf-style message to standard output.

### `calcemu.codeviewer`

- `CodeViewer(path)` loads a disassembly listing into `CodeElem` entries.
  - A missing file sets `load_error` instead of raising.
  - `look_up` finds an address.
  - `try_trigger_breakpoint` stops on armed breakpoints, or on every address in step/trace mode (`DebugFlag`). `toggle_breakpoint` arms or removes a breakpoint.
  - `jump_to` and `jump_to_text` move to an address.
  - `resume()` continues after a stop.
- `real_pc(segment, offset)` combines a segment and an offset into one address.

### `calcemu.membreakpoint`

- `MemBreakpointMonitor` keeps a list of `MemBreakpoint` addresses.
- It listens to one of them for reads or writes (`watch`).
- `try_trigger` records the program counters that touched the address.

### `calcemu.injector`

- `Injector(ram, base_addr=0xD000)` edits a RAM `bytearray`. It has these methods:
  - `set_math_io()`
  - `enter_an(offset)`
  - `load(data)`
  - `load_hex_string(text)`
- Writes that would fall outside the RAM raise `ValueError`.
- `parse_hex_string(text)` turns pairs of hex digits into bytes. A `;` starts a comment that runs to the end of the line.

### `calcemu.registers`

- `RegisterSnapshot.from_cpu(cpu)` captures the registers as hex text: R0–R15, PC, LR, SP, EA and PSW.
- `apply_to(cpu)` writes the edited text back.
- `extended_registers(cpu)` returns the eight 16-bit ERn pairs.

### `calcemu.debugstate`

- `ram_window(hardware_id, real_hardware)` gives the RAM range shown for each hardware family.
- `DebugState` holds the debugger window's visibility and the highlighted memory spans. Access to the spans is thread-safe.

## Example

```python
from calcemu.emulator import CycleCounter, constrain_window_size

counter = CycleCounter()
counter.setup(128 * 1024, 20)
print(counter.get_delta())            # 2621 cycles in the first 20 ms

print(constrain_window_size(400, 800, 500, 800))   # (400, 800)
```

```python
from calcemu.injector import parse_hex_string

print(parse_hex_string("31 32 ; comment\nfd20"))   # b'12\xfd '
```

## What this package does not do

The package provides no window, rendering or GUI panels. `Emulator` only tracks window sizes and asks for frames through `on_frame_request`.

It contains no CPU, memory or chipset emulation; you pass in a chipset object.

It does not load or run model definition files or user scripts. Tick hooks are plain Python callables.

There is no command-line program.

## Running the tests

```
pytest
```
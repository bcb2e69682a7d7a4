"""Timing, locking and debugger state for a scientific-calculator emulator."""

__version__ = "0.1.0"
__all__ = [
    "codeviewer",
    "debugstate",
    "emulator",
    "fairmutex",
    "injector",
    "logger",
    "membreakpoint",
    "registers",
]
"""Minimal informational logging to standard output."""

import sys


def info(fmt, *args):
    """Write a printf-style message to standard output.

    The message should end with a newline; none is appended.
    """
    text = fmt % args if args else fmt
    sys.stdout.write(text)
    sys.stdout.flush()
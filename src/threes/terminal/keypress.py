"""Raw single-key reads from a POSIX terminal.

Arrow keys arrive as three characters (ESC, '[', letter); everything else
is returned as the single character typed. The terminal is switched to raw
mode for each read, so Ctrl-C comes back as '\\x03' instead of a signal.
"""
import os
import select
import sys
import termios
import tty
from contextlib import contextmanager
from typing import IO, Iterator, List

ESCAPE = '\x1b'
# Introducers that follow ESC in arrow-key sequences (normal and application cursor mode).
SEQUENCE_INTRODUCERS = ('[', 'O')
# How long to wait for the rest of an escape sequence before treating ESC as a lone key.
ESCAPE_TIMEOUT = 0.05


@contextmanager
def raw_mode(fd: int) -> Iterator[None]:
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


class KeyReader:
    """Callable that blocks for one key press; returns '' when the stream is exhausted.

    A character read while probing for an escape sequence that turns out not
    to belong to one is held back and returned by the next call.
    """

    def __init__(self, stream: IO[str] | None = None):
        self._stream = stream
        self._held: List[str] = []

    def _fd(self) -> int:
        return (self._stream if self._stream is not None else sys.stdin).fileno()

    @staticmethod
    def _read_char(fd: int) -> str:
        data = os.read(fd, 1)
        return data.decode('latin-1') if data else ''

    @staticmethod
    def _available(fd: int) -> bool:
        ready, _, _ = select.select([fd], [], [], ESCAPE_TIMEOUT)
        return bool(ready)

    def __call__(self) -> str:
        if self._held:
            return self._held.pop(0)
        fd = self._fd()
        with raw_mode(fd):
            key = self._read_char(fd)
            if key != ESCAPE or not self._available(fd):
                return key
            follow = self._read_char(fd)
            if follow not in SEQUENCE_INTRODUCERS:
                if follow:
                    self._held.append(follow)
                return key
            key += follow
            if self._available(fd):
                key += self._read_char(fd)
        return key


read_key = KeyReader()

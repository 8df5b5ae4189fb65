"""Buffered, restart-safe reading and complete writing over sockets and files."""

from __future__ import annotations

import os
from typing import Any

RIO_BUFSIZE = 8192
MAXLINE = 8192
MAXBUF = 8192
LISTENQ = 1024


def _raw_read(source: Any, size: int) -> bytes:
    """Read at most ``size`` bytes from a socket, file object or descriptor."""
    if isinstance(source, int):
        return os.read(source, size)
    if hasattr(source, "recv"):
        return source.recv(size)
    reader = getattr(source, "read1", None) or source.read
    data = reader(size)
    return b"" if data is None else bytes(data)


class RobustReader:
    """Reads lines and byte counts from a source through an internal buffer.

    The source may be a socket (anything with ``recv``), a binary file
    object (anything with ``read``) or an integer file descriptor.
    Reads interrupted by signals are retried.
    """

    def __init__(self, source: Any) -> None:
        self.source = source
        self._buf = b""
        self._pos = 0

    def _fill(self) -> bool:
        """Make sure unread bytes are buffered; return False at end of input."""
        while self._pos >= len(self._buf):
            try:
                data = _raw_read(self.source, RIO_BUFSIZE)
            except InterruptedError:
                continue
            if not data:
                return False
            self._buf = data
            self._pos = 0
        return True

    def readline(self, maxlen: int = MAXLINE) -> bytes:
        """Read one line of at most ``maxlen - 1`` bytes, newline included.

        Returns ``b""`` at end of input when nothing was read.
        """
        limit = maxlen - 1
        out = bytearray()
        while len(out) < limit:
            if not self._fill():
                break
            want = limit - len(out)
            window_end = min(self._pos + want, len(self._buf))
            newline = self._buf.find(b"\n", self._pos, window_end)
            stop = newline + 1 if newline >= 0 else window_end
            out += self._buf[self._pos:stop]
            self._pos = stop
            if newline >= 0:
                break
        return bytes(out)

    def readn(self, n: int) -> bytes:
        """Read ``n`` bytes, or fewer if the input ends first."""
        out = bytearray()
        while len(out) < n:
            if not self._fill():
                break
            take = min(n - len(out), len(self._buf) - self._pos)
            out += self._buf[self._pos:self._pos + take]
            self._pos += take
        return bytes(out)

    def __iter__(self):
        """Yield lines until end of input."""
        while True:
            line = self.readline()
            if not line:
                return
            yield line


def write_all(sock: Any, data: bytes) -> int:
    """Write every byte of ``data`` to a socket, file object or descriptor.

    Returns the number of bytes written; errors propagate as ``OSError``.
    """
    view = memoryview(bytes(data))
    if hasattr(sock, "sendall"):
        sock.sendall(view)
        return len(view)
    written = 0
    while written < len(view):
        try:
            if isinstance(sock, int):
                count = os.write(sock, view[written:])
            else:
                count = sock.write(view[written:])
        except InterruptedError:
            continue
        if count is None:
            count = len(view) - written
        if count <= 0:
            raise OSError("write made no progress")
        written += count
    return written
"""
One established TCP connection: send the request, drain the response.
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Tuple

from errors import OutputError, PartialSendError, ReceiveError, SendError
from message import MAX_BUFFER

log = logging.getLogger(__name__)


class Connection:
    """Owns one connected socket until close()."""

    # ------------------------------------------------------------------
    # Construction / state
    # ------------------------------------------------------------------

    def __init__(self, sock, remote_addr: Tuple[str, int]):
        self._sock = sock
        self.remote_addr = remote_addr
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def send(self, data: bytes) -> int:
        """
        Write *data* with a single send() call.

        A short write is reported as PartialSendError rather than retried.
        """
        total = len(data)
        try:
            sent = self._sock.send(data)
        except OSError as exc:
            raise SendError(str(exc) or "send failed", exc.errno) from exc

        if sent < total:
            raise PartialSendError(sent, total)

        log.info("Sent %d bytes", sent)
        return sent

    def receive_into(self, sink: BinaryIO, bufsize: int = MAX_BUFFER) -> int:
        """
        Copy everything the peer sends to *sink* until it closes the stream.

        Each chunk is flushed as soon as it is written. Returns the number of
        bytes received.
        """
        if bufsize <= 0:
            raise ValueError("bufsize must be positive")
        buf = bytearray(bufsize)
        view = memoryview(buf)
        total = 0

        while True:
            try:
                n = self._sock.recv_into(buf)
            except OSError as exc:
                raise ReceiveError(str(exc) or "receive failed", exc.errno) from exc

            if n == 0:
                break

            log.debug("Received %d bytes", n)
            self._forward(sink, view[:n])
            total += n

        log.info("Connection closed by server (%d bytes received)", total)
        return total

    def close(self):
        if self._closed:
            return
        self._closed = True
        self._sock.close()
        log.debug("Socket to %s:%d closed", *self.remote_addr[:2])

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    @staticmethod
    def _forward(sink: BinaryIO, chunk: memoryview):
        try:
            written = sink.write(chunk)
            sink.flush()
        except (OSError, ValueError) as exc:
            raise OutputError(f"error writing output: {exc}",
                              getattr(exc, "errno", None)) from exc
        if written is not None and written < len(chunk):
            raise OutputError(f"short write to output: {written} of {len(chunk)} bytes")

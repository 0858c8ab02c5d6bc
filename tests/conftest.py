"""Loopback listeners for exercising the client against a real socket."""

from __future__ import annotations

import socket
import threading
from typing import Callable, List, Optional

import pytest


class Listener:
    """Accepts connections on 127.0.0.1 and hands each to *handler*."""

    def __init__(self, handler: Callable[[socket.socket], None], accept_count: int = 1):
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.listen()
        self._sock.settimeout(10)
        self.port = self._sock.getsockname()[1]
        self.received: List[bytes] = []
        self.errors: List[BaseException] = []
        self._handler = handler
        self._thread = threading.Thread(target=self._serve, args=(accept_count,), daemon=True)
        self._thread.start()

    def _serve(self, accept_count: int):
        for _ in range(accept_count):
            try:
                conn, _addr = self._sock.accept()
            except OSError as exc:
                self.errors.append(exc)
                return
            with conn:
                conn.settimeout(10)
                try:
                    self._handler(conn, self)
                except OSError as exc:
                    self.errors.append(exc)

    def join(self, timeout: Optional[float] = 10):
        self._thread.join(timeout)

    def close(self):
        self._sock.close()


def read_request(conn: socket.socket) -> bytes:
    """Read up to the CRLF that terminates the client's request."""
    data = b""
    while not data.endswith(b"\r\n"):
        chunk = conn.recv(1024)
        if not chunk:
            break
        data += chunk
    return data


@pytest.fixture
def listener():
    """Factory fixture: ``listener(handler, accept_count=1)``."""
    started: List[Listener] = []

    def start(handler, accept_count: int = 1) -> Listener:
        lst = Listener(handler, accept_count)
        started.append(lst)
        return lst

    yield start
    for lst in started:
        lst.close()
        lst.join()


@pytest.fixture
def closed_port() -> int:
    """A loopback port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port

"""
Name resolution and connection establishment for the one-shot client.
"""

from __future__ import annotations

import logging
import socket
from typing import List, NamedTuple, Sequence, Tuple, Union

from connection import Connection
from errors import ConnectError, ResolutionError
from message import CONNECT_TIMEOUT

log = logging.getLogger(__name__)


class Endpoint(NamedTuple):
    """One attemptable address row from getaddrinfo()."""

    family: int
    type: int
    proto: int
    sockaddr: Tuple[str, int]

    def __str__(self) -> str:
        return "%s:%d" % self.sockaddr[:2]


# ------------------------------------------------------------------  resolver
def resolve(host: str, port: Union[str, int]) -> List[Endpoint]:
    """Resolve *host*/*port* to IPv4 stream endpoints, in resolver order."""
    log.info("Resolving host %s:%s", host, port)
    try:
        rows = socket.getaddrinfo(host, port, socket.AF_INET,
                                  socket.SOCK_STREAM, socket.IPPROTO_TCP)
    except socket.gaierror as exc:
        raise ResolutionError(exc.strerror or str(exc), exc.errno) from exc
    except (OSError, UnicodeError) as exc:
        raise ResolutionError(str(exc), getattr(exc, "errno", None)) from exc

    endpoints = [Endpoint(family, type_, proto, sockaddr)
                 for family, type_, proto, _canon, sockaddr in rows]
    if not endpoints:
        raise ResolutionError(f"no matching endpoint for {host}:{port}")
    return endpoints


class TCPSocket:
    """Connector: opens the first candidate endpoint that accepts."""

    def __init__(self, timeout: float = CONNECT_TIMEOUT):
        self.timeout = timeout

    def connect(self, host: str, port: Union[str, int]) -> Connection:
        return self.connect_endpoints(resolve(host, port))

    def connect_endpoints(self, endpoints: Sequence[Endpoint]) -> Connection:
        last_exc: OSError | None = None

        for ep in endpoints:
            try:
                sock = socket.socket(ep.family, ep.type, ep.proto)
            except OSError as exc:
                log.warning("Socket creation failed: %s", exc.errno)
                last_exc = exc
                continue

            try:
                # bounds connect() as well as every later send()/recv()
                sock.settimeout(self.timeout)
                log.info("Attempting to connect to %s...", ep)
                sock.connect(ep.sockaddr)
            except OSError as exc:
                log.warning("Connection to %s failed: %s", ep, _describe(exc))
                sock.close()
                last_exc = exc
                continue

            log.info("Connected to %s", ep)
            return Connection(sock, ep.sockaddr)

        code = last_exc.errno if last_exc is not None else None
        raise ConnectError("Unable to connect to server", code) from last_exc


def _describe(exc: OSError) -> str:
    if exc.errno is not None:
        return str(exc.errno)
    return str(exc) or type(exc).__name__

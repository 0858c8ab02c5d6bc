"""
One-shot TCP client: connect, send the fixed message, stream the reply.

Usage:
  python client.py [host [port]]
"""

from __future__ import annotations

import logging
import sys
from typing import BinaryIO, List, Optional

from errors import ClientError
from message import CONNECT_TIMEOUT, DEFAULT_HOST, DEFAULT_PORT, MESSAGE
from tcp_socket import TCPSocket

log = logging.getLogger(__name__)

USAGE = "Usage: python client.py [host [port]]"


def run(host: str, port: str, out: BinaryIO, timeout: float = CONNECT_TIMEOUT) -> int:
    """Perform one exchange with *host*:*port*; return the exit status."""
    try:
        conn = TCPSocket(timeout).connect(host, port)
        with conn:
            conn.send(MESSAGE.to_bytes())
            conn.receive_into(out)
    except ClientError as exc:
        log.error("%s", exc)
        return 1
    return 0


def main(argv: Optional[List[str]] = None, out: Optional[BinaryIO] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) > 2:
        print(USAGE, file=sys.stderr)
        return 1

    host = args[0] if len(args) > 0 else DEFAULT_HOST
    port = args[1] if len(args) > 1 else DEFAULT_PORT

    logging.basicConfig(stream=sys.stderr,
                        level=logging.INFO,
                        format="[%(asctime)s] %(message)s",
                        datefmt="%Y-%m-%d %H:%M:%S")

    return run(host, port, sys.stdout.buffer if out is None else out)


# ---------------------------------------------------------------------------  entry-point
if __name__ == "__main__":
    raise SystemExit(main())

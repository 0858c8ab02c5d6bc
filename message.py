"""Constants and the fixed request sent to the server."""

# === Constants ===

DEFAULT_HOST = "localhost"
DEFAULT_PORT = "60000"
MAX_BUFFER = 4096  # bytes per recv
CONNECT_TIMEOUT = 5.0  # seconds, applies to connect, send and recv

_TEXT = "arafat shaik"
_EOL = b"\r\n"


class Message:

    __slots__ = ("_payload",)

    def __init__(self, text: str):
        payload = text.encode("ascii") + _EOL
        if len(payload) > MAX_BUFFER:
            raise ValueError("Message too long")
        self._payload = payload

    def to_bytes(self) -> bytes:
        return self._payload

    def __len__(self) -> int:
        return len(self._payload)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Message):
            return NotImplemented
        return self._payload == other._payload

    def __hash__(self) -> int:
        return hash(self._payload)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Message {self._payload!r} len={len(self._payload)}>"


MESSAGE = Message(_TEXT)

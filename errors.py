"""
Fatal client errors. Every one of these ends the run with exit status 1.
"""

from __future__ import annotations


class ClientError(Exception):
    """Base class; *code* is the errno or resolver code when one is known."""

    operation = "client"

    def __init__(self, reason: str, code: int | None = None):
        super().__init__(reason)
        self.reason = reason
        self.code = code

    def __str__(self) -> str:
        if self.code is None:
            return f"{self.operation}: {self.reason}"
        return f"{self.operation}: {self.reason} (code {self.code})"


class ResolutionError(ClientError):
    operation = "resolve"


class ConnectError(ClientError):
    operation = "connect"


class SendError(ClientError):
    operation = "send"


class PartialSendError(SendError):

    def __init__(self, sent: int, total: int):
        super().__init__(f"partial send: {sent} of {total} bytes")
        self.sent = sent
        self.total = total


class ReceiveError(ClientError):
    operation = "receive"


class OutputError(ClientError):
    operation = "output"

"""Exception hierarchy for the eth-connector client."""

from typing import Any

_PREVIEW_BYTES = 32


class ConnectorError(Exception):
    """Base exception for all eth-connector client errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class EncodingError(ConnectorError):
    """Raised when an argument value cannot be represented on the wire."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class TransportError(ConnectorError):
    """Raised when submitting a request to the RPC endpoint fails."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint
        self.status_code = status_code


class DecodingError(ConnectorError):
    """Raised when response bytes do not match the expected result shape."""

    def __init__(
        self,
        message: str,
        expected: str | None = None,
        raw: bytes | None = None,
        details: dict | None = None,
    ):
        details = dict(details or {})
        if raw is not None:
            details.setdefault("length", len(raw))
            details.setdefault("preview", describe_bytes(raw))
        super().__init__(message, details)
        self.expected = expected
        self.raw = raw

    def __str__(self) -> str:
        if self.raw is None:
            return self.message
        return f"{self.message} (expected={self.expected}, raw={describe_bytes(self.raw)})"


class ConfigurationError(ConnectorError):
    """Raised when client configuration is missing or invalid."""

    def __init__(self, message: str, field: str | None = None, details: dict | None = None):
        super().__init__(message, details)
        self.field = field


def describe_bytes(raw: bytes) -> str:
    """Short hex rendering of a byte payload for error messages."""

    head = bytes(raw[:_PREVIEW_BYTES]).hex()
    if len(raw) > _PREVIEW_BYTES:
        return f"0x{head}... ({len(raw)} bytes)"
    return f"0x{head} ({len(raw)} bytes)"

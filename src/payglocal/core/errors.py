"""
Exception hierarchy raised by the PayGlocal client.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

__all__ = [
    "PayGlocalError",
    "ConfigError",
    "CryptoError",
    "InvalidKeyFormatError",
    "ValidationError",
    "MissingFieldError",
    "InvalidOperationTypeError",
    "UnrecognizedFieldError",
    "InvalidTypeError",
    "RequestTimeoutError",
    "TransportError",
    "EmptyResponseError",
]


class PayGlocalError(Exception):
    """Base class for every error surfaced by the SDK."""


class ConfigError(PayGlocalError):
    """Raised when the supplied configuration is invalid."""


class CryptoError(PayGlocalError):
    """Raised when JWE encryption or JWS signing fails."""


class InvalidKeyFormatError(CryptoError):
    """Raised when a PEM string cannot be parsed into an RSA key."""


class ValidationError(PayGlocalError):
    """Raised when a payload does not satisfy the operation's rules."""

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class MissingFieldError(ValidationError):
    def __init__(self, field: str) -> None:
        super().__init__(f"Missing required field: {field}", field=field)


class InvalidOperationTypeError(ValidationError):
    def __init__(self, field: str, value: Any, allowed: Iterable[Any]) -> None:
        self.value = value
        self.allowed = tuple(allowed)
        expected = ", ".join(str(item) for item in self.allowed)
        super().__init__(
            f"Invalid value for {field}: {value!r}. Expected one of: {expected}",
            field=field,
        )


class UnrecognizedFieldError(ValidationError):
    def __init__(self, field: str) -> None:
        super().__init__(f'Unrecognized field "{field}"', field=field)


class InvalidTypeError(ValidationError):
    def __init__(self, field: str, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid type for {field}: expected {expected}, got {actual}",
            field=field,
        )


class RequestTimeoutError(PayGlocalError):
    """Raised when the gateway does not answer within the request deadline."""


class TransportError(PayGlocalError):
    """Raised for connection failures and non-success HTTP statuses."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class EmptyResponseError(PayGlocalError):
    """Raised when the gateway answers with an empty body."""

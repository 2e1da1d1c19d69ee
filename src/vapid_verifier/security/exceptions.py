"""
Custom exceptions for key encoding and token verification.
"""


class VapidError(Exception):
    """Base exception for all key and token errors."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class KeyEncodingError(VapidError):
    """Raw key material could not be turned into a key container."""
    pass


class InvalidKeyError(KeyEncodingError):
    """Key bytes have the right length but are not a usable P-256 point."""
    pass


class InvalidKeyLengthError(KeyEncodingError):
    """Raw key bytes have the wrong size for the operation."""

    def __init__(self, kind: str, expected: int, actual: int):
        super().__init__(f"Invalid {kind} length: expected {expected} bytes, got {actual}")
        self.expected = expected
        self.actual = actual


class MalformedKeyEncodingError(KeyEncodingError):
    """Key string is not valid base64url."""
    pass


class MalformedTokenError(VapidError):
    """Token is not a three-part compact token with decodable segments."""
    pass


class VerificationFailedError(VapidError):
    """Token signature or claims were rejected."""
    pass


class TokenExpiredError(VerificationFailedError):
    """Token has expired."""
    pass

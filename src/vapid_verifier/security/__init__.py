"""
P-256 key encoding and ES256 token verification.

Example usage:
    from vapid_verifier.security import SignatureVerifier, VerificationFailedError

    verifier = SignatureVerifier()

    try:
        claims = verifier.verify(token, "BHGS2M5s_HkY_ByoEbvZabEozLOb6x...")
        print(f"Subject: {claims['sub']}")
    except VerificationFailedError as e:
        print(f"Rejected: {e.reason}")
"""

from .exceptions import (
    VapidError,
    KeyEncodingError,
    InvalidKeyError,
    InvalidKeyLengthError,
    MalformedKeyEncodingError,
    MalformedTokenError,
    VerificationFailedError,
    TokenExpiredError,
)
from .key_encoder import encode_private_key, encode_public_key, to_pem
from .schemas import EncodedKeyPair, VerificationResult
from .token_verifier import SignatureVerifier, base64url_decode, verify_token

__all__ = [
    "VapidError",
    "KeyEncodingError",
    "InvalidKeyError",
    "InvalidKeyLengthError",
    "MalformedKeyEncodingError",
    "MalformedTokenError",
    "VerificationFailedError",
    "TokenExpiredError",
    "encode_private_key",
    "encode_public_key",
    "to_pem",
    "EncodedKeyPair",
    "VerificationResult",
    "SignatureVerifier",
    "base64url_decode",
    "verify_token",
]

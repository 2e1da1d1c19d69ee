"""
ES256 token verification against a raw base64url-encoded P-256 public key.
"""
import asyncio
import base64
import binascii
import logging
import re
from functools import lru_cache
from typing import Any, Dict, Optional

import jwt
from cryptography.hazmat.primitives.asymmetric import ec

from vapid_verifier.config.verifier_config import VerifierConfig, get_verifier_config

from .exceptions import (
    InvalidKeyError,
    MalformedKeyEncodingError,
    MalformedTokenError,
    TokenExpiredError,
    VapidError,
    VerificationFailedError,
)
from .key_encoder import load_public_key
from .schemas import VerificationResult

logger = logging.getLogger(__name__)

_BASE64URL_PATTERN = re.compile(r"^[A-Za-z0-9_-]*$")


def base64url_decode(value: str) -> bytes:
    """
    Decode an RFC 4648 base64url string; trailing padding is optional.

    Raises:
        MalformedKeyEncodingError: On characters outside the url-safe
            alphabet, misplaced padding or an impossible length
    """
    if not isinstance(value, str):
        raise MalformedKeyEncodingError(f"Expected str, got {type(value).__name__}")

    stripped = value.rstrip("=")
    padding = len(value) - len(stripped)
    if not _BASE64URL_PATTERN.match(stripped):
        raise MalformedKeyEncodingError("Key contains characters outside the base64url alphabet")
    if len(stripped) % 4 == 1:
        raise MalformedKeyEncodingError("Key has an invalid base64url length")
    if padding and (padding > 2 or len(value) % 4 != 0):
        raise MalformedKeyEncodingError("Key has invalid base64url padding")

    try:
        return base64.urlsafe_b64decode(stripped + "=" * (-len(stripped) % 4))
    except (binascii.Error, ValueError) as e:
        raise MalformedKeyEncodingError(f"Key is not valid base64url: {e}") from e


class SignatureVerifier:
    """
    Verifies ES256-signed compact tokens with a raw P-256 public key.

    Instances only hold immutable configuration, so one verifier may be
    shared by any number of concurrent callers.
    """

    ALGORITHM = "ES256"
    ALLOWED_ALGORITHMS = ["ES256"]

    def __init__(self, config: Optional[VerifierConfig] = None):
        """
        Initialize the verifier.

        Args:
            config: Verification settings (default: VerifierConfig())
        """
        self.config = config or VerifierConfig()

    def load_public_key(self, public_key_b64url: str) -> ec.EllipticCurvePublicKey:
        """
        Decode a base64url raw point and load it through its PEM container.

        Raises:
            MalformedKeyEncodingError: If the key is not valid base64url
            InvalidKeyLengthError: If the decoded key is not 65 bytes
            InvalidKeyError: If the point is not on P-256
        """
        return load_public_key(base64url_decode(public_key_b64url))

    def verify(self, token: str, public_key_b64url: str) -> Dict[str, Any]:
        """
        Verify a token's signature and return its claims.

        Args:
            token: Compact token (header.payload.signature)
            public_key_b64url: Base64url-encoded uncompressed P-256 point

        Returns:
            Decoded claims exactly as produced by the token codec

        Raises:
            MalformedKeyEncodingError: If the key is not valid base64url
            InvalidKeyLengthError: If the decoded key is not 65 bytes
            MalformedTokenError: If the token cannot be split or decoded
            TokenExpiredError: If the token has expired
            VerificationFailedError: If the signature or claims are rejected,
                or the key is not a usable P-256 point
        """
        try:
            public_key = self.load_public_key(public_key_b64url)
        except InvalidKeyError as e:
            logger.warning("Unusable public key: %s", e.reason)
            raise VerificationFailedError(f"Unusable public key: {e.reason}") from e

        try:
            unverified_header = jwt.get_unverified_header(token)

            alg = unverified_header.get("alg")
            if alg not in self.ALLOWED_ALGORITHMS:
                raise VerificationFailedError(
                    f"Invalid algorithm: {alg}. Only {self.ALLOWED_ALGORITHMS} allowed."
                )

            options = {
                "verify_signature": True,
                "verify_exp": self.config.verify_exp,
                "verify_aud": self.config.audience is not None,
                "verify_iss": self.config.issuer is not None,
                "require": list(self.config.required_claims),
            }

            claims = jwt.decode(
                token,
                public_key,
                algorithms=self.ALLOWED_ALGORITHMS,
                audience=self.config.audience,
                issuer=self.config.issuer,
                leeway=self.config.leeway,
                options=options,
            )

        except VerificationFailedError as e:
            logger.warning("Token rejected: %s", e.reason)
            raise
        except jwt.ExpiredSignatureError as e:
            logger.warning("Token rejected: %s", e)
            raise TokenExpiredError(f"Token has expired: {e}") from e
        except jwt.InvalidSignatureError as e:
            logger.warning("Token rejected: %s", e)
            raise VerificationFailedError(f"Invalid token signature: {e}") from e
        except jwt.DecodeError as e:
            logger.warning("Malformed token: %s", e)
            raise MalformedTokenError(f"Token is malformed: {e}") from e
        except jwt.InvalidTokenError as e:
            logger.warning("Token rejected: %s", e)
            raise VerificationFailedError(f"Invalid token: {e}") from e

        logger.debug("Token verified for sub=%s", claims.get("sub"))
        return claims

    async def averify(self, token: str, public_key_b64url: str) -> Dict[str, Any]:
        """
        Verify a token in a worker thread.

        Resolves once with the claims or raises the same errors as verify().
        """
        return await asyncio.to_thread(self.verify, token, public_key_b64url)

    def verify_result(self, token: str, public_key_b64url: str) -> VerificationResult:
        """Verify a token and report the outcome instead of raising."""
        try:
            claims = self.verify(token, public_key_b64url)
        except VapidError as e:
            return VerificationResult(ok=False, error=type(e).__name__, reason=e.reason)
        return VerificationResult(ok=True, claims=claims)


@lru_cache()
def get_signature_verifier() -> SignatureVerifier:
    """
    Get a cached SignatureVerifier configured from the environment.
    """
    return SignatureVerifier(get_verifier_config())


def verify_token(
    token: str,
    public_key_b64url: str,
    config: Optional[VerifierConfig] = None,
) -> Dict[str, Any]:
    """Verify a token with the given config, or the environment defaults."""
    verifier = SignatureVerifier(config) if config is not None else get_signature_verifier()
    return verifier.verify(token, public_key_b64url)

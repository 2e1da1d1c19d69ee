"""
Encode raw P-256 key bytes into PEM key containers.
"""
from typing import Optional

from asn1crypto import core, pem
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from .exceptions import InvalidKeyError, InvalidKeyLengthError
from .schemas import EncodedKeyPair


CURVE_NAME = "prime256v1"

# id-ecPublicKey
UNRESTRICTED_ALGORITHM_ID = (1, 2, 840, 10045, 2, 1)
# secp256r1 / prime256v1
SECP256R1_CURVE = (1, 2, 840, 10045, 3, 1, 7)

PRIVATE_KEY_LENGTH = 32
PUBLIC_KEY_LENGTH = 65
UNCOMPRESSED_POINT_MARKER = 0x04

PRIVATE_KEY_LABEL = "EC PRIVATE KEY"


def _dotted(oid) -> str:
    return ".".join(str(arc) for arc in oid)


class ECPrivateKeyRecord(core.Sequence):
    """RFC 5915 ECPrivateKey with the curve given as a bare named-curve OID."""
    _fields = [
        ("version", core.Integer),
        ("private_key", core.OctetString),
        ("parameters", core.ObjectIdentifier, {"explicit": 0, "optional": True}),
        ("public_key", core.OctetBitString, {"explicit": 1, "optional": True}),
    ]


def encode_private_key(raw_private_scalar: bytes) -> str:
    """
    Encode a raw 32-byte private scalar as an "EC PRIVATE KEY" PEM.

    The publicKey field of the record is left out.

    Raises:
        InvalidKeyLengthError: If the scalar is not 32 bytes
    """
    if len(raw_private_scalar) != PRIVATE_KEY_LENGTH:
        raise InvalidKeyLengthError("private key", PRIVATE_KEY_LENGTH, len(raw_private_scalar))

    record = ECPrivateKeyRecord({
        "version": 1,
        "private_key": bytes(raw_private_scalar),
        "parameters": _dotted(SECP256R1_CURVE),
    })
    return pem.armor(PRIVATE_KEY_LABEL, record.dump()).decode("ascii")


def encode_public_key(raw_point: bytes) -> str:
    """
    Encode a raw 65-byte uncompressed point as a "PUBLIC KEY" PEM.

    The result is a SubjectPublicKeyInfo with algorithm id-ecPublicKey and
    the prime256v1 named curve.

    Raises:
        InvalidKeyLengthError: If the point is not 65 bytes
        InvalidKeyError: If the point is not uncompressed or not on P-256
    """
    if len(raw_point) != PUBLIC_KEY_LENGTH:
        raise InvalidKeyLengthError("public key", PUBLIC_KEY_LENGTH, len(raw_point))
    if raw_point[0] != UNCOMPRESSED_POINT_MARKER:
        raise InvalidKeyError(
            f"Public key must be an uncompressed point (0x04 prefix), got 0x{raw_point[0]:02x}"
        )

    try:
        public_key = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256R1(), bytes(raw_point))
    except ValueError as e:
        raise InvalidKeyError(f"Public key is not a valid P-256 point: {e}") from e

    return public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("utf-8")


def load_public_key(raw_point: bytes) -> ec.EllipticCurvePublicKey:
    """Load a raw uncompressed point through its PEM container."""
    return serialization.load_pem_public_key(
        encode_public_key(raw_point).encode("utf-8"),
        backend=default_backend(),
    )


def to_pem(public_key: bytes, private_key: Optional[bytes] = None) -> EncodedKeyPair:
    """Encode a public point and, if given, its private scalar."""
    return EncodedKeyPair(
        public=encode_public_key(public_key),
        private=encode_private_key(private_key) if private_key is not None else None,
    )

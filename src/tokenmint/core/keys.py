"""RSA key pair generation and JWK encoding utilities."""

import base64
import uuid
from datetime import UTC, datetime

from cryptography.hazmat.primitives.asymmetric import rsa

from tokenmint.config import JWT_ALGORITHM, RSA_PUBLIC_EXPONENT
from tokenmint.core.errors import EncodingFailure, KeyGenerationFailure
from tokenmint.core.schemas import PublicKeyView


def generate_key_pair(key_size: int = 2048) -> rsa.RSAPrivateKey:
    """Generate an RSA key pair with public exponent 65537.

    Args:
        key_size: Modulus size in bits (default 2048).

    Returns:
        The private key object. The public half is ``private_key.public_key()``.

    Raises:
        KeyGenerationFailure: If the backend fails to produce a key.
    """
    try:
        return rsa.generate_private_key(
            public_exponent=RSA_PUBLIC_EXPONENT,
            key_size=key_size,
        )
    except Exception as e:
        raise KeyGenerationFailure(f"RSA key generation failed: {e}") from e


def generate_kid() -> str:
    """Generate a key ID for JWKS.

    Format: key-YYYY-MM-uuid_short (12 hex chars)
    """
    now = datetime.now(UTC)
    short_id = uuid.uuid4().hex[:12]
    return f"key-{now.year}-{now.month:02d}-{short_id}"


def to_base64url(value: int | bytes) -> str:
    """Encode an unsigned integer or raw bytes as unpadded base64url.

    Integers go through their hex form, left-padded to an even number of
    digits, so 65537 (``0x10001``) becomes the bytes ``01 00 01`` -> ``AQAB``.

    Raises:
        EncodingFailure: For negative integers, booleans, or unsupported types.
    """
    if isinstance(value, bytes):
        raw = value
    elif isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise EncodingFailure(f"Cannot encode negative integer {value}")
        hex_str = format(value, "x")
        if len(hex_str) % 2:
            hex_str = "0" + hex_str
        raw = bytes.fromhex(hex_str)
    else:
        raise EncodingFailure(f"Cannot encode value of type {type(value).__name__}")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def public_key_to_jwk(
    kid: str, public_key: rsa.RSAPublicKey, algorithm: str = JWT_ALGORITHM,
) -> PublicKeyView:
    """Project an RSA public key to its JWK form for the JWKS endpoint.

    Args:
        kid: The key ID.
        public_key: The RSA public key.
        algorithm: The signing algorithm (default RS256).

    Returns:
        PublicKeyView with kid, kty, alg, use, n, e fields.
    """
    numbers = public_key.public_numbers()
    return PublicKeyView(
        kid=kid,
        kty="RSA",
        alg=algorithm,
        use="sig",
        n=to_base64url(numbers.n),
        e=to_base64url(numbers.e),
    )

"""JWT creation and issuance against the key registry."""

import logging
from dataclasses import dataclass

import jwt
from cryptography.hazmat.primitives.asymmetric import rsa

from tokenmint.config import JWT_ALGORITHM, TokenMintConfig
from tokenmint.core.errors import NoKeyAvailable
from tokenmint.core.registry import KeyRegistry
from tokenmint.utils import utc_timestamp

logger = logging.getLogger("tokenmint.tokens")


@dataclass(frozen=True, slots=True)
class IssuedToken:
    """A freshly signed token and the facts a caller may want about it."""

    token: str
    kid: str
    expires_at: int
    expired: bool


def create_token(
    *,
    subject: str,
    issued_at: int,
    expires_at: int,
    kid: str,
    private_key: rsa.RSAPrivateKey,
    issuer: str | None = None,
) -> str:
    """Create a signed RS256 JWT.

    Args:
        subject: The ``sub`` claim.
        issued_at: The ``iat`` claim (epoch seconds).
        expires_at: The ``exp`` claim (epoch seconds). May be in the past.
        kid: Key ID of the signing key, placed in the JWT header.
        private_key: RSA private key used for signing.
        issuer: Optional ``iss`` claim.

    Returns:
        Encoded JWT string.
    """
    payload = {
        "sub": subject,
        "iat": issued_at,
        "exp": expires_at,
    }
    if issuer is not None:
        payload["iss"] = issuer

    return jwt.encode(
        payload,
        private_key,
        algorithm=JWT_ALGORITHM,
        headers={"kid": kid},
    )


def issue_token(
    registry: KeyRegistry,
    config: TokenMintConfig,
    *,
    want_expired: bool = False,
    now: int | None = None,
) -> IssuedToken:
    """Pick a key matching the requested freshness and sign a token with it.

    A valid request uses the first valid key and gets ``exp = now + ttl``; an
    expired request uses the first expired key and gets ``exp = now - ttl``.
    The token's ``exp`` comes from ``config.token_ttl_seconds``, never from the
    key's own ``expires_at``.

    Raises:
        NoKeyAvailable: If the registry holds no key of the requested kind.
    """
    if now is None:
        now = utc_timestamp()

    record = registry.find_expired(now) if want_expired else registry.find_valid(now)
    if record is None:
        kind = "expired" if want_expired else "valid"
        logger.warning("No %s signing key available", kind)
        raise NoKeyAvailable(expired=want_expired)

    ttl = config.token_ttl_seconds
    expires_at = now - ttl if want_expired else now + ttl

    token = create_token(
        subject=config.subject,
        issued_at=now,
        expires_at=expires_at,
        kid=record.kid,
        private_key=record.private_key,
        issuer=config.issuer,
    )
    logger.debug("Issued %s token with key %s", "expired" if want_expired else "valid", record.kid)
    return IssuedToken(token=token, kid=record.kid, expires_at=expires_at, expired=want_expired)


def decode_token(
    token: str,
    public_key,
    *,
    issuer: str | None = None,
    verify_exp: bool = True,
) -> dict:
    """Verify and decode a token signed by this issuer.

    Args:
        token: The encoded JWT string.
        public_key: RSA public key (or PyJWK key object) for verification.
        issuer: Expected ``iss`` claim, if any.
        verify_exp: Set False to inspect deliberately expired tokens.

    Raises:
        jwt.ExpiredSignatureError: If the token has expired and verify_exp is set.
        jwt.InvalidTokenError: If the token is invalid.
    """
    return jwt.decode(
        token,
        public_key,
        algorithms=[JWT_ALGORITHM],
        issuer=issuer,
        options={"require": ["sub", "exp", "iat"], "verify_exp": verify_exp},
    )


def get_unverified_header(token: str) -> dict:
    """Get the JWT header without verifying the signature.

    Used to extract the `kid` to look up the correct public key.
    """
    return jwt.get_unverified_header(token)

"""JWT verification against a published JWK Set — what a downstream consumer does.

Only the public JWKS document is needed: the token's ``kid`` header selects the
key, the signature is checked with RS256, and ``exp`` decides freshness.
"""

import logging
from dataclasses import dataclass

import jwt
from jwt import PyJWK

from tokenmint.core.tokens import decode_token, get_unverified_header

logger = logging.getLogger("tokenmint.verifier")


class TokenVerificationError(Exception):
    """Raised when JWT verification fails."""

    def __init__(self, message: str, code: str):
        self.message = message
        self.code = code
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class TokenPayload:
    """Decoded JWT payload from a verified token."""

    sub: str
    exp: int
    iat: int
    iss: str | None
    kid: str


def load_jwks(jwks: dict) -> dict[str, PyJWK]:
    """Parse a JWKS document into a kid -> PyJWK mapping. Unparseable keys are skipped."""
    keys: dict[str, PyJWK] = {}
    for key_data in jwks.get("keys", []):
        if not isinstance(key_data, dict):
            continue
        kid = key_data.get("kid")
        if not kid:
            continue
        try:
            keys[kid] = PyJWK(key_data)
        except (jwt.PyJWKError, jwt.InvalidKeyError):
            logger.warning("Failed to parse JWK with kid=%s", kid)
    return keys


def verify_token(
    token: str,
    jwks: dict,
    *,
    issuer: str | None = None,
    verify_exp: bool = True,
) -> TokenPayload:
    """Verify a JWT using the keys in a JWKS document.

    Args:
        token: The encoded JWT string.
        jwks: A JWK Set dict, e.g. the JSON body of /.well-known/jwks.json.
        issuer: Expected ``iss`` claim (None skips the check).
        verify_exp: Set False to check only the signature of an expired token.

    Raises:
        TokenVerificationError: ``token_invalid`` for malformed tokens, unknown
            kids and bad signatures; ``token_expired`` for expired tokens.
    """
    try:
        header = get_unverified_header(token)
    except jwt.InvalidTokenError:
        raise TokenVerificationError("Malformed token", "token_invalid")

    kid = header.get("kid")
    if not kid:
        raise TokenVerificationError("Token missing kid header", "token_invalid")

    jwk = load_jwks(jwks).get(kid)
    if jwk is None:
        raise TokenVerificationError("Unknown signing key", "token_invalid")

    try:
        payload = decode_token(token, jwk.key, issuer=issuer, verify_exp=verify_exp)
    except jwt.ExpiredSignatureError:
        raise TokenVerificationError("Token has expired", "token_expired")
    except jwt.InvalidIssuerError:
        raise TokenVerificationError("Invalid issuer", "token_invalid")
    except jwt.InvalidTokenError as e:
        raise TokenVerificationError(f"Invalid token: {e}", "token_invalid")

    return TokenPayload(
        sub=payload["sub"],
        exp=payload["exp"],
        iat=payload["iat"],
        iss=payload.get("iss"),
        kid=kid,
    )

"""TokenMint schemas — response models for the JWKS and auth endpoints."""

from pydantic import BaseModel, ConfigDict


class PublicKeyView(BaseModel):
    """Public projection of a signing key (RFC 7517 JWK). No private fields."""
    model_config = ConfigDict(frozen=True)

    kid: str
    kty: str = "RSA"
    alg: str = "RS256"
    use: str = "sig"
    n: str
    e: str


class JWKSResponse(BaseModel):
    """JWK Set of currently valid keys."""
    keys: list[PublicKeyView]


class TokenResponse(BaseModel):
    """Signed token returned by POST /auth."""
    token: str

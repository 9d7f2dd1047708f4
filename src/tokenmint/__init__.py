"""TokenMint — JWKS server and RS256 token issuer for testing JWT verifiers."""

__version__ = "0.1.0"

from tokenmint.config import TokenMintConfig
from tokenmint.core.errors import EncodingFailure, KeyGenerationFailure, NoKeyAvailable, TokenMintError
from tokenmint.core.registry import KeyRecord, KeyRegistry
from tokenmint.core.schemas import JWKSResponse, PublicKeyView, TokenResponse
from tokenmint.core.tokens import IssuedToken
from tokenmint.events import KeyGenerated, TokenIssued
from tokenmint.tokenmint import TokenMint
from tokenmint.verifier import TokenPayload, TokenVerificationError, verify_token

__all__ = [
    "EncodingFailure",
    "IssuedToken",
    "JWKSResponse",
    "KeyGenerated",
    "KeyGenerationFailure",
    "KeyRecord",
    "KeyRegistry",
    "NoKeyAvailable",
    "PublicKeyView",
    "TokenIssued",
    "TokenMint",
    "TokenMintConfig",
    "TokenMintError",
    "TokenPayload",
    "TokenResponse",
    "TokenVerificationError",
    "verify_token",
]

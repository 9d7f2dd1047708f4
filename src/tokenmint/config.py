"""TokenMint configuration — frozen dataclass for key, token, and JWKS settings."""

from dataclasses import dataclass

JWT_ALGORITHM = "RS256"
RSA_PUBLIC_EXPONENT = 65537


@dataclass(frozen=True, slots=True)
class TokenMintConfig:
    """Internal config built by the TokenMint constructor. Not user-facing.

    Key lifetime and token lifetime are separate settings: a token's ``exp``
    is never derived from the signing key's ``expires_at``.
    """

    key_ttl_seconds: int = 3600  # 1 hour
    token_ttl_seconds: int = 3600  # 1 hour
    rsa_key_size: int = 2048
    subject: str = "username"
    issuer: str = "tokenmint"
    jwks_max_age_seconds: int = 3600
    seed_valid_keys: int = 1
    seed_expired_keys: int = 1

    def __post_init__(self) -> None:
        """Validate numeric settings at construction time."""
        for field_name in (
            "key_ttl_seconds", "token_ttl_seconds", "jwks_max_age_seconds",
            "seed_valid_keys", "seed_expired_keys",
        ):
            if getattr(self, field_name) < 0:
                raise ValueError(f"{field_name} must be >= 0")
        if self.rsa_key_size < 2048:
            raise ValueError("rsa_key_size must be at least 2048 bits")

"""TokenMint error taxonomy — every error carries a code and an HTTP status."""


class TokenMintError(Exception):
    """Base TokenMint error with an error code and HTTP status."""

    def __init__(self, message: str, code: str, status_code: int = 400, **extra):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.extra = extra
        super().__init__(message)


class NoKeyAvailable(TokenMintError):
    """No signing key matches the requested freshness (valid or expired)."""

    def __init__(self, message: str = "Key not found", *, expired: bool = False):
        super().__init__(message, code="no_key_available", status_code=404, expired=expired)


class KeyGenerationFailure(TokenMintError):
    """RSA key pair generation failed. Not retried."""

    def __init__(self, message: str = "Signing key generation failed"):
        super().__init__(message, code="key_generation_failed", status_code=500)


class EncodingFailure(TokenMintError):
    """A value could not be projected to its base64url JWK form."""

    def __init__(self, message: str):
        super().__init__(message, code="encoding_failed", status_code=500)

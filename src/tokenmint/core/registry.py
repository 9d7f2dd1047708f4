"""In-memory signing key registry — append-only, lock-guarded, process lifetime."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from dataclasses import dataclass, field

from cryptography.hazmat.primitives.asymmetric import rsa

from tokenmint.config import JWT_ALGORITHM, TokenMintConfig
from tokenmint.core.keys import generate_key_pair, generate_kid, public_key_to_jwk
from tokenmint.core.schemas import PublicKeyView
from tokenmint.utils import utc_timestamp

logger = logging.getLogger("tokenmint.registry")


@dataclass(frozen=True, slots=True)
class KeyRecord:
    """One RSA signing key plus metadata.

    A record is valid at ``now`` iff ``expires_at > now`` and expired
    otherwise; there is no not-yet-active state.
    """

    kid: str
    private_key: rsa.RSAPrivateKey = field(repr=False)
    public_view: PublicKeyView
    expires_at: int
    created_at: int
    algorithm: str = JWT_ALGORITHM

    def is_valid(self, now: int) -> bool:
        return self.expires_at > now

    def is_expired(self, now: int) -> bool:
        return self.expires_at <= now


class KeyRegistry:
    """Append-only collection of KeyRecord shared by issuance and discovery.

    Selection is first-match in insertion order: ``find_valid`` returns the
    oldest valid key, not the newest or the one expiring soonest.

    Args:
        config: TokenMint configuration (key TTL and RSA key size).
    """

    def __init__(self, config: TokenMintConfig | None = None) -> None:
        self._config = config or TokenMintConfig()
        self._records: list[KeyRecord] = []
        self._kids: set[str] = set()
        self._lock = threading.Lock()

    def _snapshot(self) -> tuple[KeyRecord, ...]:
        with self._lock:
            return tuple(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[KeyRecord]:
        return iter(self._snapshot())

    # ------ Write ------

    def generate(self, expired: bool = False, *, now: int | None = None) -> KeyRecord:
        """Generate a key pair, register it, and return the new record.

        Args:
            expired: If True, the key's expiry is set one key TTL in the past.
            now: Reference time in epoch seconds (default: current time).

        Raises:
            KeyGenerationFailure: If RSA key generation fails.
        """
        if now is None:
            now = utc_timestamp()
        ttl = self._config.key_ttl_seconds
        expires_at = now - ttl if expired else now + ttl

        # Key material is built outside the lock; only the append is serialized.
        private_key = generate_key_pair(self._config.rsa_key_size)

        with self._lock:
            kid = generate_kid()
            while kid in self._kids:
                kid = generate_kid()
            record = KeyRecord(
                kid=kid,
                private_key=private_key,
                public_view=public_key_to_jwk(kid, private_key.public_key(), JWT_ALGORITHM),
                expires_at=expires_at,
                created_at=now,
            )
            self._records.append(record)
            self._kids.add(kid)

        logger.info(
            "Generated %s signing key %s (expires_at=%d)",
            "expired" if expired else "valid", kid, expires_at,
        )
        return record

    # ------ Read ------

    def get(self, kid: str) -> KeyRecord | None:
        """Get a record by its key ID."""
        for record in self._snapshot():
            if record.kid == kid:
                return record
        return None

    def find_valid(self, now: int | None = None) -> KeyRecord | None:
        """First record in insertion order with ``expires_at > now``."""
        if now is None:
            now = utc_timestamp()
        return next((r for r in self._snapshot() if r.is_valid(now)), None)

    def find_expired(self, now: int | None = None) -> KeyRecord | None:
        """First record in insertion order with ``expires_at <= now``."""
        if now is None:
            now = utc_timestamp()
        return next((r for r in self._snapshot() if r.is_expired(now)), None)

    def public_key_set(self, now: int | None = None) -> list[PublicKeyView]:
        """Public projections of all valid records, in registry order.

        Expired records never appear here even though they can still sign.
        """
        if now is None:
            now = utc_timestamp()
        return [r.public_view for r in self._snapshot() if r.is_valid(now)]

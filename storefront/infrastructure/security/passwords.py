"""Password hashing (bcrypt with SHA-256 pre-hash).

Bcrypt truncates inputs at 72 bytes; pre-hashing with SHA-256 yields a
fixed-length input so long passwords are not silently truncated. Hashing
is CPU-bound, so the async helpers run it in a worker thread.
"""

import asyncio
import base64
import hashlib

import bcrypt


class PasswordHasher:
    """bcrypt hasher with a configurable cost factor.

    verify_missing() burns the same time as a real check, so a login for
    an unknown email is not distinguishable by latency.
    """

    _DUMMY_PASSWORD = "not-a-real-password"

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds
        self._dummy_hash: str | None = None

    @staticmethod
    def _prehash(password: str) -> bytes:
        return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())

    def hash(self, password: str) -> str:
        """Return bcrypt hash of password."""
        hashed = bcrypt.hashpw(self._prehash(password), bcrypt.gensalt(self.rounds))
        return hashed.decode("utf-8")

    def verify(self, plain_password: str, hashed_password: str | None) -> bool:
        """Return True if plain_password matches hashed_password."""
        if not hashed_password:
            return False
        try:
            return bool(
                bcrypt.checkpw(
                    self._prehash(plain_password), hashed_password.encode("utf-8")
                )
            )
        except (ValueError, TypeError):
            return False

    async def hash_async(self, password: str) -> str:
        return await asyncio.to_thread(self.hash, password)

    async def verify_async(self, plain_password: str, hashed_password: str | None) -> bool:
        return await asyncio.to_thread(self.verify, plain_password, hashed_password)

    async def verify_missing(self, plain_password: str) -> bool:
        """Run a comparison against a dummy hash; always returns False."""
        if self._dummy_hash is None:
            self._dummy_hash = await self.hash_async(self._DUMMY_PASSWORD)
        await self.verify_async(plain_password, self._dummy_hash)
        return False

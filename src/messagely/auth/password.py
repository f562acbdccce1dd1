"""Password hashing.

Learn: Uses bcrypt for password hashing. bcrypt salts automatically and
produces a self-describing hash ("$2b$12$<salt><digest>") that records
its own cost, so raising the work factor never invalidates stored
hashes. needs_rehash() spots hashes made with another cost and login
upgrades them in place.

Hashing is CPU-bound (~100ms at cost 12). The async variants run it on a
bounded thread pool so one login does not stall every other request on
the event loop.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import bcrypt

from messagely.errors import HashingError, PasswordTooLongError

# bcrypt reads at most 72 bytes. Anything longer is refused rather than
# truncated, so two passwords sharing a 72-byte prefix never collide.
MAX_PASSWORD_BYTES = 72


def password_fits(password: str) -> bool:
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


class PasswordHasher:
    """bcrypt hashing with a configurable work factor."""

    def __init__(self, work_factor: int = 12, max_workers: int = 4):
        self.work_factor = work_factor
        self._max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._dummy_hash: Optional[str] = None

    # ─── Sync API ───────────────────────────────────────

    def hash(self, password: str) -> str:
        """Hash a password with a fresh random salt.

        Raises PasswordTooLongError past 72 UTF-8 bytes.
        """
        if not password_fits(password):
            raise PasswordTooLongError(MAX_PASSWORD_BYTES)
        try:
            salt = bcrypt.gensalt(rounds=self.work_factor)
            return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")
        except (ValueError, TypeError, OSError) as e:
            raise HashingError(f"Password hashing failed: {e}") from e

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against a stored hash.

        Comparison is constant-time inside bcrypt. A mismatch or a
        malformed hash returns False, it never raises. A password over
        72 bytes can never have been hashed, so it never matches.
        """
        if not password_fits(password):
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        """True if the hash is not bcrypt or was made with another cost."""
        parts = password_hash.split("$")
        # ["", "2b", "12", "<salt+digest>"]
        if len(parts) != 4 or not parts[1].startswith("2"):
            return True
        try:
            return int(parts[2]) != self.work_factor
        except ValueError:
            return True

    def dummy_hash(self) -> str:
        """A hash of a random value, verified against when a user is unknown.

        Learn: Running one real bcrypt verify for unknown usernames keeps
        login timing the same whether or not the account exists.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self.hash(bcrypt.gensalt().decode("ascii"))
        return self._dummy_hash

    # ─── Async API (thread pool) ────────────────────────

    def _pool(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers, thread_name_prefix="bcrypt"
            )
        return self._executor

    async def hash_async(self, password: str) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._pool(), self.hash, password)

    async def verify_async(self, password: str, password_hash: str) -> bool:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self._pool(), self.verify, password, password_hash
        )

    async def dummy_verify_async(self, password: str) -> bool:
        loop = asyncio.get_running_loop()
        dummy = await loop.run_in_executor(self._pool(), self.dummy_hash)
        return await self.verify_async(password, dummy)

    def shutdown(self) -> None:
        """Stop the worker threads. Safe to call more than once."""
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

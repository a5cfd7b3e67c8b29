import asyncio
import logging

import bcrypt

# bcrypt ignores (or, in newer releases, rejects) input past this length
BCRYPT_MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """
    Salted one-way password digests using bcrypt.
    The work factor is fixed when the hasher is built and applies to every
    digest it produces. Verification reads the cost from the stored digest,
    so digests made with an older work factor keep verifying.
    Attributes:
        work_factor (int): bcrypt cost parameter (log2 rounds)
    """
    __slots__ = ("work_factor", "_logger")

    def __init__(self, work_factor: int, logger: logging.Logger | None = None):
        self.work_factor = work_factor
        self._logger = logger or logging.getLogger(__name__)

    def hash(self, password: str) -> str:
        """
        Derive a digest for a plaintext password.
        Args:
            password: Non-empty plaintext password
        Returns:
            str: bcrypt digest in modular crypt format
        Raises:
            ValueError: If the password is empty or longer than bcrypt accepts
        """
        if not password:
            raise ValueError("Password must not be empty")

        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must not exceed {BCRYPT_MAX_PASSWORD_BYTES} bytes")

        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self.work_factor)).decode("ascii")

    def verify(self, password: str, hashed: str) -> bool:
        """
        Check a plaintext password against a stored digest.
        Never raises for a mismatch, an unencodable password or a malformed
        digest; returns False instead.
        """
        try:
            encoded = password.encode("utf-8")
        except UnicodeEncodeError:
            # lone surrogates can never match a stored digest
            return False

        if not encoded or len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            return False

        try:
            return bcrypt.checkpw(encoded, hashed.encode("ascii"))
        except (ValueError, UnicodeEncodeError):
            self._logger.warning("Stored password digest could not be parsed")
            return False

    async def hash_async(self, password: str) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.hash, password)

    async def verify_async(self, password: str, hashed: str) -> bool:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.verify, password, hashed)

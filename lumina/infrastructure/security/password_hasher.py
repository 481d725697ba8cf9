# lumina/infrastructure/security/password_hasher.py
import base64
import binascii
import hashlib
import hmac
import os
from dataclasses import dataclass

from lumina.config.settings import settings


@dataclass(frozen=True)
class PasswordDigest:
    algo: str
    iterations: int
    hash: str
    salt: str


class PasswordHasher:
    ALGO = "pbkdf2_sha256"
    SALT_BYTES = 16

    @classmethod
    def _derive(cls, password: str, salt: bytes, iterations: int) -> bytes:
        return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)

    @classmethod
    def hash_password(cls, password: str, *, iterations: int | None = None) -> PasswordDigest:
        if not password or len(password) < 8:
            raise ValueError("Password must have at least 8 characters.")

        rounds = iterations or settings.password_iterations
        salt = os.urandom(cls.SALT_BYTES)
        return PasswordDigest(
            algo=cls.ALGO,
            iterations=rounds,
            hash=base64.b64encode(cls._derive(password, salt, rounds)).decode("ascii"),
            salt=base64.b64encode(salt).decode("ascii"),
        )

    @classmethod
    def verify_password(cls, password: str, digest: PasswordDigest) -> bool:
        if digest.algo != cls.ALGO:
            return False

        try:
            salt = base64.b64decode(digest.salt)
            expected = base64.b64decode(digest.hash)
        except (binascii.Error, ValueError):
            return False

        return hmac.compare_digest(cls._derive(password, salt, digest.iterations), expected)

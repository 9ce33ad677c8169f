"""Admin credential verification"""

import hashlib
import hmac
import secrets
from typing import Protocol

PBKDF2_ALGORITHM = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 390_000


class CredentialVerifier(Protocol):
    """Anything that can decide whether a username/password pair is an admin"""

    def verify(self, username: str, password: str) -> bool:
        ...


def hash_password(password: str, iterations: int = DEFAULT_ITERATIONS, salt: bytes | None = None) -> str:
    """
    Hash a password for the ADMIN_PASSWORD_HASH setting.

    Returns:
        "pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>"
    """
    salt = salt or secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{PBKDF2_ALGORITHM}${iterations}${salt.hex()}${digest.hex()}"


class Pbkdf2CredentialVerifier:
    """Checks a single admin account against a salted PBKDF2 hash"""

    def __init__(self, username: str, password_hash: str):
        self.username = username
        self.password_hash = password_hash

    def verify(self, username: str, password: str) -> bool:
        if not self.password_hash:
            # Admin access disabled
            return False

        try:
            algorithm, iterations, salt_hex, expected_hex = self.password_hash.split("$")
            iterations_count = int(iterations)
            if iterations_count < 1:
                return False
            salt = bytes.fromhex(salt_hex)
            expected = bytes.fromhex(expected_hex)
        except ValueError:
            return False
        if algorithm != PBKDF2_ALGORITHM:
            return False

        digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations_count)
        user_ok = hmac.compare_digest(username.encode("utf-8"), self.username.encode("utf-8"))
        password_ok = hmac.compare_digest(digest, expected)
        return user_ok and password_ok

"""Password hashing for TaskFlow accounts.

Hashes are PBKDF2-HMAC-SHA256 with a per-password random salt, stored as
`pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>`. Raw passwords are never
stored or logged.
"""

import hashlib
import hmac
import secrets

from taskflow.config import PASSWORD_HASH_ITERATIONS

_SCHEME = "pbkdf2_sha256"


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def hash_password(password: str, iterations: int = PASSWORD_HASH_ITERATIONS) -> str:
    """Hash a password for storage."""
    salt = secrets.token_bytes(16)
    digest = _derive(password, salt, iterations)
    return f"{_SCHEME}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, stored_hash: str) -> bool:
    """Check a password against a stored hash in constant time."""
    try:
        scheme, iterations, salt_hex, digest_hex = stored_hash.split("$")
        if scheme != _SCHEME:
            return False
        digest = _derive(password, bytes.fromhex(salt_hex), int(iterations))
    except (ValueError, AttributeError):
        return False
    return hmac.compare_digest(digest.hex(), digest_hex)

# shopcart/services/passwords.py
import base64
import os

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

ALGORITHM = "pbkdf2_sha256"
ITERATIONS = 100000
SALT_BYTES = 16


def _kdf(salt: bytes, iterations: int) -> PBKDF2HMAC:
    return PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=iterations,
    )


def hash_password(password: str) -> str:
    """
    Returns `pbkdf2_sha256$<iterations>$<salt b64>$<hash b64>`.
    """
    salt = os.urandom(SALT_BYTES)
    derived = _kdf(salt, ITERATIONS).derive(password.encode("utf-8"))
    return "$".join([
        ALGORITHM,
        str(ITERATIONS),
        base64.b64encode(salt).decode("ascii"),
        base64.b64encode(derived).decode("ascii"),
    ])


def verify_password(password: str, encoded: str) -> bool:
    try:
        algorithm, iterations, salt_b64, hash_b64 = encoded.split("$")
    except ValueError:
        return False
    if algorithm != ALGORITHM:
        return False

    salt = base64.b64decode(salt_b64)
    expected = base64.b64decode(hash_b64)
    try:
        _kdf(salt, int(iterations)).verify(password.encode("utf-8"), expected)
    except InvalidKey:
        return False
    return True

"""
Password Hashing and Verification
Uses bcrypt for account passwords
"""

import logging
import secrets
import string

from passlib.context import CryptContext

# passlib reads bcrypt's version attribute and complains on newer builds
logging.getLogger("passlib.handlers.bcrypt").setLevel(logging.ERROR)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

MIN_PASSWORD_LENGTH = 8


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def generate_random_password(length: int = 12) -> str:
    """
    Generate a random password from letters and digits

    Args:
        length: Length of password (default 12)
    """
    characters = string.ascii_letters + string.digits
    return "".join(secrets.choice(characters) for _ in range(length))

"""
Core authentication logic.

Checks a username/password pair against the configured users. The stored
password may be plain text or its SHA-256 hex digest.
"""

import re
import secrets
from typing import Mapping

from fastapi import HTTPException, status

from .utils import hash_password

_SHA256_HEX = re.compile(r"^[0-9a-f]{64}$")


def _password_matches(stored: str, given: str) -> bool:
    # A stored digest is only compared against the digest of the given password.
    expected = hash_password(given) if _SHA256_HEX.match(stored) else given
    return secrets.compare_digest(stored.encode(), expected.encode())


def authenticate_user(username: str, password: str, users: Mapping[str, str]) -> str:
    """
    Authenticate a user by validating their username and password.

    Args:
        username (str): The username provided by the client.
        password (str): The password provided by the client.
        users (Mapping[str, str]): Configured username -> password.

    Returns:
        str: The authenticated username.

    Raises:
        HTTPException: If authentication fails (401 Unauthorized).
    """
    stored_password = users.get(username)

    if stored_password is not None and _password_matches(stored_password, password):
        return username

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid credentials",
        headers={"WWW-Authenticate": "Basic"},
    )

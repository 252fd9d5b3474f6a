"""
Utility functions for the auth module.
"""

import hashlib


def hash_password(password: str) -> str:
    """
    Return a SHA256 hex digest of the given password.

    Note:
        Lets operators put the digest instead of the plain password in
        URLSHORT_HTTP_PASSWORD. It is not a substitute for a real password
        hashing scheme such as passlib[bcrypt].
    """
    return hashlib.sha256(password.encode()).hexdigest()

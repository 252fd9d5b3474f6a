"""
FastAPI dependency functions for authentication.

These can be used in routes with Depends() to protect endpoints.
"""

from typing import Callable, Mapping, Optional

from fastapi import Depends
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from .service import authenticate_user

# HTTP Basic authentication scheme
security = HTTPBasic()


def basic_auth(users: Mapping[str, str]) -> Callable[..., Optional[str]]:
    """
    Build a dependency that validates HTTP Basic credentials against `users`.

    With no users configured, auth is disabled and the dependency is a no-op.

    Returns:
        Callable: Dependency returning the authenticated username (or None).
    """
    if not users:
        def no_auth() -> None:
            return None
        return no_auth

    def get_current_user(credentials: HTTPBasicCredentials = Depends(security)) -> str:
        return authenticate_user(credentials.username, credentials.password, users)

    return get_current_user

"""
Auth package for FastAPI applications.

Provides HTTP Basic Auth for the write endpoints (save and delete).
Credentials are passed in from Settings; nothing is read from the environment here.
"""

from .dependencies import basic_auth

__all__ = ["basic_auth"]

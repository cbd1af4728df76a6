"""
Authentication primitives: password hashing, session tokens, secret loading.
"""

from .passwords import hash_password, verify_password
from .secret import load_session_secret
from .tokens import TokenService

__all__ = [
    "hash_password",
    "verify_password",
    "load_session_secret",
    "TokenService",
]

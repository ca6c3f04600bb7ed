"""
Authentication Module
Password hashing, JWT token management and the page authorization gate
"""

from hackhub.auth.password import hash_password, verify_password, generate_random_password
from hackhub.auth.roles import Role
from hackhub.auth.dependencies import (
    create_access_token,
    decode_access_token,
    session_from_request,
    get_current_user,
    get_admin,
    get_event_manager
)

__all__ = [
    "Role",
    "hash_password",
    "verify_password",
    "generate_random_password",
    "create_access_token",
    "decode_access_token",
    "session_from_request",
    "get_current_user",
    "get_admin",
    "get_event_manager",
]

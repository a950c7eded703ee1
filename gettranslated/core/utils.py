"""
Shared utility functions for the SDK.
"""

from __future__ import annotations

import secrets
import time

from gettranslated.config import ID_ALPHABET, ID_LENGTH


def random_string(length: int = ID_LENGTH, alphabet: str = ID_ALPHABET) -> str:
    """Random string drawn from ``alphabet``."""
    return "".join(secrets.choice(alphabet) for _ in range(length))


def generate_anonymous_id(app_package: str) -> str:
    """
    Generate an anonymous user id.
    
    Returns:
        An id like "aB3dE5fG7hJ9@com.example.app"
    """
    return f"{random_string()}@{app_package}"


def now_millis() -> int:
    """Milliseconds since the epoch."""
    return int(time.time() * 1000)

from . import user, auth

__all__ = [
    "user",
    "auth",
]

from .user import create_user, get_user_by_email, get_user_by_id
from .basket import get_or_create_basket


__all__ = [
    "create_user",
    "get_user_by_email",
    "get_user_by_id",
    "get_or_create_basket",
]

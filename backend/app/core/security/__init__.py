"""
認証・2FAセキュリティモジュール
"""

# パスワード関連の関数をエクスポート
from .password import hash_password, verify_password

# トークン関連の機能をエクスポート
from .jwt import TokenCodec, TokenType, get_token_codec

# 例外クラスをエクスポート
from .exceptions import (
    AuthError,
    InvalidCredentialsError,
    UnauthorizedError,
    NotAuthenticatedError,
)

__all__ = [
    "hash_password",
    "verify_password",
    "TokenCodec",
    "TokenType",
    "get_token_codec",
    "AuthError",
    "InvalidCredentialsError",
    "UnauthorizedError",
    "NotAuthenticatedError",
]

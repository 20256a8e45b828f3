# app/core/security/jwt.py
"""
 - 署名付きトークン（JWT）を発行・検証するユーティリティモジュール。
 - トークンは `type` クレームで種別を区別する：
     * session                                  … 通常のセッショントークン
     * password_valid_needs_second_factor_token … パスワード認証済み・2FA待ちの一時トークン
     * totp_setup_secret                        … 2FA設定用の秘密鍵を運ぶトークン
 - 検証時は署名と期限に加えて種別を必ず確認し、
   一時トークンをセッショントークンとして再利用されることを防ぐ。
"""

import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from app.core.config import Settings, get_settings
from app.core.security.exceptions import (
    ExpiredTokenError,
    InvalidSignatureError,
    WrongTokenTypeError,
)

# ロガーの設定
logger = logging.getLogger(__name__)


class TokenType(str, Enum):
    """トークン種別"""
    SESSION = "session"
    TEMPORARY = "password_valid_needs_second_factor_token"
    SETUP = "totp_setup_secret"


class SessionTokenPayload(BaseModel):
    """セッショントークンのペイロード"""
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["session"] = "session"
    user_id: int = Field(alias="userId")
    email: str
    bid: Optional[int] = None


class TemporaryTokenPayload(BaseModel):
    """パスワード認証済み・TOTP待ちの一時トークンのペイロード"""
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["password_valid_needs_second_factor_token"] = "password_valid_needs_second_factor_token"
    user_id: int = Field(alias="userId")


class SetupTokenPayload(BaseModel):
    """2FA設定用トークンのペイロード"""
    type: Literal["totp_setup_secret"] = "totp_setup_secret"
    secret: str


# `type` を判別子とするタグ付きユニオン
TokenPayload = Annotated[
    Union[SessionTokenPayload, TemporaryTokenPayload, SetupTokenPayload],
    Field(discriminator="type"),
]

_payload_adapter = TypeAdapter(TokenPayload)

_KNOWN_TYPES = {token_type.value for token_type in TokenType}


class TokenCodec:
    """トークンの発行と検証を担当するクラス"""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expirations: Optional[dict[TokenType, timedelta]] = None,
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expirations = expirations or {}

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            expirations={
                TokenType.SESSION: timedelta(minutes=settings.access_token_expire_minutes),
                TokenType.TEMPORARY: timedelta(minutes=settings.tmp_token_expire_minutes),
                TokenType.SETUP: timedelta(minutes=settings.setup_token_expire_minutes),
            },
        )

    def issue(self, payload: TokenPayload, expires_delta: Optional[timedelta] = None) -> str:
        """ペイロードに有効期限を付与して署名済みトークンを返す"""
        to_encode = payload.model_dump(by_alias=True)
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or self._expirations.get(TokenType(payload.type), timedelta(minutes=30)))
        to_encode.update({"iat": now, "exp": expire})
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def decode(self, token: str) -> TokenPayload:
        """
        署名・有効期限を検証し、種別に応じたペイロードを返す。
        どのエラーでも生の例外は外に出さず TokenError のサブクラスに変換する。
        """
        try:
            claims = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError as e:
            raise ExpiredTokenError("トークンの有効期限が切れています") from e
        except (JWTError, AttributeError) as e:
            raise InvalidSignatureError("トークンの署名を検証できません") from e

        # 判別子を先に確認してからフィールドを読む
        if claims.get("type") not in _KNOWN_TYPES:
            raise WrongTokenTypeError("未知のトークン種別です")

        try:
            return _payload_adapter.validate_python(claims)
        except ValidationError as e:
            raise InvalidSignatureError("トークンのペイロードが不正です") from e

    def verify(self, token: str, expected_type: TokenType) -> TokenPayload:
        """decode に加えてトークン種別が期待どおりかを確認する"""
        payload = self.decode(token)
        if payload.type != expected_type.value:
            logger.warning(f"トークン種別不一致: expected={expected_type.value}, actual={payload.type}")
            raise WrongTokenTypeError("トークン種別が一致しません")
        return payload


def get_token_codec() -> TokenCodec:
    """現在の設定からトークンコーデックを取得（FastAPIの依存関数としても使用）"""
    return TokenCodec.from_settings(get_settings())

# app/core/dependencies.py
""" 認証情報を取得するための依存関数を提供 """

from typing import Optional
import logging

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.user import User
from app.crud.user import get_user_by_id
from app.core.security.exceptions import NotAuthenticatedError, TokenError
from app.core.security.jwt import TokenCodec, TokenType, get_token_codec
from app.core.security.mfa.service import TwoFactorAuthService

# ロガーの設定
logger = logging.getLogger(__name__)

# 認証用のOAuth2スキームを定義（ヘッダー欠如時も401を統一レスポンスで返すため auto_error=False）
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/rest/user/login", auto_error=False)


""" セッショントークンから現在のユーザーを取得する関数 """
def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    codec: TokenCodec = Depends(get_token_codec),
) -> User:
    if not token:
        raise NotAuthenticatedError("認証ヘッダーがありません")

    # セッショントークン以外（一時トークン・設定用トークン）はここで拒否される
    try:
        payload = codec.verify(token, TokenType.SESSION)
    except TokenError as e:
        logger.warning(f"セッショントークンの検証に失敗: {type(e).__name__}")
        raise NotAuthenticatedError("セッションが無効です") from e

    user = get_user_by_id(db, payload.user_id)
    if user is None:
        logger.warning(f"トークンのユーザーが存在しません: user_id={payload.user_id}")
        raise NotAuthenticatedError("ユーザーが見つかりません")
    return user


""" 2FAサービスを取得する関数 """
def get_two_factor_service(
    request: Request,
    db: Session = Depends(get_db),
    codec: TokenCodec = Depends(get_token_codec),
) -> TwoFactorAuthService:
    return TwoFactorAuthService(db, codec=codec, request=request)

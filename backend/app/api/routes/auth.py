# app/api/routes/auth.py
"""
 - ユーザーのログイン認証用APIルートを定義するモジュール。
 - 入力されたメールアドレス・パスワードを検証し、
   2FA無効ならセッショントークンを、有効なら一時トークンを返す。
"""

import logging
from typing import Union
from fastapi import APIRouter, Depends
from app.schemas.auth import (
    LoginRequest, Authentication, AuthenticationResponse,
    TmpTokenData, TotpRequiredResponse
)
from app.core.dependencies import get_two_factor_service
from app.core.security.mfa.service import TwoFactorAuthService, SecondFactorRequired

# ロガーの設定
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["Auth"])

# ログインAPI (パスワード検証後、セッショントークンまたは一時トークンを返す)
@router.post("/login", response_model=Union[AuthenticationResponse, TotpRequiredResponse])
def login_user(
    request: LoginRequest,
    service: TwoFactorAuthService = Depends(get_two_factor_service),
):
    result = service.login(request.email, request.password)

    if isinstance(result, SecondFactorRequired):
        logger.debug("2FAが必要なため一時トークンを返却")
        return TotpRequiredResponse(data=TmpTokenData(tmpToken=result.tmp_token))

    return AuthenticationResponse(
        authentication=Authentication(token=result.token, bid=result.bid, umail=result.umail)
    )

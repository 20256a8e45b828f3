"""
2FA APIルーター（/rest/2fa/...）
"""

from fastapi import APIRouter, Depends
from app.core.dependencies import get_current_user, get_two_factor_service
from app.models.user import User
from app.schemas.auth import AuthenticationResponse, Authentication
from app.schemas.mfa import (
    TwoFactorVerifyRequest, TwoFactorSetupRequest, TwoFactorDisableRequest,
    TwoFactorStatusResponse
)
from .service import TwoFactorAuthService


router = APIRouter(prefix="/2fa", tags=["2FA"])

@router.post("/verify", response_model=AuthenticationResponse)
def verify_totp_endpoint(
    body: TwoFactorVerifyRequest,
    service: TwoFactorAuthService = Depends(get_two_factor_service),
):
    """一時トークンとTOTPコードを検証してセッショントークンを発行"""
    issued = service.verify(body.tmpToken, body.totpToken)
    return AuthenticationResponse(
        authentication=Authentication(token=issued.token, bid=issued.bid, umail=issued.umail)
    )

@router.get("/status", response_model=TwoFactorStatusResponse, response_model_exclude_none=True)
def get_two_factor_status_endpoint(
    current_user: User = Depends(get_current_user),
    service: TwoFactorAuthService = Depends(get_two_factor_service),
):
    """2FA設定状況を取得"""
    return service.status(current_user)

@router.post("/setup")
def setup_two_factor_endpoint(
    body: TwoFactorSetupRequest,
    current_user: User = Depends(get_current_user),
    service: TwoFactorAuthService = Depends(get_two_factor_service),
):
    """2FAを有効化"""
    service.setup(current_user, body.password, body.setupToken, body.initialToken)
    return {"status": "success"}

@router.post("/disable")
def disable_two_factor_endpoint(
    body: TwoFactorDisableRequest,
    current_user: User = Depends(get_current_user),
    service: TwoFactorAuthService = Depends(get_two_factor_service),
):
    """2FAを無効化"""
    service.disable(current_user, body.password)
    return {"status": "success"}

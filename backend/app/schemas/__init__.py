from .auth import LoginRequest, Authentication, AuthenticationResponse, TmpTokenData, TotpRequiredResponse
from .user import UserCreate, UserOut, UserCreateResponse
from .mfa import (
    TwoFactorVerifyRequest, TwoFactorSetupRequest, TwoFactorDisableRequest,
    TwoFactorStatusResponse
)

__all__ = [
    "LoginRequest",
    "Authentication",
    "AuthenticationResponse",
    "TmpTokenData",
    "TotpRequiredResponse",
    "UserCreate",
    "UserOut",
    "UserCreateResponse",
    "TwoFactorVerifyRequest",
    "TwoFactorSetupRequest",
    "TwoFactorDisableRequest",
    "TwoFactorStatusResponse",
]

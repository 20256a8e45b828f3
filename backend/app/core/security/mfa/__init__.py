"""
MFA（2FA / TOTP）モジュール
  - ルーターは依存関数との循環インポートを避けるため app.core.security.mfa.router から直接インポートする
"""

from .service import MFAService, TwoFactorAuthService, SessionIssued, SecondFactorRequired
from .config import MFAConfig, mfa_config
from .crud import TwoFactorState, get_two_factor_state, set_two_factor_secret, clear_two_factor

__all__ = [
    "MFAService",
    "TwoFactorAuthService",
    "SessionIssued",
    "SecondFactorRequired",
    "MFAConfig",
    "mfa_config",
    "TwoFactorState",
    "get_two_factor_state",
    "set_two_factor_secret",
    "clear_two_factor",
]

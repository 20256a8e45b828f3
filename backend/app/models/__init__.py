# app/models/__init__.py

"""
このファイルは、SQLAlchemyのメタデータに全てのモデルを登録するための初期化モジュールです。
"""

# ユーザーモデル（ショップ利用者）
from .user import User

# 買い物かご（セッショントークンの bid）
from .basket import Basket

# 2FA（TOTP）設定
from .two_factor import TwoFactorConfig

# 監査ログ
from app.core.security.audit.models import AuditLog

__all__ = [
    "User",
    "Basket",
    "TwoFactorConfig",
    "AuditLog",
]

"""
監査ログモジュール
認証・2FAイベントの記録と追跡
"""

from .models import AuditLog, AuditEventType
from .service import AuditService
from .config import AuditConfig

__all__ = [
    "AuditLog",
    "AuditEventType",
    "AuditService",
    "AuditConfig"
]

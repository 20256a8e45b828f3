"""
監査ログのデータベースモデル
認証・2FAイベントの記録と追跡
"""
from datetime import datetime, timezone
from enum import Enum
from sqlalchemy import Column, String, DateTime, Text, Boolean, JSON
from app.db.base_class import Base
import uuid


class AuditEventType(str, Enum):
    """監査イベントのタイプ"""
    # 認証
    AUTH_LOGIN_SUCCESS = "auth:login:success"
    AUTH_LOGIN_FAILURE = "auth:login:failure"
    AUTH_LOGIN_TOTP_REQUIRED = "auth:login:totp_required"

    # 2FA
    MFA_VERIFY_SUCCESS = "mfa:verify:success"
    MFA_VERIFY_FAILURE = "mfa:verify:failure"
    MFA_ENABLED = "mfa:enabled"
    MFA_SETUP_FAILURE = "mfa:setup:failure"
    MFA_DISABLED = "mfa:disabled"
    MFA_DISABLE_FAILURE = "mfa:disable:failure"

    # ユーザー登録
    USER_REGISTER_SUCCESS = "user:register:success"
    USER_REGISTER_FAILURE = "user:register:failure"


class AuditLog(Base):
    """監査ログテーブル"""
    __tablename__ = "audit_logs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    timestamp = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)
    user_id = Column(String(36), nullable=True)  # 匿名アクセスの場合もある
    event_type = Column(String(64), nullable=False)
    resource = Column(String(64), nullable=True)  # 操作対象のリソース
    action = Column(String(64), nullable=True)    # 実行されたアクション
    success = Column(Boolean, default=True)   # 成功/失敗
    ip_address = Column(String(64), nullable=True)
    user_agent = Column(Text, nullable=True)
    details = Column(JSON, nullable=True)     # 追加の詳細情報

    def __repr__(self):
        return f"<AuditLog(id={self.id}, event_type={self.event_type}, user_id={self.user_id})>"

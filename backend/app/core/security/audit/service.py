"""
監査ログサービスクラス
認証・2FAイベントの記録と管理
"""
import logging
from typing import Optional, Dict, Any
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from fastapi import Request
from app.core.security.audit.models import AuditLog, AuditEventType
from app.core.security.audit.config import AuditConfig

# ロガーの設定
logger = logging.getLogger(__name__)


class AuditService:
    """監査ログのビジネスロジックを提供"""

    def __init__(self, db: Session, config: Optional[AuditConfig] = None):
        self.db = db
        self.config = config or AuditConfig()

    def log_event(
        self,
        event_type: AuditEventType,
        user_id: Optional[str] = None,
        resource: Optional[str] = None,
        action: Optional[str] = None,
        success: bool = True,
        request: Optional[Request] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> Optional[AuditLog]:
        """監査イベントを記録"""

        if not self.config.AUDIT_ENABLED:
            return None

        # リクエスト情報の抽出
        ip_address = None
        user_agent = None

        if request:
            if self.config.AUDIT_IP_TRACKING_ENABLED:
                ip_address = self._get_client_ip(request)
            if self.config.AUDIT_USER_AGENT_TRACKING_ENABLED:
                user_agent = request.headers.get("user-agent")

        # 機密情報のマスキング
        if details and self.config.AUDIT_MASK_SENSITIVE:
            details = self._mask_sensitive_data(details)

        audit_log = AuditLog(
            user_id=str(user_id) if user_id is not None else None,
            event_type=event_type.value,
            resource=resource,
            action=action,
            success=success,
            ip_address=ip_address,
            user_agent=user_agent,
            details=details,
        )

        try:
            self.db.add(audit_log)
            self.db.commit()
            self.db.refresh(audit_log)
            return audit_log
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e

    def log_event_safely(self, event_type: AuditEventType, **kwargs) -> Optional[AuditLog]:
        """監査ログを記録する（失敗しても認証処理は継続させる）"""
        try:
            return self.log_event(event_type, **kwargs)
        except SQLAlchemyError as audit_error:
            logger.warning(f"監査ログの保存に失敗: {audit_error}")
            return None

    def _get_client_ip(self, request: Request) -> str:
        """クライアントのIPアドレスを取得"""
        # プロキシ経由の場合の対応
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        # クライアントの直接IP
        if request.client and request.client.host:
            return request.client.host

        return "unknown"

    def _mask_sensitive_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """機密情報をマスキング"""
        sensitive_fields = ["password", "token", "secret", "key", "tmpToken", "totpToken", "setupToken", "initialToken"]
        masked_data = data.copy()

        for field in sensitive_fields:
            if field in masked_data:
                masked_data[field] = "***MASKED***"

        return masked_data

"""
MFAサービス - ビジネスロジック
  - MFAService          : TOTPコードの生成・検証（状態を持たない純粋関数群）
  - TwoFactorAuthService: ログイン → 一時トークン発行 → TOTP検証 → セッション発行、
                          および2FAの設定・無効化・状況確認を担当する
"""

import hashlib
import logging
from datetime import datetime
from typing import Optional, Union

import pyotp
from fastapi import Request
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.security.audit import AuditEventType, AuditService
from app.core.security.exceptions import (
    InvalidCredentialsError,
    TokenError,
    UnauthorizedError,
)
from app.core.security.jwt import (
    SessionTokenPayload,
    SetupTokenPayload,
    TemporaryTokenPayload,
    TokenCodec,
    TokenType,
    get_token_codec,
)
from app.core.security.password import verify_password
from app.crud.basket import get_or_create_basket
from app.crud.user import get_user_by_email, get_user_by_id
from app.models.user import User
from app.schemas.mfa import TwoFactorStatusResponse
from app.services.qr_code import QRCodeService
from .config import MFAConfig, mfa_config
from .crud import clear_two_factor, get_two_factor_state, set_two_factor_secret

# ロガーの設定
logger = logging.getLogger(__name__)

TimeLike = Union[datetime, int, float, None]


class MFAService:
    """TOTPサービスクラス"""

    @staticmethod
    def _totp(secret: str, config: MFAConfig = mfa_config) -> pyotp.TOTP:
        return pyotp.TOTP(
            secret,
            digits=config.totp_digits,
            digest=getattr(hashlib, config.totp_algorithm.lower()),
            interval=config.totp_period,
        )

    @staticmethod
    def generate_totp_secret() -> str:
        """TOTP秘密鍵を生成"""
        return pyotp.random_base32()

    @staticmethod
    def generate_totp_code(secret: str, for_time: TimeLike = None) -> str:
        """指定時刻（省略時は現在時刻）のTOTPコードを生成"""
        totp = MFAService._totp(secret)
        if for_time is None:
            return totp.now()
        return totp.at(for_time)

    @staticmethod
    def verify_totp_code(secret: str, code: str, for_time: TimeLike = None) -> bool:
        """
        TOTPコードを検証（前後 totp_valid_window ステップの時刻ずれを許容）
        秘密鍵やコードの形式が不正な場合は False を返す
        """
        if not secret or not code:
            return False
        code = code.strip()
        if not code.isdigit() or len(code) != mfa_config.totp_digits:
            return False

        try:
            totp = MFAService._totp(secret)
            return totp.verify(code, for_time=for_time, valid_window=mfa_config.totp_valid_window)
        except ValueError as e:
            # Base32として解釈できない秘密鍵
            logger.warning(f"TOTP秘密鍵の形式が不正です: {e}")
            return False

    @staticmethod
    def get_totp_uri(secret: str, email: str, issuer: Optional[str] = None) -> str:
        """TOTP URIを生成"""
        totp = MFAService._totp(secret)
        return totp.provisioning_uri(
            name=email,
            issuer_name=issuer or mfa_config.issuer
        )


class SessionIssued(BaseModel):
    """セッショントークン発行結果"""
    token: str
    bid: int
    umail: str


class SecondFactorRequired(BaseModel):
    """パスワード認証済み・TOTP待ち"""
    tmp_token: str


class TwoFactorAuthService:
    """2FAを含むログインフローを担当するサービスクラス"""

    def __init__(
        self,
        db: Session,
        codec: Optional[TokenCodec] = None,
        request: Optional[Request] = None,
    ):
        self.db = db
        self.codec = codec or get_token_codec()
        self.request = request
        self.audit_service = AuditService(db)

    def _audit(self, event_type: AuditEventType, action: str, success: bool, user_id=None, **details):
        self.audit_service.log_event_safely(
            event_type,
            user_id=user_id,
            resource="2fa" if event_type.value.startswith("mfa") else "auth",
            action=action,
            success=success,
            request=self.request,
            details=details or None,
        )

    def _issue_session(self, user: User) -> SessionIssued:
        """セッショントークンを発行"""
        basket = get_or_create_basket(self.db, user.id)
        token = self.codec.issue(
            SessionTokenPayload(user_id=user.id, email=user.email, bid=basket.id)
        )
        return SessionIssued(token=token, bid=basket.id, umail=user.email)

    def login(self, email: str, password: str) -> Union[SessionIssued, SecondFactorRequired]:
        """
        パスワードを検証し、2FA無効ならセッショントークンを、
        有効なら一時トークンを返す
        """
        user = get_user_by_email(self.db, email)
        if not user or not verify_password(password, user.password_hash):
            logger.warning("ログイン失敗: メールアドレスまたはパスワードが正しくありません")
            self._audit(AuditEventType.AUTH_LOGIN_FAILURE, "login", False, email=email)
            raise InvalidCredentialsError("メールアドレスまたはパスワードが正しくありません")

        state = get_two_factor_state(self.db, user.id)
        if state.enabled:
            logger.debug(f"2FA有効ユーザーのため一時トークンを発行: user_id={user.id}")
            tmp_token = self.codec.issue(TemporaryTokenPayload(user_id=user.id))
            self._audit(AuditEventType.AUTH_LOGIN_TOTP_REQUIRED, "login", True, user_id=user.id)
            return SecondFactorRequired(tmp_token=tmp_token)

        self._audit(AuditEventType.AUTH_LOGIN_SUCCESS, "login", True, user_id=user.id)
        return self._issue_session(user)

    def verify(self, tmp_token: str, totp_token: str) -> SessionIssued:
        """一時トークンとTOTPコードを検証し、セッショントークンを発行"""
        try:
            payload = self.codec.verify(tmp_token, TokenType.TEMPORARY)
        except TokenError as e:
            logger.warning(f"一時トークンの検証に失敗: {type(e).__name__}")
            self._audit(AuditEventType.MFA_VERIFY_FAILURE, "verify", False, reason="invalid_tmp_token")
            raise

        user = get_user_by_id(self.db, payload.user_id)
        state = get_two_factor_state(self.db, payload.user_id)
        if user is None or not state.enabled:
            logger.warning(f"2FAが有効なユーザーが見つかりません: user_id={payload.user_id}")
            self._audit(AuditEventType.MFA_VERIFY_FAILURE, "verify", False, user_id=payload.user_id, reason="not_enabled")
            raise UnauthorizedError()

        if not MFAService.verify_totp_code(state.secret, totp_token):
            logger.warning(f"TOTPコードが一致しません: user_id={user.id}")
            self._audit(AuditEventType.MFA_VERIFY_FAILURE, "verify", False, user_id=user.id, reason="totp_mismatch")
            raise UnauthorizedError()

        self._audit(AuditEventType.MFA_VERIFY_SUCCESS, "verify", True, user_id=user.id)
        return self._issue_session(user)

    def status(self, user: User) -> TwoFactorStatusResponse:
        """
        2FA設定状況を返す。
        設定済みの秘密鍵は返さず、未設定の場合のみ新しい候補秘密鍵と設定用トークンを返す
        """
        state = get_two_factor_state(self.db, user.id)
        if state.enabled:
            return TwoFactorStatusResponse(setup=True, email=user.email)

        secret = MFAService.generate_totp_secret()
        setup_token = self.codec.issue(SetupTokenPayload(secret=secret))
        otpauth_url = MFAService.get_totp_uri(secret, user.email)
        return TwoFactorStatusResponse(
            setup=False,
            email=user.email,
            secret=secret,
            setupToken=setup_token,
            otpauthUrl=otpauth_url,
            qrCode=QRCodeService.generate_qr_data_url(otpauth_url),
        )

    def setup(self, user: User, password: str, setup_token: str, initial_token: str) -> None:
        """設定用トークンの秘密鍵と最初のTOTPコードを検証し、2FAを有効化"""
        if not verify_password(password, user.password_hash):
            logger.warning(f"2FA設定: パスワード不一致 user_id={user.id}")
            self._audit(AuditEventType.MFA_SETUP_FAILURE, "setup", False, user_id=user.id, reason="password")
            raise UnauthorizedError()

        if get_two_factor_state(self.db, user.id).enabled:
            logger.warning(f"2FA設定: 既に有効です user_id={user.id}")
            self._audit(AuditEventType.MFA_SETUP_FAILURE, "setup", False, user_id=user.id, reason="already_enabled")
            raise UnauthorizedError()

        try:
            payload = self.codec.verify(setup_token, TokenType.SETUP)
        except TokenError as e:
            logger.warning(f"2FA設定: 設定用トークンの検証に失敗 {type(e).__name__}")
            self._audit(AuditEventType.MFA_SETUP_FAILURE, "setup", False, user_id=user.id, reason="invalid_setup_token")
            raise

        if not MFAService.verify_totp_code(payload.secret, initial_token):
            logger.warning(f"2FA設定: 初回TOTPコード不一致 user_id={user.id}")
            self._audit(AuditEventType.MFA_SETUP_FAILURE, "setup", False, user_id=user.id, reason="totp_mismatch")
            raise UnauthorizedError()

        set_two_factor_secret(self.db, user.id, payload.secret)
        logger.info(f"2FAを有効化しました: user_id={user.id}")
        self._audit(AuditEventType.MFA_ENABLED, "setup", True, user_id=user.id)

    def disable(self, user: User, password: str) -> None:
        """パスワードを再確認して2FAを無効化（既に無効でも成功）"""
        if not verify_password(password, user.password_hash):
            logger.warning(f"2FA無効化: パスワード不一致 user_id={user.id}")
            self._audit(AuditEventType.MFA_DISABLE_FAILURE, "disable", False, user_id=user.id, reason="password")
            raise UnauthorizedError()

        clear_two_factor(self.db, user.id)
        logger.info(f"2FAを無効化しました: user_id={user.id}")
        self._audit(AuditEventType.MFA_DISABLED, "disable", True, user_id=user.id)

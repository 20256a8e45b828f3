"""
MFA（2FA）設定のCRUD操作を定義するモジュール
  - TwoFactorConfig の行が存在しない = 2FA無効。
  - 同一ユーザーへの同時更新は後勝ち（1行単位の更新のみ保証）。
"""

import logging
from typing import Optional
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.models.two_factor import TwoFactorConfig

# ロガーの設定
logger = logging.getLogger(__name__)


class TwoFactorState(BaseModel):
    """2FA設定状況"""
    enabled: bool = False
    secret: Optional[str] = None


def get_two_factor_state(db: Session, user_id: int) -> TwoFactorState:
    """ユーザーの2FA設定状況を取得する"""
    config = db.get(TwoFactorConfig, user_id)
    if config is None or not config.enabled:
        return TwoFactorState(enabled=False)
    return TwoFactorState(enabled=True, secret=config.secret)


def set_two_factor_secret(db: Session, user_id: int, secret: str) -> TwoFactorConfig:
    """
    TOTP秘密鍵を保存し、2FAを有効化する
    """
    config = db.get(TwoFactorConfig, user_id)
    if config is None:
        config = TwoFactorConfig(user_id=user_id, secret=secret, enabled=True)
        db.add(config)
        try:
            db.commit()
        except IntegrityError:
            # 同時に別リクエストが作成した場合は、その行を上書きする
            db.rollback()
            logger.info(f"2FA設定の同時作成を検出、更新に切り替え: user_id={user_id}")
            config = db.get(TwoFactorConfig, user_id)
            if config is None:
                # 直後に無効化で削除された場合は作り直す
                config = TwoFactorConfig(user_id=user_id, secret=secret, enabled=True)
                db.add(config)
            else:
                config.secret = secret
                config.enabled = True
            db.commit()
    else:
        config.secret = secret
        config.enabled = True
        db.commit()

    db.refresh(config)
    return config


def clear_two_factor(db: Session, user_id: int) -> None:
    """
    2FA設定を削除する（既に無効の場合も成功扱い）
    """
    deleted = db.query(TwoFactorConfig).filter(TwoFactorConfig.user_id == user_id).delete()
    db.commit()
    if not deleted:
        logger.debug(f"2FAは既に無効です: user_id={user_id}")

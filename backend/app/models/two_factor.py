from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from app.db.base_class import Base

class TwoFactorConfig(Base):
    """
    - ユーザーごとの2FA（TOTP）設定を格納するテーブル。
    - 1ユーザーにつき最大1行。行が存在しない場合は2FA無効とみなす。
    - 設定時に作成され、無効化時に削除される。
    """

    __tablename__ = "two_factor_configs"

    # 対象ユーザー（主キー / 外部キー）
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)

    # TOTPの共有秘密鍵（Base32）
    secret = Column(String(255), nullable=False)

    # 2FAが有効か
    enabled = Column(Boolean, default=True, nullable=False)

    # レコード作成日時 （UTC）
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    # レコード更新日時 （UTC）
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="two_factor")

    def __repr__(self):
        # 秘密鍵は出力しない
        return f"<TwoFactorConfig(user_id={self.user_id}, enabled={self.enabled})>"

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from app.db.base_class import Base

class User(Base):
    """
    - ショップ利用者の情報を格納するテーブル。
    - 2FA設定は TwoFactorConfig に分離しており、ここには秘密鍵を持たない。
    """

    __tablename__ = "users"

    # ユーザーID （連番 / 主キー）
    id = Column(Integer, primary_key=True, autoincrement=True)

    # ログインID （メールアドレス） ※一意制約
    email = Column(String(255), unique=True, nullable=False)

    # ハッシュ化されたパスワード
    password_hash = Column(String(255), nullable=False)

    # レコード作成日時 （UTC）
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    # レコード更新日時 （更新時に自動更新 / UTC）
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # リレーション
    basket = relationship("Basket", back_populates="user", uselist=False)
    two_factor = relationship("TwoFactorConfig", back_populates="user", uselist=False, cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"

from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship
from app.db.base_class import Base

class Basket(Base):
    """ユーザーごとの買い物かご（セッショントークンの bid に使用）"""

    __tablename__ = "baskets"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # 所有ユーザー ※1ユーザー1かご
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)

    user = relationship("User", back_populates="basket")

# app/crud/basket.py
"""
 - 買い物かごに関するDB操作を定義するモジュール。
 - ログイン時に bid（かごID）をトークンへ含めるためにのみ使用する。
"""

from sqlalchemy.orm import Session
from app.models.basket import Basket


# ユーザーのかごを取得し、なければ作成する関数
def get_or_create_basket(db: Session, user_id: int) -> Basket:
    basket = db.query(Basket).filter(Basket.user_id == user_id).first()
    if basket:
        return basket

    basket = Basket(user_id=user_id)
    db.add(basket)
    db.commit()
    db.refresh(basket)
    return basket

# app/crud/user.py
"""
 - ユーザーに関するDB操作（CRUD）を定義するモジュール。
 - 主に SQLAlchemy を通じて User モデルとデータベースをやり取りする。
"""

from typing import Optional
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from app.models.user import User
from app.schemas.user import UserCreate


# 新規ユーザーを登録する関数　（事前にハッシュ化されたパスワードを引数として受け取る)
def create_user(db: Session, user_in: UserCreate, password_hash: str) -> User:

    # 1. メールアドレスの重複チェック（既に存在していたらエラー）
    existing_user = get_user_by_email(db, user_in.email)
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="このメールアドレスは既に登録されています。"
        )

    # 2. ユーザー情報をDBに保存
    user = User(email=user_in.email, password_hash=password_hash)
    db.add(user)
    db.commit()
    db.refresh(user)

    return user

# メールアドレスでユーザーを検索する関数
def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()

# IDでユーザーを取得する関数
def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)

"""
デモ用の初期データ投入
  - 2FA有効アカウント（wurstbrot）と2FA無効アカウント（J12934）などを作成する。
  - 既に存在するメールアドレスはスキップするため、何度実行しても結果は同じ。
"""

import logging
from sqlalchemy.orm import Session
from app.core.config import get_settings
from app.core.security.password import hash_password
from app.core.security.mfa.crud import set_two_factor_secret
from app.crud.user import get_user_by_email
from app.models.user import User

# ロガーの設定
logger = logging.getLogger(__name__)

# (ID, ローカル部, パスワード, TOTP秘密鍵)
DEMO_USERS = [
    (1, "admin", "admin123", None),
    (10, "wurstbrot", "EinBelegtesBrotMitSchinkenSCHINKEN!", "IFTXE3SPOEYVURT2MRYGI52TKJ4HC3KH"),
    (17, "J12934", "0Y8rMnww$*9VFYE§59-!Fg1L6t&6lB", None),
]

def seed_demo_users(db: Session) -> int:
    """デモユーザーを作成し、作成した件数を返す"""
    domain = get_settings().application_domain
    created = 0

    for user_id, local_part, password, totp_secret in DEMO_USERS:
        email = f"{local_part}@{domain}"
        if get_user_by_email(db, email):
            continue

        user = User(id=user_id, email=email, password_hash=hash_password(password))
        db.add(user)
        db.commit()
        if totp_secret:
            set_two_factor_secret(db, user.id, totp_secret)
        created += 1
        logger.info(f"デモユーザーを作成: {email}")

    return created

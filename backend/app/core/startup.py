import logging
from app.core.config import get_settings
from app.db.base_class import Base
from app.db.session import engine, SessionLocal
from app.db.seed import seed_demo_users
import app.models  # noqa: F401  メタデータに全モデルを登録

# ロガーの設定
logger = logging.getLogger(__name__)

__all__ = ["init_database"]

def init_database():
    """テーブルを作成し、必要に応じてデモデータを投入する"""
    Base.metadata.create_all(bind=engine)
    logger.info("✅ データベースのテーブルを作成しました")

    if not get_settings().seed_demo_data:
        return

    db = SessionLocal()
    try:
        created = seed_demo_users(db)
        logger.info(f"✅ デモユーザーを{created}件作成しました")
    finally:
        db.close()

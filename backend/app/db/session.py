from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from app.core.config import settings
from typing import Generator
import logging

# ロガーの設定
logger = logging.getLogger(__name__)

# すでにconfig.pyで定義済みのURLを使う
DATABASE_URL = settings.get_database_url()

# SQLiteはスレッドをまたいだ接続の利用を明示的に許可する必要がある
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    DATABASE_URL,
    connect_args=connect_args,
    pool_pre_ping=True,
    echo=settings.database_echo
)
logger.info(f"データベースエンジンを作成: {engine.url.render_as_string(hide_password=True)}")

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()  # リクエスト終了時にクローズ

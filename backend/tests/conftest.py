"""ログイン・2FA APIテスト用のpytest設定とフィクスチャ"""

from datetime import timedelta
from typing import Callable, Generator, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app import main, models  # noqa: F401  (models registers every table)
from app.core.security.jwt import TokenCodec, TokenType, get_token_codec
from app.core.security.mfa.crud import set_two_factor_secret
from app.core.security.password import hash_password
from app.db.base_class import Base
from app.db.session import get_db
from app.models.user import User

TEST_SECRET_KEY = "test-secret-key-for-juice-shop"


@pytest.fixture
def engine():
    """テストごとに新しいインメモリSQLiteデータベースを用意"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def codec() -> TokenCodec:
    return TokenCodec(
        secret_key=TEST_SECRET_KEY,
        algorithm="HS256",
        expirations={
            TokenType.SESSION: timedelta(minutes=60),
            TokenType.TEMPORARY: timedelta(minutes=5),
            TokenType.SETUP: timedelta(minutes=10),
        },
    )


@pytest.fixture
def client(engine, codec) -> Generator[TestClient, None, None]:
    """インメモリDBとテスト用署名鍵に差し替えたFastAPI TestClient"""
    testing_session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = testing_session()
        try:
            yield db
        finally:
            db.close()

    main.app.dependency_overrides[get_db] = override_get_db
    main.app.dependency_overrides[get_token_codec] = lambda: codec
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session) -> Callable[..., User]:
    """ユーザーをDBに直接作成する（秘密鍵を渡すと2FA有効）"""

    def _make_user(
        email: str,
        password: str,
        totp_secret: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> User:
        user = User(id=user_id, email=email, password_hash=hash_password(password))
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        if totp_secret:
            set_two_factor_secret(db_session, user.id, totp_secret)
        return user

    return _make_user

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from dotenv import load_dotenv
import logging
from pathlib import Path

# ロガーの設定
logger = logging.getLogger(__name__)

load_dotenv()

# このファイルは `backend/app/core/config.py` にあるため、
# `BASE_DIR` は `backend/app` を指す
BASE_DIR = Path(__file__).resolve().parent.parent

# .envファイルの絶対パスを明示的に設定（backend直下）
ENV_FILE_PATH = BASE_DIR.parent / ".env"

class Settings(BaseSettings):
    # Database（Juice ShopはSQLiteを使用）
    database_url: str = Field(default="sqlite:///./juiceshop.sqlite", alias="DATABASE_URL")
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")

    # 認証（トークン署名鍵はプロセス全体で1つ）
    secret_key: str = Field(default="your-secret-key-here-make-it-long-and-secure", alias="SECRET_KEY")
    algorithm: str = Field(default="HS256", alias="ALGORITHM")
    access_token_expire_minutes: int = Field(default=360, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    tmp_token_expire_minutes: int = Field(default=5, alias="TMP_TOKEN_EXPIRE_MINUTES")
    setup_token_expire_minutes: int = Field(default=10, alias="SETUP_TOKEN_EXPIRE_MINUTES")

    # アプリケーション
    application_name: str = Field(default="OWASP Juice Shop", alias="APPLICATION_NAME")
    application_domain: str = Field(default="juice-sh.op", alias="APPLICATION_DOMAIN")
    seed_demo_data: bool = Field(default=True, alias="SEED_DEMO_DATA")

    # CORS設定（文字列として受け取り、手動でパース）
    cors_allow_origins_str: str = Field(
        default="http://localhost:4200",
        alias="CORS_ALLOW_ORIGINS"
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods_str: str = Field(
        default="GET,POST,PUT,DELETE,OPTIONS",
        alias="CORS_ALLOW_METHODS"
    )
    cors_allow_headers_str: str = Field(
        default="*",
        alias="CORS_ALLOW_HEADERS"
    )
    cors_max_age: int = Field(default=86400, alias="CORS_MAX_AGE")  # 24時間

    # 環境設定
    environment: str = Field(default="development", alias="ENVIRONMENT")

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH),
        extra="ignore",  # 未定義の環境変数は無視
        populate_by_name=True,
    )

    def get_database_url(self) -> str:
        return self.database_url

    @property
    def is_production(self) -> bool:
        """本番環境かどうかを判定"""
        return self.environment.lower() in ["production", "prod"]

    @property
    def cors_allow_origins(self) -> list[str]:
        """CORSオリジンのリストを取得"""
        return [origin.strip() for origin in self.cors_allow_origins_str.split(",")]

    @property
    def cors_allow_methods(self) -> list[str]:
        """CORSメソッドのリストを取得"""
        return [method.strip() for method in self.cors_allow_methods_str.split(",")]

    @property
    def cors_allow_headers(self) -> list[str]:
        """CORSヘッダーのリストを取得"""
        if self.cors_allow_headers_str == "*":
            return ["*"]
        return [header.strip() for header in self.cors_allow_headers_str.split(",")]

    def get_cors_origins(self) -> list[str]:
        """環境に応じたCORSオリジンを取得"""
        if self.is_production:
            if "localhost" in self.cors_allow_origins_str:
                logger.warning("本番環境でCORS_ALLOW_ORIGINSにlocalhostが含まれています")
            return self.cors_allow_origins
        # 開発環境（Angularの開発サーバーも許可）
        return sorted(set(self.cors_allow_origins) | {
            "http://localhost:4200",
            "http://127.0.0.1:4200",
            "http://localhost:3000",
        })


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    logger.info("Loaded settings: environment=%s, database=%s", settings.environment, settings.database_url)
    return settings


def reload_settings() -> Settings:
    """設定を再読み込みする（署名鍵のローテーションはここを経由する）"""
    get_settings.cache_clear()
    return get_settings()


settings = get_settings()

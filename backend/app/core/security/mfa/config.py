# app/core/security/mfa/config.py
"""
MFA（多要素認証）設定管理
  - このファイルでは、TOTPの桁数・周期・許容する時刻ずれなどのMFA関連の設定を集中管理する。
  - すべての値は環境変数（.env）で上書き可能。
  - 環境変数の接頭辞は "MFA_"。
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal

class MFAConfig(BaseSettings):
    """MFA設定クラス"""

    # TOTP（ワンタイムパスワード）設定
    totp_algorithm: Literal["SHA1", "SHA256", "SHA512"] = "SHA1"    # ハッシュアルゴリズム（認証アプリ互換のためSHA1）
    totp_digits: Literal[6, 8] = 6    # ワンタイムパスワードの桁数
    totp_period: int = 30   # 1ステップの秒数
    totp_valid_window: int = 1    # 前後に許容するステップ数（端末との時刻ずれ対策）

    # 認証アプリに表示する発行者名
    issuer: str = "OWASP Juice Shop"

    model_config = SettingsConfigDict(
        env_prefix="MFA_",    # 環境変数の接頭辞
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",    # 未定義のキーは無視
    )

# グローバル設定インスタンス
mfa_config = MFAConfig()

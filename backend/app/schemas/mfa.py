"""
2FA（TOTP）関連のデータスキーマを定義するモジュール
"""

from pydantic import BaseModel, Field
from typing import Optional

class TwoFactorVerifyRequest(BaseModel):
    """一時トークン + TOTPコード検証リクエスト用スキーマ"""
    tmpToken: str = Field(..., description="パスワード認証後に発行された一時トークン")
    totpToken: str = Field(..., description="認証アプリに表示された6桁のTOTPコード")

class TwoFactorSetupRequest(BaseModel):
    """2FA設定リクエスト用スキーマ"""
    password: str = Field(..., description="現在のパスワード")
    setupToken: str = Field(..., description="設定用秘密鍵を含む署名済みトークン")
    initialToken: str = Field(..., description="設定用秘密鍵から生成した最初のTOTPコード")

class TwoFactorDisableRequest(BaseModel):
    """2FA無効化リクエスト用スキーマ"""
    password: str = Field(..., description="現在のパスワード")

class TwoFactorStatusResponse(BaseModel):
    """2FA設定状況レスポンス用スキーマ（未設定時のみ設定用の候補秘密鍵を含む）"""
    setup: bool = Field(..., description="2FAが有効化されているか")
    email: str = Field(..., description="ユーザーのメールアドレス")
    secret: Optional[str] = Field(default=None, description="新しく生成した候補秘密鍵")
    setupToken: Optional[str] = Field(default=None, description="候補秘密鍵を含む設定用トークン")
    otpauthUrl: Optional[str] = Field(default=None, description="認証アプリ登録用のotpauth URI")
    qrCode: Optional[str] = Field(default=None, description="otpauth URIのQRコード（data URL）")

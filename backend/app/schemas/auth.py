# app/schemas/auth.py
"""
 - ログインに関連するデータスキーマを定義するモジュール。
 - 主に FastAPI のログインAPI（POST /rest/user/login）で使用される、
   入力（メールアドレス・パスワード）と出力（トークン）の構造を定義する。
"""

from typing import Literal
from pydantic import BaseModel

# ログインAPIのリクエストボディ用スキーマ
class LoginRequest(BaseModel):
    email: str
    password: str

# 認証成功時に返すトークン情報
class Authentication(BaseModel):
    token: str
    bid: int
    umail: str

# ログイン成功（2FAなし）／2FA検証成功時のレスポンススキーマ
class AuthenticationResponse(BaseModel):
    authentication: Authentication

# 2FAが有効なユーザーのログイン時に返す一時トークン
class TmpTokenData(BaseModel):
    tmpToken: str

class TotpRequiredResponse(BaseModel):
    status: Literal["totp_token_required"] = "totp_token_required"
    data: TmpTokenData

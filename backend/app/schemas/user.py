from pydantic import BaseModel, EmailStr, Field
from typing import Optional, Literal


# ユーザー登録用スキーマ（POST /api/Users で使う）
class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=5, max_length=40)
    passwordRepeat: Optional[str] = None
    securityQuestion: Optional[dict] = None
    securityAnswer: Optional[str] = None

# ユーザー表示用（レスポンスなどで使用）
class UserOut(BaseModel):
    id: int
    email: str
    # password_hash と 2FA秘密鍵はセキュリティ上、レスポンスには含めない

    model_config = {
        # Pydantic v2 で ORM 変換を許可
        "from_attributes": True
    }

# ユーザー登録成功時のレスポンス
class UserCreateResponse(BaseModel):
    status: Literal["success"] = "success"
    data: UserOut

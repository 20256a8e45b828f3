# app/api/routes/user.py
"""
ユーザー管理用APIルート
"""

from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session
import logging
from app.schemas.user import UserCreate, UserOut, UserCreateResponse
from app.core.security import hash_password
from app.core.security.audit import AuditService, AuditEventType
from app.crud.user import create_user
from app.db.session import get_db

# ロガーの設定
logger = logging.getLogger(__name__)

# FastAPIのルーターを初期化
router = APIRouter(prefix="/Users", tags=["Users"])

@router.post("", response_model=UserCreateResponse, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=UserCreateResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def register_user(
    http_request: Request,
    user_data: UserCreate,
    db: Session = Depends(get_db)
):
    """新規ユーザー登録（2FAは登録後に /rest/2fa/setup で設定する）"""

    # 監査サービスの初期化
    audit_service = AuditService(db)

    # 1. パスワード確認の一致チェック
    if user_data.passwordRepeat is not None and user_data.passwordRepeat != user_data.password:
        audit_service.log_event_safely(
            AuditEventType.USER_REGISTER_FAILURE,
            resource="user",
            action="register",
            success=False,
            request=http_request,
            details={"email": user_data.email, "reason": "password_mismatch"}
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="パスワードと確認用パスワードが一致しません。"
        )

    # 2. パスワードをハッシュ化してユーザーを作成（重複時は400）
    try:
        user = create_user(db, user_data, hash_password(user_data.password))
    except HTTPException:
        audit_service.log_event_safely(
            AuditEventType.USER_REGISTER_FAILURE,
            resource="user",
            action="register",
            success=False,
            request=http_request,
            details={"email": user_data.email, "reason": "duplicate_email"}
        )
        raise

    logger.info(f"ユーザー登録完了: user_id={user.id}")
    audit_service.log_event_safely(
        AuditEventType.USER_REGISTER_SUCCESS,
        user_id=user.id,
        resource="user",
        action="register",
        success=True,
        request=http_request,
    )

    return UserCreateResponse(data=UserOut.model_validate(user))

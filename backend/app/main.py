from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import logging
from app.api.routes import user, auth
from app.core.startup import init_database
from app.core.security.exceptions import AuthError
from app.core.security.mfa.router import router as mfa_router
from app.core.security.cors import get_cors_middleware_config, get_cors_config
from app.core.config import get_settings

# ロガーの設定
logger = logging.getLogger(__name__)

app = FastAPI(title="OWASP Juice Shop API")

# 環境別CORS設定
app.add_middleware(CORSMiddleware, **get_cors_middleware_config())

# CORS設定のログ出力（デバッグ用）
settings = get_settings()
logger.info(f"環境: {settings.environment}")
logger.info(f"CORS設定: {get_cors_config()}")

@app.on_event("startup")
async def startup_event():
    init_database()

""" ----------
 例外ハンドラー
---------- """
UNAUTHORIZED_BODY = {"status": "error", "message": "Unauthorized"}

AUTH_PATH_PREFIXES = ("/rest/user/login", "/rest/2fa/")

def unauthorized_response() -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content=UNAUTHORIZED_BODY,
        headers={"WWW-Authenticate": "Bearer"},
    )

# 認証系エラーはどの要素で失敗したかに関わらず同一の401レスポンスを返す
@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError):
    logger.debug(f"認証エラー: {type(exc).__name__} {request.method} {request.url.path}")
    return unauthorized_response()

# ログイン・2FAのリクエスト形式エラーも401に揃える（不正な項目名や入力値を返さない）
@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    if request.url.path.startswith(AUTH_PATH_PREFIXES):
        logger.debug(f"認証リクエストの形式エラー: {request.method} {request.url.path}")
        return unauthorized_response()
    return await request_validation_exception_handler(request, exc)

""" ----------
 ルーター登録
---------- """
# ユーザー登録API
app.include_router(user.router, prefix="/api")

# ログインAPI
app.include_router(auth.router, prefix="/rest")

# 2FA関連API
app.include_router(mfa_router, prefix="/rest")


@app.get("/")
def root():
    return {"message": "OWASP Juice Shop"}

@app.get("/health")
def health_check():
    return {"status": "healthy"}

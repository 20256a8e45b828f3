from app.core.config import get_settings

def get_cors_config():
    """CORS設定の詳細情報を取得（デバッグ用）"""
    settings = get_settings()

    return {
        "environment": settings.environment,
        **get_cors_middleware_config(),
    }

def get_cors_middleware_config():
    """CORS設定の辞書を取得（FastAPIのadd_middleware用）"""
    settings = get_settings()

    return {
        "allow_origins": settings.get_cors_origins(),
        "allow_credentials": settings.cors_allow_credentials,
        "allow_methods": settings.cors_allow_methods,
        "allow_headers": settings.cors_allow_headers,
        "max_age": settings.cors_max_age,
    }

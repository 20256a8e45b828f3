"""
認証・2FAフローで使用する例外クラス
  - どの要素（パスワード / トークン / TOTP）で失敗したかを外部に漏らさないため、
    すべて AuthError のサブクラスとして定義し、HTTP 401 の同一レスポンスに変換する。
"""


class AuthError(Exception):
    """認証関連エラーの基底クラス"""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)
        self.message = message


class InvalidCredentialsError(AuthError):
    """メールアドレスまたはパスワードが正しくない"""


class UnauthorizedError(AuthError):
    """トークン不正・期限切れ・TOTP不一致など"""


class NotAuthenticatedError(AuthError):
    """保護されたルートにセッションなし（または無効なセッション）でアクセスした"""


class TokenError(UnauthorizedError):
    """トークン検証エラーの基底クラス"""


class InvalidSignatureError(TokenError):
    """署名不正・デコード失敗"""


class ExpiredTokenError(TokenError):
    """有効期限切れ"""


class WrongTokenTypeError(TokenError):
    """署名は正しいがトークン種別が期待と異なる"""

from sqlalchemy.orm import declarative_base

# 全モデル共通のBaseクラス
Base = declarative_base()

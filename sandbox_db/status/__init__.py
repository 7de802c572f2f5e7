"""
sandbox_db.status パッケージ

スキーマのインポートの進捗・エラー・警告を表すクラスを提供する

Modules
-------
- `errors`: エラークラスを提供
- `progress`: 進捗段階とログレベルを提供
- `warnings`: 警告クラスを提供
"""
from .progress import ImportStage, LogLevel

"""
sandbox_db.config パッケージ

Classes
-------
- `SchemaImporterConfig`: スキーマインポーターの設定を管理するクラス
"""
from .importer_config import SchemaImporterConfig, DEFAULT_CONFIG

"""
スキーマインポーターの設定を管理するクラス

Classes
-------
SchemaImporterConfig:
    スキーマインポーターの設定を管理するクラス
    大まかに以下の項目を管理する
- config.toml 由来
    - データベースの設定
    - スキーマ (SQLファイル・テーブル接頭辞) の設定
    - ログの設定
    - デバッグの設定

Constants
---------
DEFAULT_CONFIG: config.toml が存在しない場合に書き出す初期設定
"""
import os
from os import path, makedirs
from typing import Any, Final, Optional

import tomlkit as toml
import tomlkit.items as toml_items

from sandbox_db.database import ImportSettings
from sandbox_db.database.schema_toolkit import PLACEHOLDER_TABLE_PREFIX, SQLDialect



DEFAULT_CONFIG: Final[str] = f"""\
# スキーマインポーターの設定
# {{BASE_DIR}} はアプリケーションのディレクトリに置換される

[database]
# "sqlite" または "mysql"
dialect = "sqlite"
# SQLite のデータベースファイル
path = "{{BASE_DIR}}/data/sandbox.db"
# MySQL の接続情報
host = "127.0.0.1"
port = 3306
user = "root"
password = ""
# パスワードを記録した環境変数名 (空でない場合は password より優先)
password_env = ""
name = "wordpress"
# プラットフォームのテーブル接頭辞
table_prefix = "wp_"
charset = "utf8mb4"
collate = "utf8mb4_unicode_520_ci"
# テーブルオプション (空の場合は charset, collate から生成)
charset_collate = ""

[schema]
sql_path = "{{BASE_DIR}}/resources/schema.sql"
# アプリケーション内部のテーブル接頭辞
db_prefix = "slds_"
# SQLファイル内のテーブル接頭辞
placeholder_prefix = "{PLACEHOLDER_TABLE_PREFIX}"
# インポート後に全カラムの存在を確認するか
verify_after_import = true

[logging]
log_path = "{{BASE_DIR}}/logs/schema-import.log"
log_encoding = "utf-8"
# "NEVER" または "ALWAYS_ON_STARTUP"
log_init = "NEVER"
log_to_console = false

[debugging]
# .run() 実行時に想定外のエラーを catch するか (False: デバッグ用)
catch_errors_on_run = true
"""
"""config.toml が存在しない場合に書き出す初期設定"""

_DIALECTS: Final[dict[str, SQLDialect]] = {
    "sqlite": SQLDialect.SQLITE,
    "mysql": SQLDialect.MYSQL,
}
_LOG_INIT_VALUES: Final[tuple[str, ...]] = ("NEVER", "ALWAYS_ON_STARTUP")


def _get_section(data: toml.TOMLDocument, name: str) -> toml_items.Table:
    section = data.get(name)
    if (section is None) or (not isinstance(section, toml_items.Table)):
        raise ValueError(f"Section '[{name}]' not found in the config file " \
                         "or is not a table")
    return section

def _get_value(section: toml_items.Table, key: str, default: Any) -> Any:
    item = section.get(key, default)
    if isinstance(item, toml_items.Item):
        return item.unwrap()
    return item


class SchemaImporterConfig:
    """
    スキーマインポーターの設定を管理するクラス
    """

    def __init__(self, app_dir:str, config_file:Optional[str]=None):
        """
        Parameters
        ----------
        app_dir : str
            アプリケーションのディレクトリ
            設定ファイル内の {BASE_DIR} はこのディレクトリに置換される
        config_file : str, optional
            設定ファイルのパス、デフォルトは app_dir/config/config.toml
        """
        self.app_dir = app_dir
        """アプリケーションのディレクトリ"""
        self.config_file = config_file or path.join(app_dir, 'config', 'config.toml')
        """設定ファイル"""

        # 設定ファイルが存在しない場合は初期設定を書き出す
        if not path.exists(self.config_file):
            if not path.exists(path.dirname(self.config_file)):
                makedirs(path.dirname(self.config_file))
            with open(self.config_file, "w", encoding="utf-8") as f:
                f.write(DEFAULT_CONFIG)

        with open(self.config_file, "r", encoding="utf-8") as f:
            _c = toml.parse(f.read())

        _db = _get_section(_c, 'database')
        _dialect = _get_value(_db, 'dialect', "sqlite").lower()
        if _dialect not in _DIALECTS:
            raise ValueError(f"Unsupported database dialect: '{_dialect}'")
        self.dialect: SQLDialect = _DIALECTS[_dialect]
        """データベースの種類"""
        self.db_path = self._expand(_get_value(_db, 'path', "{BASE_DIR}/data/sandbox.db"))
        """SQLite のデータベースファイルのパス"""
        self.db_host = _get_value(_db, 'host', "127.0.0.1")
        """MySQL のホスト名"""
        self.db_port = int(_get_value(_db, 'port', 3306))
        """MySQL のポート番号"""
        self.db_user = _get_value(_db, 'user', "root")
        """MySQL のユーザ名"""
        self.db_password_env = _get_value(_db, 'password_env', "")
        """MySQL のパスワードの取得先（環境変数名）"""
        self.db_password = _get_value(_db, 'password', "")
        """MySQL のパスワード、環境変数の指定がある場合はそちらを優先"""
        if self.db_password_env and (_pw := os.getenv(self.db_password_env)):
            self.db_password = _pw
        self.db_name = _get_value(_db, 'name', "")
        """MySQL のデータベース名"""
        self.table_prefix = _get_value(_db, 'table_prefix', "")
        """プラットフォームのテーブル接頭辞"""
        self.charset = _get_value(_db, 'charset', "utf8mb4")
        """デフォルトの文字セット"""
        self.collate = _get_value(_db, 'collate', "utf8mb4_unicode_520_ci")
        """デフォルトの照合順序"""
        self.charset_collate = _get_value(_db, 'charset_collate', "") or None
        """テーブルオプション、None の場合は charset, collate から生成"""

        _schema = _get_section(_c, 'schema')
        self.sql_path = self._expand(
            _get_value(_schema, 'sql_path', "{BASE_DIR}/resources/schema.sql")
        )
        """インポートするSQLファイルのパス"""
        self.db_prefix = _get_value(_schema, 'db_prefix', "slds_")
        """アプリケーション内部のテーブル接頭辞"""
        self.placeholder_prefix = _get_value(_schema, 'placeholder_prefix',
                                             PLACEHOLDER_TABLE_PREFIX)
        """SQLファイル内のテーブル接頭辞"""
        self.verify_after_import = bool(_get_value(_schema, 'verify_after_import', True))
        """インポート後に全カラムの存在を確認するか"""

        _log = _get_section(_c, 'logging')
        self.log_path = self._expand(
            _get_value(_log, 'log_path', "{BASE_DIR}/logs/schema-import.log")
        )
        """ログファイルのパス"""
        self.default_log_path = path.join(app_dir, 'schema-import.log')
        """ログファイルのパス (エラー用; 上記のパスが不正な場合に使用)"""
        self.log_encoding = _get_value(_log, 'log_encoding', "utf-8")
        """ログファイルのエンコーディング方式"""
        self.log_init = _get_value(_log, 'log_init', "NEVER")
        """
        ログの初期化をいつ行うか
        - "NEVER": 初期化しない
        - "ALWAYS_ON_STARTUP": 常に起動時に初期化
        """
        if self.log_init not in _LOG_INIT_VALUES:
            raise ValueError(f"Invalid log_init value: '{self.log_init}'")
        self.logging_to_console = bool(_get_value(_log, 'log_to_console', False))
        """ログ出力をコンソールにも行うか"""

        _debug = _get_section(_c, 'debugging')
        self.catch_errors_on_run = bool(_get_value(_debug, 'catch_errors_on_run', True))
        """.run() メソッド実行時にエラーをcatchするか (False: デバッグ用)"""

    def _expand(self, value:str) -> str:
        """{BASE_DIR} をアプリケーションのディレクトリに置換する"""
        return value.replace('{BASE_DIR}', self.app_dir)

    def import_settings(self) -> ImportSettings:
        """SchemaImporter に渡す設定を取得する

        Returns
        -------
        ImportSettings
            インポートの設定
        """
        return ImportSettings(db_prefix=self.db_prefix,
                              placeholder_prefix=self.placeholder_prefix)

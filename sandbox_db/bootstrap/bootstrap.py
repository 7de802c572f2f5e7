"""
同梱のSQLファイルをデータベースにインポートするクラス

Classes
-------
- `SchemaBootstrap`: 同梱のSQLファイルをデータベースにインポートするクラス

Functions
---------
- `get_handle`: 設定に応じたデータベースハンドルを取得する

Usage
-----

1a. with文を使用する場合

```python
from sandbox_db.bootstrap import SchemaBootstrap

with SchemaBootstrap() as sb:
    err = sb.run()
```

1b. with文を使用しない場合

```python
from sandbox_db.bootstrap import SchemaBootstrap

sb = SchemaBootstrap()
sb.run()

# 終了時にcleanup()を呼び出す
sb.cleanup()
```

2. 設定ファイルの読み込み先を変更する場合

```python
from sandbox_db.bootstrap import SchemaBootstrap
from sandbox_db.config import SchemaImporterConfig

# app_dir の下にある config フォルダ内の config.toml を読み込む
# 存在しない場合は自動生成
config = SchemaImporterConfig(app_dir="C:/path/to/app_dir")

with SchemaBootstrap(config) as sb:
    sb.run()
```
"""
import os
import sqlite3
from typing import Optional, Union

import pymysql

from sandbox_db.config import SchemaImporterConfig
from sandbox_db.database import (
    DatabaseHandle, SQLiteDatabaseHandle, MySQLDatabaseHandle,
    SchemaImporter
)
from sandbox_db.database.schema_toolkit import ParsedStatement, SQLDialect
from sandbox_db.database.schema_toolkit.validator import check_table_columns
from sandbox_db.status import errors as se
from sandbox_db.status import warnings as sw
from sandbox_db.status.progress import ImportStage, LogLevel, IMPORT_STAGE_MSG
from ._logger import Logger



DatabaseError = (sqlite3.Error, pymysql.err.MySQLError)
"""データベース操作で発生しうる例外"""


def get_handle(config:SchemaImporterConfig) -> DatabaseHandle:
    """設定に応じたデータベースハンドルを取得する

    Parameters
    ----------
    config : SchemaImporterConfig
        設定

    Returns
    -------
    DatabaseHandle
        データベースハンドル

    Notes
    -----
    - SQLite の場合、charset, collate, charset_collate の設定は使用しない
    """
    if config.dialect == SQLDialect.MYSQL:
        return MySQLDatabaseHandle(config.db_name,
                                   host=config.db_host, port=config.db_port,
                                   user=config.db_user, password=config.db_password,
                                   prefix=config.table_prefix,
                                   charset=config.charset, collate=config.collate,
                                   charset_collate=config.charset_collate)

    # DBファイルのディレクトリが存在しない場合は作成
    if (db_dir := os.path.dirname(config.db_path)) and not os.path.exists(db_dir):
        os.makedirs(db_dir)
    return SQLiteDatabaseHandle(config.db_path, prefix=config.table_prefix)


class SchemaBootstrap:
    """
    同梱のSQLファイルをデータベースにインポートするクラス

    Properties
    ----------
    handle : Optional[DatabaseHandle]
        データベースハンドル、接続前はNone
    issued_warnings : list[sw.SchemaWarningData]
        実行中に発生した警告
    current_error : Optional[se.SchemaErrorData]
        エラー情報、エラーが発生していない場合はNone
    is_completed : bool
        インポートが完了したかどうか
    """

    def __init__(self, config:Optional[SchemaImporterConfig]=None):
        """Constructor

        Parameters
        ----------
        config : Optional[SchemaImporterConfig], default None
            コンフィグ、読み込むconfig.tomlを変更したい場合はここから指定
        """
        self.config = SchemaImporterConfig(os.getcwd()) if config is None else config
        self._logger = Logger(self.config.default_log_path)
        """ロガー"""
        self._handle: Optional[DatabaseHandle] = None
        """データベースハンドル"""
        self._issued_warnings: list[sw.SchemaWarningData] = []
        """実行中に発生した警告のログ"""
        self._current_error: Optional[se.SchemaErrorData] = None
        """エラー情報"""
        self._completed = False
        """インポートが完了したかどうか"""

    def __enter__(self) -> "SchemaBootstrap":
        return self

    def __exit__(self, exc_type, exc_value, traceback_) -> None:
        self.cleanup()

    @property
    def handle(self) -> Optional[DatabaseHandle]:
        """データベースハンドル"""
        return self._handle

    @property
    def issued_warnings(self) -> list[sw.SchemaWarningData]:
        """実行中に発生した警告"""
        return list(self._issued_warnings)

    @property
    def current_error(self) -> Optional[se.SchemaErrorData]:
        """エラー情報"""
        return self._current_error

    @property
    def is_completed(self) -> bool:
        """インポートが完了したかどうか"""
        return self._completed

    #
    # 実行
    #

    def run(self) -> Optional[se.SchemaErrorData]:
        """SQLファイルをインポートする

        Returns
        -------
        Optional[se.SchemaErrorData]
            エラー情報、エラーが発生していない場合はNone
        """
        self._completed = False
        self._issued_warnings = []

        if not self.config.catch_errors_on_run:
            # デバッグ用: 想定外のエラーをキャッチしない
            err = self._run_inner()
        else:
            try:
                err = self._run_inner()
            except Exception as e:
                err = se.UnexpectedError(e)

        self._current_error = err
        if err is not None:
            self._logger.log(ImportStage.TERMINATING, err.error_message(), LogLevel.ERROR)
        else:
            self._completed = True
            self._logger.log(ImportStage.TERMINATING,
                             f"Import completed with {len(self._issued_warnings)} warning(s).")

        return err

    def _run_inner(self) -> Optional[se.SchemaErrorData]:
        """インポート処理の具体的な処理、UnexpectedErrorをキャッチしない"""
        self._init_logger()

        if (err := self._init_connection()):
            return err

        sql = self._read_sql()
        if isinstance(sql, se.SchemaErrorData):
            return sql

        importer = SchemaImporter(self._handle, self.config.import_settings(),
                                  logger=self._logger)
        self._log_stage(ImportStage.APPLYING)
        try:
            importer.import_sql(sql)
        except DatabaseError as e:
            self._issued_warnings.extend(importer.warnings)
            return se.SchemaImportFailed(e)
        self._issued_warnings.extend(importer.warnings)

        if self.config.verify_after_import:
            self._verify(importer.prepare(sql))

        return None

    #
    # 初期化処理関連
    #

    def _init_logger(self) -> None:
        """ロガーの初期化 (出力先など)"""
        s = self._logger.init_logger(self.config.log_path, self.config.log_encoding,
                                     init_log = self.config.log_init=="ALWAYS_ON_STARTUP",
                                     logging_to_console=self.config.logging_to_console)

        self._log_stage(ImportStage.INITIALIZING)

        # 'config.toml'のlog_pathが不正な場合はWarningを出力
        if not s:
            w = sw.InvalidLogFilePath(self.config.log_path)
            self._issued_warnings.append(w)
            self._logger.log(ImportStage.INITIALIZING, w.warning_message(), LogLevel.WARNING)

    def _init_connection(self) -> Optional[se.SchemaErrorData]:
        """データベースとの接続の初期化"""
        if self._handle is not None:
            return None

        try:
            self._handle = get_handle(self.config)
        except (OSError, *DatabaseError) as e:
            return se.DatabaseConnectionFailed(e)

        self._logger.log(ImportStage.INITIALIZING,
                         f"Connected to the database ({self.config.dialect.name}).")
        return None

    def _read_sql(self) -> Union[str, se.SchemaErrorData]:
        """SQLファイルの読み込み"""
        self._log_stage(ImportStage.EXTRACTING)
        try:
            with open(self.config.sql_path, "r", encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            return se.SqlFileNotFound(self.config.sql_path, e)

    def _verify(self, statements:list[ParsedStatement]) -> None:
        """インポート後に全カラムが存在するか確認する"""
        self._log_stage(ImportStage.VERIFYING)
        for statement in statements:
            if not statement.is_valid:
                continue
            if (msg := check_table_columns(self._handle, statement)):
                w = sw.ColumnVerificationFailed(statement.table, msg)
                self._issued_warnings.append(w)
                self._logger.log(ImportStage.VERIFYING, w.warning_message(), LogLevel.WARNING)

    def _log_stage(self, stage:ImportStage) -> None:
        self._logger.log(stage, IMPORT_STAGE_MSG[stage])

    #
    # 終了処理
    #

    def cleanup(self) -> None:
        """終了処理、データベースとの接続を閉じる"""
        if self._handle is not None:
            self._handle.close()
            self._handle = None

"""
sandbox_db.status.errors
インポートを中断したエラーの情報

Classes
-------
- `SchemaErrorData` : エラー情報 (抽象クラス)
- `UnexpectedError` : 想定外の例外によるエラー
- `DatabaseConnectionFailed` : データベースに接続できない
- `SqlFileNotFound` : SQLファイルを読み込めない
- `SchemaImportFailed` : テーブル作成・カラム追加に失敗した
"""
from abc import ABCMeta, abstractmethod

from ._base import StatusData, ExceptionLike



class SchemaErrorData(StatusData, metaclass=ABCMeta):
    """インポートを中断したエラーの情報"""

    @abstractmethod
    def error_message(self) -> str:
        """ユーザー向けのエラーメッセージ"""

    def _with_cause(self, message:str) -> str:
        """原因がある場合は "message: 例外名: 引数" の形式にする"""
        if not self.exception_name:
            return message + "。"
        return f"{message}: {self.exception_name}: {self.args}"


class UnexpectedError(SchemaErrorData):
    """想定外の例外によるエラー"""

    def error_message(self) -> str:
        if self.exception_name is None:
            return "未知のエラーが発生しました。"
        return f"以下のエラーが発生しました: {self.exception_name}: {self.args}"



#
# データベース
#

class DatabaseConnectionFailed(SchemaErrorData):
    """データベースへの接続に失敗した場合のエラー"""

    def error_message(self) -> str:
        return self._with_cause("データベースへの接続に失敗しました")

class SchemaImportFailed(SchemaErrorData):
    """テーブルの作成、またはカラムの追加でデータベースがエラーを返した場合のエラー"""

    def error_message(self) -> str:
        return self._with_cause("スキーマのインポートに失敗しました")



#
# ファイル
#

class SqlFileNotFound(SchemaErrorData):
    """SQLファイルが存在しない、または読み込めない場合のエラー"""
    def __init__(self, sql_path:str, e:ExceptionLike=None):
        """
        Parameters
        ----------
        sql_path : str
            SQLファイルのパス
        e : Exception | str | dict | None
            原因となった例外
        """
        super().__init__(e)
        self._details["sql_path"] = sql_path

    def error_message(self) -> str:
        return f"SQLファイル {self._details['sql_path']} を読み込めません。" \
               "[schema] の sql_path を確認して下さい。"

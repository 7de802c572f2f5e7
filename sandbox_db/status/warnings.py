"""
sandbox_db.status.warnings

インポートは継続できたが、利用者に知らせるべき事象の情報

Classes
-------
- `SchemaWarningData` : 警告情報 (抽象クラス)
- `InvalidLogFilePath` : ログファイルのパスが使用できない
- `TableNameNotFound` : CREATE TABLE文からテーブル名を取得できない
- `ColumnVerificationFailed` : インポート後にカラムが存在しない
"""
from abc import ABCMeta, abstractmethod

from ._base import StatusData, ExceptionLike



class SchemaWarningData(StatusData, metaclass=ABCMeta):
    """警告情報"""

    @abstractmethod
    def warning_message(self) -> str:
        """ユーザー向けの警告メッセージ"""




#
# ファイルパス
#

class InvalidLogFilePath(SchemaWarningData):
    """指定されたログファイルのパスが不正な場合の警告情報"""
    def __init__(self, log_path:str, e:ExceptionLike=None):
        """
        Parameters
        ----------
        log_path : str
            ログファイルのパス
        """
        super().__init__(e)
        self._details["log_path"] = log_path

    def warning_message(self) -> str:
        return f"ログファイルのパス {self._details['log_path']} が不正です。" \
               "デフォルトのパスにログを出力します。"



#
# スキーマ
#

class TableNameNotFound(SchemaWarningData):
    """CREATE TABLE文からテーブル名を取得できない場合の警告情報

    テーブル名は `CREATE TABLE IF NOT EXISTS `name`` の形式でのみ取得できる。
    該当するCREATE TABLE文はスキップされる。
    """
    def __init__(self, query:str, e:ExceptionLike=None):
        """
        Parameters
        ----------
        query : str
            テーブル名を取得できなかったCREATE TABLE文
        """
        super().__init__(e)
        self._details["query"] = query

    @property
    def query(self) -> str:
        """テーブル名を取得できなかったCREATE TABLE文"""
        return self._details["query"]

    def warning_message(self) -> str:
        head = " ".join(self.query.split())[:60]
        return f"テーブル名を取得できないため、以下のCREATE TABLE文をスキップしました: {head}"

class ColumnVerificationFailed(SchemaWarningData):
    """インポート後のカラムの確認に失敗した場合の警告情報"""
    def __init__(self, table:str, detail:str,
                 e:ExceptionLike=None):
        """
        Parameters
        ----------
        table : str
            テーブル名
        detail : str
            確認結果のメッセージ
        """
        super().__init__(e)
        self._details["table"] = table
        self._details["detail"] = detail

    def warning_message(self) -> str:
        return f"テーブル {self._details['table']} のカラムの確認に失敗しました: " \
               f"{self._details['detail']}"

"""
スキーマのインポートの進捗段階とログレベルを定義

Classes
-------
- `ImportStage`: インポートの進捗段階
- `LogLevel`: ログレベル

Constants
----------
- `MAX_STAGE_LENGTH`: 進捗段階名の最大文字数
- `MAX_LOG_LEVEL_LENGTH`: ログレベル名の最大文字数
- `IMPORT_STAGE_MSG`: 進捗段階のメッセージ
"""
from enum import Enum, auto



#
# 進捗段階
#

class ImportStage(Enum):
    """インポートの進捗段階"""
    # 設定読み込み・ロガー・DB接続の初期化
    INITIALIZING = 0
    # SQLファイルの読み込み・CREATE TABLE文の抽出
    EXTRACTING = auto()
    # テーブル作成・カラム追加
    APPLYING = auto()
    # インポート後のカラムの確認
    VERIFYING = auto()
    # 終了処理
    TERMINATING = auto()
MAX_STAGE_LENGTH = max([len(s.name) for s in ImportStage])

_cnt = len(ImportStage)
IMPORT_STAGE_MSG = {
    ImportStage.INITIALIZING: f"初期化中... (STEP 1/{_cnt})",
    ImportStage.EXTRACTING: f"SQLファイル解析中... (STEP 2/{_cnt})",
    ImportStage.APPLYING: f"テーブル更新中... (STEP 3/{_cnt})",
    ImportStage.VERIFYING: f"カラム確認中... (STEP 4/{_cnt})",
    ImportStage.TERMINATING: f"終了処理中... (STEP 5/{_cnt})"
}
"""進捗段階のメッセージ"""


#
# ログレベル
#

class LogLevel(Enum):
    """
    ログレベル
    """
    INFO = 1
    WARNING = 2
    ERROR = 3
MAX_LOG_LEVEL_LENGTH = max([len(s.name) for s in LogLevel])

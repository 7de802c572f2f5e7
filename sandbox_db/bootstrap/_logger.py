"""
インポート処理のログをファイルに出力するモジュール

Classes
-------
- `Logger` : ロガー

Functions
---------
- `format_log_line` : ログ1行分の文字列を作成する

Notes
-----
ログは以下の形式で出力される

```
[INFO]    2024/01/01 12:00:00, APPLYING,     Table 'wp_slds_sites' synchronized (0 column(s) added).
```
"""
import datetime
from os import path, makedirs
from typing import Optional

from sandbox_db.status.progress import (
    ImportStage, LogLevel,
    MAX_STAGE_LENGTH, MAX_LOG_LEVEL_LENGTH
)



def format_log_line(stage:ImportStage, message:str, level:LogLevel,
                    now:Optional[datetime.datetime]=None) -> str:
    """ログ1行分の文字列を作成する

    レベル名と進捗段階名は最大文字数に合わせて左寄せで揃える
    """
    now = datetime.datetime.now() if now is None else now
    return "".join([
        f"[{level.name}]".ljust(MAX_LOG_LEVEL_LENGTH + 3),
        now.strftime("%Y/%m/%d %H:%M:%S") + ", ",
        f"{stage.name},".ljust(MAX_STAGE_LENGTH + 2),
        message,
    ])

def _ensure_parent_dir(file_path:str) -> bool:
    """ファイルの親ディレクトリを作成し、利用可能かどうかを返す"""
    parent = path.dirname(file_path)
    if not parent or path.isdir(parent):
        return True
    try:
        makedirs(parent)
    except OSError:
        return False
    return True


class Logger:
    """インポート処理のロガー

    `init_logger` を呼び出すまではログを出力しない
    """
    def __init__(self, default_log_path:str):
        """
        Parameters
        ----------
        default_log_path : str
            `init_logger` に渡されたパスが使用できない場合の出力先
            (書き込み可能なパスであること)
        """
        self._default_log_path = default_log_path
        self._path: Optional[str] = None
        self._encoding = "utf-8"
        self._echo = False

    @property
    def log_path(self) -> Optional[str]:
        """出力先のパス、未初期化の場合はNone"""
        return self._path

    def init_logger(self, log_path:str, encoding:str="utf-8",
                    init_log:bool=False, logging_to_console:bool=False) -> bool:
        """出力先を設定する

        Parameters
        ----------
        log_path : str
            出力先のパス
        encoding : str, default "utf-8"
            出力先のエンコーディング
        init_log : bool, default False
            既存のログを消去するかどうか
        logging_to_console : bool, default False
            標準出力にも出力するかどうか

        Returns
        -------
        bool
            指定されたパスを出力先にできたかどうか
            False の場合はデフォルトのパスに出力する
        """
        usable = _ensure_parent_dir(log_path)
        self._path = log_path if usable else self._default_log_path
        self._encoding = encoding
        self._echo = logging_to_console

        if init_log and path.exists(self._path):
            # 空のファイルで上書き
            open(self._path, "w", encoding=encoding).close()

        return usable

    def log(self, stage:ImportStage, message:str,
            level:LogLevel=LogLevel.INFO) -> bool:
        """ログを1行出力する

        Returns
        -------
        bool
            ファイルへの書き込みが成功したかどうか
        """
        if self._path is None:
            return False

        line = format_log_line(stage, message, level)
        if self._echo:
            print(line)

        try:
            with open(self._path, "a", encoding=self._encoding) as f:
                f.write(line + "\n")
        except OSError:
            return False
        return True

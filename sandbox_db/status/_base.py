"""
エラー情報・警告情報の共通部分

Classes
-------
- `StatusData` : 原因となった例外と詳細情報を保持する基底クラス
"""
from copy import deepcopy
from typing import Optional, Union



ExceptionLike = Union[Exception, str, dict, None]
"""原因として受け付ける値の型"""


def _describe(e:ExceptionLike) -> Optional[dict]:
    """原因を {"exception_name": ..., "args": ...} の形式に変換する"""
    if e is None:
        return None
    if isinstance(e, Exception):
        return {"exception_name": type(e).__name__,
                "args": e.args[0] if e.args else ""}
    if isinstance(e, str):
        return {"exception_name": "UnexpectedError", "args": e}
    return {"exception_name": e.get("exception_name", "UnexpectedError"),
            "args": e.get("args", "")}


class StatusData:
    """原因となった例外と詳細情報を保持する基底クラス

    詳細情報は `asdict()` で取得でき、原因がある場合はキー "e" に格納される
    """
    def __init__(self, e:ExceptionLike=None):
        """
        Parameters
        ----------
        e : Exception | str | dict | None
            原因となった例外、またはメッセージ
            dict の場合は `asdict()` の戻り値などの詳細情報 (複製して保持する)
        """
        self._details: dict = deepcopy(e) if isinstance(e, dict) else {}
        if (cause := _describe(e)) is not None:
            self._details["e"] = cause

    def _cause(self, key:str) -> Optional[str]:
        cause = self._details.get("e")
        return None if cause is None else cause[key]

    @property
    def exception_name(self) -> Optional[str]:
        """原因となった例外のクラス名、原因がない場合はNone"""
        return self._cause("exception_name")

    @property
    def args(self) -> Optional[str]:
        """原因となった例外の最初の引数、原因がない場合はNone"""
        return self._cause("args")

    @property
    def name(self) -> str:
        """クラス名"""
        return type(self).__name__

    def asdict(self) -> dict:
        """詳細情報の複製"""
        return deepcopy(self._details)

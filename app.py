"""
アプリケーションのエントリーポイント
"""
import os
import sys

from sandbox_db.bootstrap import SchemaBootstrap
from sandbox_db.config import SchemaImporterConfig



def main() -> int:
    """
    アプリケーションのエントリーポイント

    Returns
    -------
    int
        終了コード (0: 正常終了, 1: エラー)
    """
    config = SchemaImporterConfig(app_dir=os.path.join(os.getcwd(), "sandbox_db"))
    with SchemaBootstrap(config) as sb:
        err = sb.run()
        for w in sb.issued_warnings:
            print(f"[WARNING] {w.warning_message()}")

        if err is not None:
            print(f"[ERROR] {err.error_message()}")
            return 1

    return 0



if __name__ == "__main__":
    sys.exit(main())

"""
同梱のSQLファイルをデータベースにインポートするモジュール

Classes
-------
- `SchemaBootstrap`: 同梱のSQLファイルをデータベースにインポートするクラス
- `Logger`: ロガー

Usage
-----

```python
from sandbox_db.bootstrap import SchemaBootstrap

with SchemaBootstrap() as sb:
    if (err := sb.run()):
        print(err.error_message())
```
"""
from .bootstrap import SchemaBootstrap, get_handle
from ._logger import Logger

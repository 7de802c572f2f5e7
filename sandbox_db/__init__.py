"""
sandbox_db
==========
　同梱のスキーマ定義 (SQLファイル) を実行環境のテーブル接頭辞・文字セット・照合順序に
合わせて書き換え、データベースにインポートするためのパッケージです。

Subpackages
-----------
- `bootstrap`: 設定・ログ・エラー処理を含むインポートの実行
- `config`: 設定ファイル (config.toml) の読み込み
- `database`: SQLファイルの解析・テーブル作成・カラム追加・ページング
- `status`: 進捗段階・エラー・警告
"""

"""SQLファイルを解析するモジュールのテスト

Notes:
- 本テストはデータベースに接続せず、文字列の解析結果のみを確認する
"""
import pytest

from sandbox_db.database.schema_toolkit import (
    ParsedStatement, SchemaDynamics,
    PLACEHOLDER_TABLE_OPTIONS
)
from sandbox_db.database.schema_toolkit.sql_parser import (
    get_create_table_clauses, apply_dynamics,
    get_table_name, get_column_definitions,
    inspect_statement, parse_sql
)



DUMP = """
-- exported schema
CREATE TABLE IF NOT EXISTS `wp_slds_users` (
  `id` bigint unsigned NOT NULL AUTO_INCREMENT,
  `name` varchar(255) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_520_ci NOT NULL,
  `created_at` datetime NOT NULL,
  PRIMARY KEY (`id`),
  KEY `name` (`name`)
) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_520_ci;

INSERT INTO `wp_slds_users` VALUES (1, 'a', NOW());

CREATE TABLE IF NOT EXISTS `wp_slds_posts` (
  `post_id` bigint unsigned NOT NULL,
  `user_id` bigint unsigned NOT NULL,
  PRIMARY KEY (`post_id`)
) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_520_ci;
"""

@pytest.fixture
def dynamics() -> SchemaDynamics:
    return SchemaDynamics(
        table_prefix="wp_demo_",
        charset_collate="ENGINE=InnoDB DEFAULT CHARSET=utf8 COLLATE=utf8_general_ci",
        charset="utf8",
        collate="utf8_general_ci"
    )


#
# CREATE TABLE文の抽出
#

@pytest.mark.parametrize("sql, expected", [
    # 単一のCREATE TABLE文
    (
        "CREATE TABLE IF NOT EXISTS `t` (`id` int);",
        ["CREATE TABLE IF NOT EXISTS `t` (`id` int);"]
    ),
    # 複数のCREATE TABLE文
    (
        "CREATE TABLE IF NOT EXISTS `a` (`id` int); CREATE TABLE IF NOT EXISTS `b` (`id` int);",
        ["CREATE TABLE IF NOT EXISTS `a` (`id` int);",
         "CREATE TABLE IF NOT EXISTS `b` (`id` int);"]
    ),
    # CREATE TABLE文以外のSQL文を含む場合
    (
        "SELECT * FROM users; CREATE TABLE posts (id INT);",
        ["CREATE TABLE posts (id INT);"]
    ),
    # 空の入力文字列
    (
        "",
        []
    ),
    # セミコロンで終わらないCREATE TABLE文
    (
        "CREATE TABLE IF NOT EXISTS `t` (`id` int)",
        []
    ),
])
def test_get_create_table_clauses(sql, expected) -> None:
    """get_create_table_clauses関数の基本的な動作をテストする。"""
    assert get_create_table_clauses(sql) == expected

def test_clauses_case_insensitivity() -> None:
    """CREATE TABLE句の大文字小文字を区別しないことをテストする。"""
    sql = "create table if not exists `t` (`id` int);"
    assert get_create_table_clauses(sql) == [sql]

def test_clauses_span_lines_and_keep_order() -> None:
    """改行を含むCREATE TABLE文を文書順に抽出できることをテストする。"""
    clauses = get_create_table_clauses(DUMP)
    assert len(clauses) == 2
    assert clauses[0].startswith("CREATE TABLE IF NOT EXISTS `wp_slds_users` (\n")
    assert clauses[0].endswith("COLLATE=utf8mb4_unicode_520_ci;")
    assert "`wp_slds_posts`" in clauses[1]

def test_clauses_count_matches_create_table_occurrences() -> None:
    """抽出数が CREATE TABLE IF NOT EXISTS の出現数と一致することをテストする。"""
    assert len(get_create_table_clauses(DUMP)) == DUMP.count("CREATE TABLE IF NOT EXISTS")

def test_clauses_stop_at_first_semicolon() -> None:
    """CREATE TABLE文は最初のセミコロンで終わることをテストする。"""
    sql = "CREATE TABLE IF NOT EXISTS `t` (`v` varchar(10) DEFAULT ';');"
    assert get_create_table_clauses(sql) == ["CREATE TABLE IF NOT EXISTS `t` (`v` varchar(10) DEFAULT ';"]


#
# 置換
#

def test_apply_dynamics_replaces_all_tokens(dynamics) -> None:
    """接頭辞・テーブルオプション・カラムの文字セット/照合順序が置換されることをテストする。"""
    query = apply_dynamics(get_create_table_clauses(DUMP)[0], dynamics)

    assert "`wp_demo_users`" in query
    assert "wp_slds_" not in query
    assert "varchar(255) CHARACTER SET utf8 COLLATE utf8_general_ci NOT NULL" in query
    assert query.endswith(") ENGINE=InnoDB DEFAULT CHARSET=utf8 COLLATE=utf8_general_ci;")

def test_apply_dynamics_order() -> None:
    """テーブルオプションの置換がカラムの照合順序の置換より先に行われることをテストする。"""
    d = SchemaDynamics(table_prefix="wp_x_", charset_collate="OPTIONS",
                       charset="latin1", collate="latin1_bin")
    query = apply_dynamics(f") {PLACEHOLDER_TABLE_OPTIONS};", d)
    assert query == ") OPTIONS;"

def test_apply_dynamics_end_to_end_scenario() -> None:
    """1行で書かれたCREATE TABLE文の置換をテストする。"""
    sql = "CREATE TABLE IF NOT EXISTS `wp_slds_log` (`id` bigint unsigned, " \
          "`msg` text CHARACTER SET utf8mb4) " \
          "ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_520_ci;"
    d = SchemaDynamics(
        table_prefix="wp_" + "demo_",
        charset_collate="ENGINE=InnoDB DEFAULT CHARSET=utf8 COLLATE=utf8_general_ci",
        charset="utf8",
        collate="utf8_general_ci"
    )

    statements = parse_sql(sql, d)
    assert len(statements) == 1
    assert statements[0].query == \
        "CREATE TABLE IF NOT EXISTS `wp_demo_log` (`id` bigint unsigned, " \
        "`msg` text CHARACTER SET utf8) " \
        "ENGINE=InnoDB DEFAULT CHARSET=utf8 COLLATE=utf8_general_ci;"
    assert statements[0].table == "wp_demo_log"

def test_apply_dynamics_does_not_rematch(dynamics) -> None:
    """置換後の文字列に再度置換を行っても変化しないことをテストする。"""
    once = apply_dynamics(get_create_table_clauses(DUMP)[0], dynamics)
    assert apply_dynamics(once, dynamics) == once

def test_apply_dynamics_custom_placeholder(dynamics) -> None:
    """SQLファイル内の接頭辞を変更できることをテストする。"""
    query = apply_dynamics("CREATE TABLE IF NOT EXISTS `xx_t` (`id` int);", dynamics,
                           placeholder_prefix="xx_")
    assert get_table_name(query) == "wp_demo_t"


#
# テーブル名・カラムの取得
#

@pytest.mark.parametrize("query, expected", [
    ("CREATE TABLE IF NOT EXISTS `wp_demo_users` (\n`id` int\n);", "wp_demo_users"),
    ("CREATE TABLE IF NOT EXISTS `t` (`id` int, `name` text);", "t"),
    # IF NOT EXISTS がない場合は取得できない
    ("CREATE TABLE `t` (`id` int);", ""),
    # バッククォートがない場合は取得できない
    ("CREATE TABLE IF NOT EXISTS t (id int);", ""),
])
def test_get_table_name(query, expected) -> None:
    assert get_table_name(query) == expected

def test_get_column_definitions() -> None:
    """カラム定義の取得をテストする。

    テスト内容:
    - バッククォートで始まる行のみがカラムとして扱われること
    - 末尾のカンマが取り除かれること
    - 出現順が保持されること
    """
    query = """CREATE TABLE IF NOT EXISTS `wp_demo_t` (
      `id` bigint unsigned NOT NULL AUTO_INCREMENT,
      `name` varchar(255) NOT NULL,
      `created_at` datetime NOT NULL,
      PRIMARY KEY (`id`)
    );"""
    columns = get_column_definitions(query)

    assert list(columns.keys()) == ["id", "name", "created_at"]
    assert columns["id"] == "`id` bigint unsigned NOT NULL AUTO_INCREMENT"
    assert columns["name"] == "`name` varchar(255) NOT NULL"
    assert columns["created_at"] == "`created_at` datetime NOT NULL"

def test_get_column_definitions_ignores_other_lines() -> None:
    """空行・キー定義・閉じていないバッククォートの行が無視されることをテストする。"""
    query = "CREATE TABLE IF NOT EXISTS `t` (\n\n" \
            "  `a` int,\n" \
            "  KEY `a` (`a`),\n" \
            "  `broken int,\n" \
            "  UNIQUE KEY `u` (`a`)\n" \
            ");"
    assert get_column_definitions(query) == {"a": "`a` int"}

def test_get_column_definitions_last_occurrence_wins() -> None:
    """同名のカラムが複数ある場合は後の定義が使われることをテストする。"""
    query = "CREATE TABLE IF NOT EXISTS `t` (\n`a` int,\n`a` text\n);"
    assert get_column_definitions(query) == {"a": "`a` text"}

def test_get_column_definitions_crlf() -> None:
    """改行コードが CRLF の場合もカラムを取得できることをテストする。"""
    query = "CREATE TABLE IF NOT EXISTS `t` (\r\n`a` int,\r\n`b` int\r\n);"
    assert get_column_definitions(query) == {"a": "`a` int", "b": "`b` int"}

def test_inspect_statement() -> None:
    query = "CREATE TABLE IF NOT EXISTS `t` (\n`a` int\n);"
    statement = inspect_statement(query)

    assert statement == ParsedStatement(query=query, table="t", columns={"a": "`a` int"})
    assert statement.is_valid

def test_inspect_statement_without_table_name() -> None:
    statement = inspect_statement("CREATE TABLE t (\n`a` int\n);")
    assert statement.table == ""
    assert not statement.is_valid


#
# SQLファイル全体の解析
#

def test_parse_sql(dynamics) -> None:
    """SQLファイル全体を解析するテスト"""
    statements = parse_sql(DUMP, dynamics)

    assert [s.table for s in statements] == ["wp_demo_users", "wp_demo_posts"]
    assert list(statements[0].columns) == ["id", "name", "created_at"]
    assert list(statements[1].columns) == ["post_id", "user_id"]
    assert statements[0].columns["name"] == \
        "`name` varchar(255) CHARACTER SET utf8 COLLATE utf8_general_ci NOT NULL"

def test_parse_sql_no_statements(dynamics) -> None:
    """CREATE TABLE文がない場合は空のリストを返すことをテストする。"""
    assert parse_sql("SELECT 1;", dynamics) == []
    assert parse_sql("", dynamics) == []

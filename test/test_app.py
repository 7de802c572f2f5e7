"""エントリーポイントのテスト"""
from app import main



DUMP = """CREATE TABLE IF NOT EXISTS `wp_slds_hosts` (
  `host_id` bigint unsigned NOT NULL AUTO_INCREMENT,
  PRIMARY KEY (`host_id`)
) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_520_ci;"""


def test_main(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    resources = tmp_path / "sandbox_db" / "resources"
    resources.mkdir(parents=True)
    (resources / "schema.sql").write_text(DUMP, encoding="utf-8")

    assert main() == 0
    assert (tmp_path / "sandbox_db" / "data" / "sandbox.db").exists()
    assert "[ERROR]" not in capsys.readouterr().out

def test_main_without_sql_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    assert main() == 1
    assert "[ERROR]" in capsys.readouterr().out

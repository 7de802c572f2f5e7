"""Logger のテスト"""
import datetime
from unittest.mock import patch

from sandbox_db.bootstrap import Logger
from sandbox_db.bootstrap._logger import format_log_line
from sandbox_db.status.progress import ImportStage, LogLevel



def test_log_before_init(tmp_path):
    """初期化前はログを出力しないことのテスト"""
    logger = Logger(str(tmp_path / "default.log"))
    assert logger.log(ImportStage.INITIALIZING, "message") is False
    assert not (tmp_path / "default.log").exists()

def test_log_format(tmp_path):
    """ログの書式のテスト"""
    log_path = tmp_path / "logs" / "import.log"
    logger = Logger(str(tmp_path / "default.log"))
    assert logger.init_logger(str(log_path)) is True

    assert logger.log(ImportStage.APPLYING, "Table 'wp_slds_sites' synchronized.",
                      LogLevel.WARNING) is True

    line = log_path.read_text(encoding="utf-8").splitlines()[0]
    assert line.startswith("[WARNING] 20")
    assert "APPLYING,     Table 'wp_slds_sites' synchronized." in line

def test_init_log(tmp_path):
    """init_log=True の場合はログファイルが初期化されることのテスト"""
    log_path = tmp_path / "import.log"
    log_path.write_text("old line\n", encoding="utf-8")

    logger = Logger(str(tmp_path / "default.log"))
    logger.init_logger(str(log_path), init_log=True)
    logger.log(ImportStage.TERMINATING, "new line")

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert lines[0].endswith("new line")

def test_invalid_log_path(tmp_path):
    """ディレクトリを作成できない場合はデフォルトのパスを使用することのテスト"""
    default_path = tmp_path / "default.log"
    logger = Logger(str(default_path))

    with patch("sandbox_db.bootstrap._logger.makedirs", side_effect=PermissionError):
        assert logger.init_logger(str(tmp_path / "denied" / "import.log")) is False

    assert logger.log_path == str(default_path)
    logger.log(ImportStage.INITIALIZING, "message")
    assert default_path.exists()

def test_logging_to_console(tmp_path, capsys):
    logger = Logger(str(tmp_path / "default.log"))
    logger.init_logger(str(tmp_path / "import.log"), logging_to_console=True)
    logger.log(ImportStage.VERIFYING, "checked")

    assert "VERIFYING," in capsys.readouterr().out

def test_format_log_line():
    now = datetime.datetime(2024, 1, 2, 3, 4, 5)
    line = format_log_line(ImportStage.EXTRACTING, "3 CREATE TABLE statement(s) found.",
                           LogLevel.INFO, now)
    assert line == "[INFO]    2024/01/02 03:04:05, EXTRACTING,   3 CREATE TABLE statement(s) found."

"""
Tests unitaires pour LoguruMessageSink et configure_logging.
"""

import errno
import io
from pathlib import Path

import pytest
from loguru import logger
from rich.console import Console

from playercore.adapters.messages import LoguruMessageSink
from playercore.config import Settings
from playercore.core.ports.subsystems import SubsystemError
from playercore.logging_config import configure_logging


@pytest.fixture
def sink() -> LoguruMessageSink:
    return LoguruMessageSink(console=Console(file=io.StringIO(), width=120))


class TestMessages:
    """Tests pour l'acheminement des messages."""

    def test_msg_logs_info(self, sink: LoguruMessageSink, log_messages: list) -> None:
        sink.msg("bonjour {pas un format}")
        assert log_messages[-1]["level"].name == "INFO"
        assert log_messages[-1]["message"] == "bonjour {pas un format}"

    def test_err_and_err_imm(self, sink: LoguruMessageSink, log_messages: list) -> None:
        sink.err("erreur")
        sink.err_imm("signal")
        levels = [record["level"].name for record in log_messages]
        assert levels == ["ERROR", "CRITICAL"]

    def test_msg_imm_goes_to_console(self, log_messages: list) -> None:
        output = io.StringIO()
        sink = LoguruMessageSink(console=Console(file=output, width=120))
        sink.msg_imm("Usage: player [options] [red]x[/red]")
        assert output.getvalue() == "Usage: player [options] [red]x[/red]\n"
        assert log_messages == []

    def test_warning_level_gates_warnings(self, sink: LoguruMessageSink, log_messages: list) -> None:
        sink.warn(1, "cache")
        assert log_messages == []

        sink.set_warning_level(1)
        sink.warn(1, "visible")
        sink.warn(2, "cache encore")
        assert [record["message"] for record in log_messages] == ["visible"]

    def test_level_zero_warnings_always_visible(
        self, sink: LoguruMessageSink, log_messages: list
    ) -> None:
        sink.warn(0, "intf: ignoring signal SIGALRM")
        assert log_messages[-1]["level"].name == "WARNING"

    def test_negative_warning_level_clamped(self, sink: LoguruMessageSink) -> None:
        sink.set_warning_level(-2)
        assert sink.warning_level == 0


@pytest.mark.usefixtures("restore_loguru")
class TestCreate:
    """Tests pour LoguruMessageSink.create."""

    def test_create_and_destroy(self, test_settings: Settings) -> None:
        sink = LoguruMessageSink.create(test_settings)
        assert test_settings.log_file.parent.is_dir()

        sink.msg("premier message")
        sink.destroy()
        sink.destroy()

        assert test_settings.log_file.exists()
        assert "premier message" in test_settings.log_file.read_text(encoding="utf-8")

    def test_unwritable_log_directory(self, tmp_path: Path) -> None:
        blocker = tmp_path / "fichier"
        blocker.write_text("x")
        settings = Settings(_env_file=None, log_file=blocker / "logs" / "playercore.log")

        with pytest.raises(SubsystemError) as exc_info:
            LoguruMessageSink.create(settings)
        assert exc_info.value.code in (errno.ENOTDIR, errno.EEXIST)

    @pytest.mark.parametrize(
        "overrides",
        [{"log_level": "BOGUS"}, {"log_rotation_size": "dix megas"}],
    )
    def test_invalid_logging_configuration(
        self, tmp_path: Path, capsys: pytest.CaptureFixture, overrides: dict
    ) -> None:
        settings = Settings(
            _env_file=None, log_file=tmp_path / "logs" / "playercore.log", **overrides
        )

        with pytest.raises(SubsystemError) as exc_info:
            LoguruMessageSink.create(settings)
        assert exc_info.value.code == errno.EINVAL
        assert "invalid logging configuration" in str(exc_info.value)

        # Un handler stderr reste en place pour le diagnostic fatal
        logger.error("puits indisponible")
        assert "puits indisponible" in capsys.readouterr().err


@pytest.mark.usefixtures("restore_loguru")
def test_configure_logging_returns_handler_ids(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "test.log"
    handler_ids = configure_logging(log_level="WARNING", log_file=log_file, retention_count=1)

    assert len(handler_ids) == 2
    assert log_file.parent.is_dir()
    for handler_id in handler_ids:
        logger.remove(handler_id)

"""
Tests unitaires pour les commandes CLI de diagnostic.
"""

from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from playercore import __version__
from playercore.adapters.cli.tools import app
from playercore.core.value_objects import CpuCapability

runner = CliRunner()


@pytest.fixture
def mock_container():
    """Mock le Container importe par le module des commandes."""
    with patch("playercore.adapters.cli.tools.Container") as mock_cls:
        container_instance = MagicMock()
        mock_cls.return_value = container_instance
        yield container_instance


def test_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert f"playercore {__version__}" in result.output


def test_info(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PLAYER_LOG_LEVEL", "debug")
    monkeypatch.setenv("PLAYER_CHANNEL_SERVER", "vlanserver.local")

    result = runner.invoke(app, ["info"])

    assert result.exit_code == 0
    assert "Niveau de log : DEBUG" in result.output
    assert "vlanserver.local" in result.output


def test_capabilities_fixed_machine() -> None:
    result = runner.invoke(app, ["capabilities", "--machine", "ppc64"])
    assert result.exit_code == 0
    assert "ALTIVEC" in result.output
    assert "oui" in result.output


def test_capabilities_from_container(mock_container: MagicMock) -> None:
    mock_container.capability_prober.return_value.detect.return_value = CpuCapability.NONE

    result = runner.invoke(app, ["capabilities"])

    assert result.exit_code == 0
    assert "Aucune capacite detectee" in result.output
    assert "oui" not in result.output

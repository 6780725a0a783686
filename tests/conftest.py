"""
Fixtures pytest partagees pour les tests playercore.

Ce module contient les fixtures communes utilisees dans les tests:
- Sauvegarde/restauration des gestionnaires de signaux
- Restauration du handler loguru par defaut
- Mocks des ports (IMessageSink, ICpuidSource)
- Settings de test avec chemins temporaires
"""

import signal
import sys
from pathlib import Path
from typing import Iterator, Optional
from unittest.mock import MagicMock

import pytest
from loguru import logger

from playercore.config import Settings
from playercore.core.entities.stop_flag import StopFlag
from playercore.core.ports.cpu import ICpuidSource
from playercore.core.ports.subsystems import IInterface, IMessageSink
from playercore.core.value_objects import CpuidRegisters
from playercore.services.cancellation import FATAL_SIGNALS, TRANSIENT_SIGNALS


@pytest.fixture(autouse=True)
def restore_signal_handlers() -> Iterator[None]:
    """Remet en place les gestionnaires de signaux modifies par un test."""
    saved = {signum: signal.getsignal(signum) for signum in (*FATAL_SIGNALS, *TRANSIENT_SIGNALS)}
    yield
    for signum, handler in saved.items():
        signal.signal(signum, handler if handler is not None else signal.SIG_DFL)


@pytest.fixture
def restore_loguru() -> Iterator[None]:
    """Retablit un handler stderr unique apres un test qui reconfigure loguru."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def log_messages() -> Iterator[list]:
    """Capture les enregistrements loguru (niveau DEBUG et plus)."""
    records: list = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def mock_sink() -> MagicMock:
    """
    Mock de IMessageSink pour les tests.

    Toutes les methodes sont des MagicMock; verifier les appels dans chaque test.
    """
    return MagicMock(spec=IMessageSink)


class FakeInterface(IInterface):
    """Interface minimale: run() consulte die une fois, ou execute on_run."""

    def __init__(self, on_run=None) -> None:
        self.die = StopFlag()
        self.on_run = on_run
        self.ran = False
        self.destroyed = False

    def run(self) -> None:
        self.ran = True
        if self.on_run is not None:
            self.on_run(self)

    def destroy(self) -> None:
        self.destroyed = True


@pytest.fixture
def fake_interface() -> FakeInterface:
    return FakeInterface()


class FakeCpuidSource(ICpuidSource):
    """
    Source CPUID rejouant des registres fixes.

    Args :
        id_flag : Resultat de has_id_flag()
        leaves : Table feuille -> registres (feuille absente: registres a zero)
    """

    def __init__(self, id_flag: bool = True, leaves: Optional[dict] = None) -> None:
        self.id_flag = id_flag
        self.leaves = leaves or {}
        self.queried: list[int] = []

    def has_id_flag(self) -> bool:
        return self.id_flag

    def cpuid(self, leaf: int) -> CpuidRegisters:
        self.queried.append(leaf)
        return self.leaves.get(leaf, CpuidRegisters())


def vendor_registers(vendor: str, level: int = 1) -> CpuidRegisters:
    """Registres de la feuille 0 pour un constructeur donne."""
    raw = vendor.encode("ascii").ljust(12, b"\x00")
    return CpuidRegisters(
        eax=level,
        ebx=int.from_bytes(raw[0:4], "little"),
        edx=int.from_bytes(raw[4:8], "little"),
        ecx=int.from_bytes(raw[8:12], "little"),
    )


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Le fichier .env eventuel est ignore pour isoler les tests.
    """
    return Settings(
        _env_file=None,
        log_level="DEBUG",
        log_file=tmp_path / "logs" / "playercore.log",
        log_retention_count=2,
        interface_poll_interval=0.01,
        channel_server=None,
        channel_port=6010,
        cpuinfo_path=tmp_path / "cpuinfo",
    )

"""
Controleur d'annulation: signaux asynchrones -> drapeau d'arret cooperatif.

Deux classes de signaux disjointes :
- transitoires (SIGALRM, SIGPIPE) : avertissement de faible priorite, aucun
  changement d'etat
- fatals (SIGINT, SIGHUP, SIGQUIT) : les gestionnaires fatals sont d'abord
  reroutes vers "ignorer" pour qu'une rafale de signaux ne rejoue pas l'arret,
  puis une erreur est emise et le drapeau die de l'interface en cours est leve

Les gestionnaires ne creent ni ne detruisent rien: ils lisent la poignee
d'interface du contexte et basculent un bit. SIGTERM n'est pas intercepte,
pour garder un moyen de tuer le processus quand tout le reste a echoue.
"""

import signal
import threading
from collections.abc import Sequence
from types import FrameType
from typing import Any, Optional

from loguru import logger

from playercore.core.entities.root_context import RootContext
from playercore.core.ports.subsystems import IMessageSink


def _available(*names: str) -> tuple[signal.Signals, ...]:
    return tuple(getattr(signal, name) for name in names if hasattr(signal, name))


FATAL_SIGNALS = _available("SIGINT", "SIGHUP", "SIGQUIT")
TRANSIENT_SIGNALS = _available("SIGALRM", "SIGPIPE")


class CancellationController:
    """
    Installe et retire les gestionnaires de signaux d'une execution.

    Utilisation :
        controller = CancellationController(context, sink)
        with controller:
            context.interface.run()

    Args :
        context : Contexte racine (source de la poignee d'interface)
        sink : Puits de diagnostics
        fatal_signals : Signaux qui demandent l'arret
        transient_signals : Signaux simplement acquittes
    """

    def __init__(
        self,
        context: RootContext,
        sink: IMessageSink,
        fatal_signals: Sequence[int] = FATAL_SIGNALS,
        transient_signals: Sequence[int] = TRANSIENT_SIGNALS,
    ) -> None:
        self._context = context
        self._sink = sink
        self._fatal = tuple(fatal_signals)
        self._transient = tuple(transient_signals)
        self._previous: dict[int, Any] = {}
        self._installed = False
        self._fired = False

    @property
    def installed(self) -> bool:
        return self._installed

    @property
    def fired(self) -> bool:
        """Vrai une fois que le gestionnaire fatal s'est execute."""
        return self._fired

    def install(self) -> None:
        """Arme les gestionnaires; une nouvelle installation rearme le gestionnaire fatal."""
        if self._installed:
            return
        if threading.current_thread() is not threading.main_thread():
            logger.warning("Gestionnaires de signaux non installes: hors du thread principal")
            return

        self._fired = False
        for signum in self._fatal:
            self._previous[signum] = signal.signal(signum, self.handle_fatal)
        for signum in self._transient:
            self._previous[signum] = signal.signal(signum, self.handle_transient)
        self._installed = True

    def uninstall(self) -> None:
        """
        Restaure les gestionnaires precedents.

        Apres un signal fatal, les signaux fatals restent ignores: l'arret
        est deja en cours et ne doit pas etre interrompu.
        """
        if not self._installed:
            return
        for signum, previous in self._previous.items():
            if self._fired and signum in self._fatal:
                continue
            signal.signal(signum, previous if previous is not None else signal.SIG_DFL)
        self._previous.clear()
        self._installed = False

    def __enter__(self) -> "CancellationController":
        self.install()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.uninstall()

    def handle_transient(self, signum: int, frame: Optional[FrameType]) -> None:
        """Acquitte un signal non fatal."""
        self._sink.warn(0, f"intf: ignoring signal {_signal_name(signum)}")

    def handle_fatal(self, signum: int, frame: Optional[FrameType]) -> None:
        """
        Demande l'arret de l'interface en cours.

        Les signaux fatals suivants sont ignores jusqu'a la prochaine
        installation: ils ne sont ni mis en file ni rejoues.
        """
        if self._fired:
            return
        self._fired = True

        for fatal in self._fatal:
            signal.signal(fatal, signal.SIG_IGN)

        self._sink.err_imm(f"intf error: signal {_signal_name(signum)} received, exiting")

        interface = self._context.interface
        if interface is not None:
            interface.die.set()


def _signal_name(signum: int) -> str:
    try:
        return signal.Signals(signum).name
    except ValueError:
        return str(signum)

"""
Orchestrateur du cycle de vie du processus.

Etapes d'une execution :
    Cold -> MessagingReady -> Configured -> PlaylistReady -> BanksReady
         -> NetworkingAttempted -> InterfaceRunning -> Draining -> Cold

Chaque ressource creee est enregistree dans un ExitStack au moment de sa
creation; la destruction suit donc exactement l'ordre inverse de creation,
quel que soit le chemin de sortie (option invalide, echec de la playlist,
echec de l'interface, annulation par signal, exception).

Classement des echecs :
- fatal : puits de diagnostics ou playlist impossibles a creer
- fatal de configuration : option inconnue, aide ou version demandee
- doux : reseau de canaux (fonction desactivee), interface (execution sautee)
"""

import os
from collections.abc import Callable, Mapping, Sequence
from contextlib import ExitStack
from enum import Enum
from typing import Optional

from loguru import logger

from playercore.core.entities.root_context import RootContext
from playercore.core.ports.subsystems import IMessageSink, ISubsystemFactory, SubsystemError
from playercore.services.cancellation import CancellationController
from playercore.services.capability_prober import CapabilityProber
from playercore.services.option_parser import BadOption, OptionParser, ParseResult
from playercore.services.usage import UsageFashion, UsageRenderer
from playercore.utils import constants as c


class LifecycleState(Enum):
    """Etats de l'orchestrateur."""

    COLD = "cold"
    MESSAGING_READY = "messaging_ready"
    CONFIGURED = "configured"
    PLAYLIST_READY = "playlist_ready"
    BANKS_READY = "banks_ready"
    NETWORKING_ATTEMPTED = "networking_attempted"
    INTERFACE_RUNNING = "interface_running"
    DRAINING = "draining"


class _EarlyExit(Exception):
    """Sortie anticipee: tout ce qui a ete cree est libere avant le retour."""

    def __init__(self, status: int) -> None:
        super().__init__(status)
        self.status = status


ControllerFactory = Callable[[RootContext, IMessageSink], CancellationController]


def program_basename(argv: Sequence[str]) -> str:
    """Nom d'invocation sans prefixe de chemin (equivalent de basename)."""
    if not argv or not argv[0]:
        return c.PROGRAM_NAME
    return argv[0].rsplit("/", 1)[-1] or c.PROGRAM_NAME


class LifecycleOrchestrator:
    """
    Sequence la creation des sous-systemes, execute l'interface et demonte tout.

    Args :
        prober : Detecteur de capacites processeur
        parser : Parseur de ligne de commande
        subsystems : Fabrique des sous-systemes
        usage : Rendu des textes d'aide
        controller_factory : Fabrique du controleur d'annulation

    Utilisation :
        orchestrator = container.orchestrator()
        status = orchestrator.run(sys.argv, os.environ)
    """

    def __init__(
        self,
        prober: CapabilityProber,
        parser: OptionParser,
        subsystems: ISubsystemFactory,
        usage: Optional[UsageRenderer] = None,
        controller_factory: ControllerFactory = CancellationController,
    ) -> None:
        self._prober = prober
        self._parser = parser
        self._subsystems = subsystems
        self._usage = usage or UsageRenderer(parser.table)
        self._controller_factory = controller_factory
        self.state = LifecycleState.COLD
        self.history: list[LifecycleState] = []
        self.context: Optional[RootContext] = None

    def run(self, argv: Sequence[str], env: Optional[Mapping[str, str]] = None) -> int:
        """
        Execute une vie complete du processus.

        Args :
            argv : Ligne de commande complete, argv[0] compris
            env : Environnement pre-existant (defaut: os.environ)

        Retourne :
            Le statut de sortie du processus
        """
        env = os.environ if env is None else env
        self.history = []
        self._enter(LifecycleState.COLD)

        context = RootContext(
            argv0=program_basename(argv),
            capabilities=self._prober.detect(),
        )
        self.context = context

        try:
            sink = self._subsystems.create_sink()
        except SubsystemError as e:
            logger.error(f"error: can't initialize messages interface ({e})")
            return e.code

        try:
            with ExitStack() as outer:
                outer.callback(self._release, "messages", sink.destroy)
                self._enter(LifecycleState.MESSAGING_READY)
                sink.msg(c.COPYRIGHT_MESSAGE)

                try:
                    with ExitStack() as session:
                        status = self._run_session(context, sink, list(argv[1:]), env, session)
                except _EarlyExit as e:
                    return e.status

                sink.msg("intf: program terminated")
                return status
        finally:
            self._enter(LifecycleState.COLD)

    def _run_session(
        self,
        context: RootContext,
        sink: IMessageSink,
        args: list[str],
        env: Mapping[str, str],
        session: ExitStack,
    ) -> int:
        host = self._subsystems.create_host()
        host.init()
        session.callback(self._release, "host", host.end)

        result = self._configure(context, sink, args, env)
        self._create_playlist(context, sink, result.inputs, session)
        self._create_banks(context, session)
        self._attempt_networking(context, sink, session)
        context.seal()

        status = self._run_interface(context, sink, session)
        self._enter(LifecycleState.DRAINING)
        return status

    def _configure(
        self,
        context: RootContext,
        sink: IMessageSink,
        args: list[str],
        env: Mapping[str, str],
    ) -> ParseResult:
        """MessagingReady -> Configured (ou sortie anticipee)."""
        try:
            result = self._parser.parse(args, env)
        except BadOption as e:
            sink.err(f"intf error: {e}")
            self._show(sink, self._usage.render(UsageFashion.USAGE, context.argv0))
            raise _EarlyExit(c.EXIT_BAD_OPTION) from e

        for flag in result.deprecated:
            sink.err(f"intf error: `{flag}' is deprecated, use `-v'")

        if result.exit_request is not None:
            self._show(sink, self._usage.render_request(result.exit_request, context.argv0))
            raise _EarlyExit(c.EXIT_SUCCESS)

        context.store = result.store
        context.apply(result.settings)
        sink.set_warning_level(context.warning_level)
        self._enter(LifecycleState.CONFIGURED)
        return result

    def _create_playlist(
        self,
        context: RootContext,
        sink: IMessageSink,
        inputs: Sequence[str],
        session: ExitStack,
    ) -> None:
        """Configured -> PlaylistReady; un echec est fatal."""
        try:
            playlist = self._subsystems.create_playlist(context)
        except SubsystemError as e:
            sink.err(f"playlist error: playlist initialization failed ({e})")
            raise _EarlyExit(e.code) from e

        context.playlist = playlist
        session.callback(self._release, "playlist", playlist.destroy)

        for item in inputs:
            playlist.add(c.PLAYLIST_END, item)
        self._enter(LifecycleState.PLAYLIST_READY)

    def _create_banks(self, context: RootContext, session: ExitStack) -> None:
        """PlaylistReady -> BanksReady: modules, puis sorties audio, puis video."""
        module_bank = self._subsystems.create_module_bank(context)
        module_bank.init()
        context.module_bank = module_bank
        session.callback(self._release, "module bank", module_bank.end)

        aout_bank = self._subsystems.create_aout_bank(context)
        aout_bank.init()
        context.aout_bank = aout_bank
        session.callback(self._release, "aout bank", aout_bank.end)

        vout_bank = self._subsystems.create_vout_bank(context)
        vout_bank.init()
        context.vout_bank = vout_bank
        session.callback(self._release, "vout bank", vout_bank.end)

        self._enter(LifecycleState.BANKS_READY)

    def _attempt_networking(
        self, context: RootContext, sink: IMessageSink, session: ExitStack
    ) -> None:
        """BanksReady -> NetworkingAttempted; un echec desactive les canaux."""
        if context.channels_enabled:
            try:
                network = self._subsystems.create_channel_network(context)
            except SubsystemError as e:
                sink.msg(
                    "Channels initialization failed : "
                    f"Channel management is deactivated ({e})"
                )
                context.channels_enabled = False
            else:
                context.network = network
                session.callback(self._release, "channel network", network.destroy)

        self._enter(LifecycleState.NETWORKING_ATTEMPTED)

    def _run_interface(
        self, context: RootContext, sink: IMessageSink, session: ExitStack
    ) -> int:
        """NetworkingAttempted -> InterfaceRunning, ou directement Draining."""
        try:
            interface = self._subsystems.create_interface(context)
        except SubsystemError as e:
            sink.err(f"intf error: interface initialization failed ({e})")
            return c.EXIT_FAILURE

        context.attach_interface(interface)
        session.callback(self._end_interface, context, sink)

        controller = self._controller_factory(context, sink)
        controller.install()
        session.callback(self._release, "signal handlers", controller.uninstall)

        self._enter(LifecycleState.INTERFACE_RUNNING)
        interface.run()
        return c.EXIT_SUCCESS

    def _end_interface(self, context: RootContext, sink: IMessageSink) -> None:
        """Detruit l'interface puis revient sur le canal commun si besoin."""
        interface = context.detach_interface()
        self._release("interface", interface.destroy)

        if context.channels_enabled and context.network is not None:
            try:
                context.network.join(c.COMMON_CHANNEL)
            except SubsystemError as e:
                sink.err(f"network error: cannot join channel {c.COMMON_CHANNEL} ({e})")

    def _enter(self, state: LifecycleState) -> None:
        self.state = state
        self.history.append(state)
        logger.debug(f"Cycle de vie: {state.value}")

    @staticmethod
    def _release(name: str, release: Callable[[], None]) -> None:
        logger.debug(f"Liberation: {name}")
        release()

    @staticmethod
    def _show(sink: IMessageSink, blocks: Sequence[str]) -> None:
        for block in blocks:
            sink.msg_imm(block)

"""
Fabrique concrete des sous-systemes.

Assemble les adaptateurs derriere ISubsystemFactory. Chaque sous-systeme
recoit le contexte racine a sa construction plutot que de le chercher dans
un etat global.
"""

import errno
from collections.abc import Callable, Mapping
from typing import Any

from playercore.adapters.banks import ModuleBank, ModuleKey, OutputBank
from playercore.adapters.host import HostPlatform
from playercore.adapters.interface import ConsoleInterface
from playercore.adapters.messages import LoguruMessageSink
from playercore.adapters.network import ChannelNetwork
from playercore.adapters.playlist import Playlist
from playercore.config import Settings
from playercore.core.entities.root_context import RootContext
from playercore.core.ports.subsystems import (
    IChannelNetwork,
    IHostPlatform,
    IInterface,
    IMessageSink,
    IModuleBank,
    IOutputBank,
    IPlaylist,
    ISubsystemFactory,
    SubsystemError,
)
from playercore.utils.constants import INTF_METHOD

BUILTIN_MODULES: Mapping[ModuleKey, Callable[..., Any]] = {
    ("intf", "console"): ConsoleInterface.create,
}


class SubsystemFactory(ISubsystemFactory):
    """
    Args :
        settings : Parametres de l'application
        builtin_modules : Table des modules integres chargee dans la banque
    """

    def __init__(
        self,
        settings: Settings,
        builtin_modules: Mapping[ModuleKey, Callable[..., Any]] = BUILTIN_MODULES,
    ) -> None:
        self._settings = settings
        self._builtin_modules = builtin_modules

    def create_sink(self) -> IMessageSink:
        return LoguruMessageSink.create(self._settings)

    def create_host(self) -> IHostPlatform:
        return HostPlatform()

    def create_playlist(self, context: RootContext) -> IPlaylist:
        return Playlist()

    def create_module_bank(self, context: RootContext) -> IModuleBank:
        return ModuleBank(self._builtin_modules)

    def create_aout_bank(self, context: RootContext) -> IOutputBank:
        return OutputBank("aout")

    def create_vout_bank(self, context: RootContext) -> IOutputBank:
        return OutputBank("vout")

    def create_channel_network(self, context: RootContext) -> IChannelNetwork:
        return ChannelNetwork.create(context.store, self._settings)

    def create_interface(self, context: RootContext) -> IInterface:
        """
        Instancie le module d'interface choisi par la cle intf.

        Leve :
            SubsystemError : banque de modules absente ou module inconnu
        """
        if context.module_bank is None:
            raise SubsystemError("module bank not initialized", code=errno.ENODEV)
        name = context.store.get_str(INTF_METHOD, self._settings.default_interface)
        factory = context.module_bank.find("intf", name)
        return factory(context, self._settings)

"""
Contexte racine du processus.

Structure unique qui possede les reglages globaux et les poignees des
sous-systemes vivants pour une execution. Elle est construite explicitement
par l'orchestrateur puis passee a chaque sous-systeme: il n'existe aucun
etat global mutable implicite.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from playercore.core.entities.config_store import ConfigStore
from playercore.core.ports.subsystems import (
    IChannelNetwork,
    IInterface,
    IModuleBank,
    IOutputBank,
    IPlaylist,
)
from playercore.core.value_objects import CpuCapability, RootSettings
from playercore.utils.constants import PROGRAM_NAME


class ContextSealedError(AttributeError):
    """Ecriture d'un champ du contexte apres la phase de configuration."""


class InterfaceHandleError(RuntimeError):
    """Transition illegale de la poignee d'interface."""


# Etats de la poignee d'interface: jamais attachee, attachee, detachee
_HANDLE_EMPTY = 0
_HANDLE_ATTACHED = 1
_HANDLE_RELEASED = 2

# Seuls champs modifiables une fois le contexte scelle
_WRITABLE_WHEN_SEALED = frozenset({"_interface", "_handle_state"})


@dataclass
class RootContext:
    """
    Racine de toutes les donnees d'une execution.

    Tous les champs sauf la poignee d'interface sont ecrits pendant la phase
    de configuration puis figes par seal(). La poignee d'interface passe de
    None a une valeur exactement une fois, puis de cette valeur a None
    exactement une fois.

    Attributs :
        argv0 : Nom d'invocation sans chemin (texte d'aide uniquement)
        capabilities : Masque de capacites processeur
        audio_enabled, video_enabled, channels_enabled : Reglages racine
        warning_level : Niveau de verbosite (>= 0)
        store : Magasin de configuration
        playlist : Liste des entrees, creee avant l'interface
        module_bank, aout_bank, vout_bank : Registres
        network : Sous-systeme de canaux, si active et cree
    """

    argv0: str = PROGRAM_NAME
    capabilities: CpuCapability = CpuCapability.NONE
    audio_enabled: bool = True
    video_enabled: bool = True
    channels_enabled: bool = False
    warning_level: int = 0
    store: ConfigStore = field(default_factory=ConfigStore)
    playlist: Optional[IPlaylist] = None
    module_bank: Optional[IModuleBank] = None
    aout_bank: Optional[IOutputBank] = None
    vout_bank: Optional[IOutputBank] = None
    network: Optional[IChannelNetwork] = None
    _interface: Optional[IInterface] = field(default=None, repr=False)
    _handle_state: int = field(default=_HANDLE_EMPTY, repr=False)
    _sealed: bool = field(default=False, repr=False)

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_sealed", False) and name not in _WRITABLE_WHEN_SEALED:
            raise ContextSealedError(f"champ '{name}' en lecture seule apres configuration")
        object.__setattr__(self, name, value)

    def apply(self, settings: RootSettings) -> None:
        """Applique les reglages racine issus du parsing."""
        self.audio_enabled = settings.audio_enabled
        self.video_enabled = settings.video_enabled
        self.channels_enabled = settings.channels_enabled
        self.warning_level = max(settings.warning_level, 0)

    def seal(self) -> None:
        """Fige le contexte: fin de la phase de configuration."""
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def has_capability(self, capability: CpuCapability) -> bool:
        """Vrai si toutes les capacites demandees ont ete detectees."""
        return self.capabilities & capability == capability

    @property
    def interface(self) -> Optional[IInterface]:
        """Interface en cours d'execution, ou None."""
        return self._interface

    def attach_interface(self, interface: IInterface) -> None:
        """Enregistre l'interface creee (une seule fois par execution)."""
        if self._handle_state != _HANDLE_EMPTY:
            raise InterfaceHandleError("une interface a deja ete attachee pour cette execution")
        self._interface = interface
        self._handle_state = _HANDLE_ATTACHED

    def detach_interface(self) -> IInterface:
        """Libere la poignee d'interface et retourne l'interface detachee."""
        if self._handle_state != _HANDLE_ATTACHED or self._interface is None:
            raise InterfaceHandleError("aucune interface attachee")
        interface = self._interface
        self._interface = None
        self._handle_state = _HANDLE_RELEASED
        return interface

"""
Ports (interfaces abstraites) definissant les contrats des collaborateurs.

Ports sous-systemes : contrats pilotes par l'orchestrateur
- IMessageSink : Puits de diagnostics
- IHostPlatform : Initialisation/nettoyage specifiques a l'hote
- IPlaylist : Liste ordonnee des entrees
- IModuleBank, IOutputBank : Registres de modules et de sorties
- IChannelNetwork : Gestion optionnelle des canaux reseau
- IInterface : Sous-systeme "tourner jusqu'a l'arret"
- ISubsystemFactory : Fabrique injectee dans l'orchestrateur
- SubsystemError : Erreur de creation d'un sous-systeme

Port processeur :
- ICpuidSource : Source des registres d'identification
"""

from playercore.core.ports.cpu import ICpuidSource
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

__all__ = [
    # Sous-systemes
    "IChannelNetwork",
    "IHostPlatform",
    "IInterface",
    "IMessageSink",
    "IModuleBank",
    "IOutputBank",
    "IPlaylist",
    "ISubsystemFactory",
    "SubsystemError",
    # Processeur
    "ICpuidSource",
]

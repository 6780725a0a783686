"""
Entites du domaine.

Exports :
- RootContext : Contexte racine d'une execution
- ConfigStore : Magasin de configuration cle/valeur
- StopFlag : Drapeau d'arret cooperatif de l'interface
"""

from playercore.core.entities.config_store import ConfigStore
from playercore.core.entities.root_context import (
    ContextSealedError,
    InterfaceHandleError,
    RootContext,
)
from playercore.core.entities.stop_flag import StopFlag

__all__ = [
    "ConfigStore",
    "ContextSealedError",
    "InterfaceHandleError",
    "RootContext",
    "StopFlag",
]

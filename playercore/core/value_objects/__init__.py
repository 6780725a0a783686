"""
Objets valeur immutables du domaine.

Exports :
- CpuCapability : Drapeaux de capacites processeur
- CpuidRegisters : Registres d'une feuille CPUID
- AudioRequest : Type de piste audio DVD demande
- ExitRequest : Demande de sortie immediate (aide, version)
- RootSettings : Reglages racine issus de la ligne de commande
"""

from playercore.core.value_objects.capabilities import CpuCapability, CpuidRegisters
from playercore.core.value_objects.options import AudioRequest, ExitRequest, RootSettings

__all__ = [
    "CpuCapability",
    "CpuidRegisters",
    "AudioRequest",
    "ExitRequest",
    "RootSettings",
]

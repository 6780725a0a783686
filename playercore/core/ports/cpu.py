"""
Port de sondage processeur.

Le prober ne parle jamais directement au materiel: il interroge une source
qui sait dire si l'instruction d'identification existe et restituer les
registres d'une feuille. Les implementations peuvent lire /proc/cpuinfo ou
rejouer des valeurs fixes dans les tests.
"""

from abc import ABC, abstractmethod

from playercore.core.value_objects import CpuidRegisters


class ICpuidSource(ABC):
    """Source des informations d'identification processeur."""

    @abstractmethod
    def has_id_flag(self) -> bool:
        """
        Vrai si le bit ID du registre de drapeaux peut basculer.

        C'est le prealable a toute interrogation: sans lui, cpuid() ne doit
        pas etre appele.
        """
        ...

    @abstractmethod
    def cpuid(self, leaf: int) -> CpuidRegisters:
        """Retourne les registres de la feuille demandee."""
        ...

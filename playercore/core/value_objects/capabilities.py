"""
Objets valeur pour les capacites materielles.

Le masque de capacites est calcule une seule fois au demarrage puis lu par
les sous-systemes qui veulent choisir un chemin de code specifique.
"""

from dataclasses import dataclass
from enum import IntFlag


class CpuCapability(IntFlag):
    """Drapeaux de capacites processeur detectes par le prober."""

    NONE = 0
    I486 = 1 << 0
    I586 = 1 << 1
    PPRO = 1 << 2
    MMX = 1 << 3
    THREE_DNOW = 1 << 4
    MMXEXT = 1 << 5
    SSE = 1 << 6
    SSE2 = 1 << 7
    ALTIVEC = 1 << 16

    def names(self) -> list[str]:
        """Retourne les noms des drapeaux actifs, dans l'ordre des bits."""
        return [
            flag.name
            for flag in CpuCapability
            if flag.value and flag.name and self & flag == flag
        ]


@dataclass(frozen=True)
class CpuidRegisters:
    """
    Registres retournes par une feuille CPUID.

    Attributs :
        eax, ebx, ecx, edx : Valeurs 32 bits des registres
    """

    eax: int = 0
    ebx: int = 0
    ecx: int = 0
    edx: int = 0

    @property
    def vendor(self) -> str:
        """Chaine constructeur de la feuille 0 (ordre EBX, EDX, ECX)."""
        raw = b"".join(
            reg.to_bytes(4, "little") for reg in (self.ebx, self.edx, self.ecx)
        )
        return raw.decode("ascii", errors="replace").rstrip("\x00")

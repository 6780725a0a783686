"""
Adaptateur de source CPUID base sur /proc/cpuinfo.

Python ne peut pas executer l'instruction CPUID; le noyau Linux en publie
cependant le resultat. Cet adaptateur reconstruit les registres des feuilles
utilisees par le prober a partir du constructeur, du niveau CPUID et des
drapeaux du premier processeur.
"""

import platform
from pathlib import Path
from typing import Optional

from loguru import logger

from playercore.core.ports.cpu import ICpuidSource
from playercore.core.value_objects import CpuidRegisters

# Drapeaux /proc/cpuinfo -> bit du registre EDX de la feuille 1
LEAF1_EDX_BITS: dict[str, int] = {
    "fpu": 0,
    "tsc": 4,
    "cx8": 8,
    "cmov": 15,
    "mmx": 23,
    "fxsr": 24,
    "sse": 25,
    "sse2": 26,
}

# Drapeaux /proc/cpuinfo -> bit du registre EDX de la feuille 0x80000001
EXT_EDX_BITS: dict[str, int] = {
    "syscall": 11,
    "nx": 20,
    "mmxext": 22,
    "lm": 29,
    "3dnowext": 30,
    "3dnow": 31,
}

X86_MACHINES = frozenset({"i386", "i486", "i586", "i686", "x86", "x86_64", "amd64"})

# Plus haute feuille etendue annoncee quand au moins un drapeau etendu existe
_EXT_MAX_LEAF = 0x80000008


class ProcCpuinfoSource(ICpuidSource):
    """
    Source CPUID reconstruite depuis le texte de /proc/cpuinfo.

    Args :
        text : Contenu de /proc/cpuinfo
    """

    def __init__(self, text: str) -> None:
        fields = _first_processor_fields(text)
        self._vendor = fields.get("vendor_id", "")
        self._flags = frozenset(fields.get("flags", "").split())
        self._level = _parse_level(fields.get("cpuid level"))

    @classmethod
    def from_path(cls, path: Path) -> Optional["ProcCpuinfoSource"]:
        """
        Lit /proc/cpuinfo si l'hote est un x86 qui le publie.

        Retourne :
            La source, ou None (l'appelant utilisera alors un masque fixe)
        """
        if platform.machine().lower() not in X86_MACHINES:
            return None
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug(f"Lecture de {path} impossible: {e}")
            return None
        return cls(text)

    def has_id_flag(self) -> bool:
        return bool(self._vendor)

    def cpuid(self, leaf: int) -> CpuidRegisters:
        if leaf == 0x00000000:
            ebx, edx, ecx = _pack_vendor(self._vendor)
            return CpuidRegisters(eax=self._level, ebx=ebx, ecx=ecx, edx=edx)
        if leaf == 0x00000001:
            return CpuidRegisters(edx=self._register(LEAF1_EDX_BITS))
        if leaf == 0x80000000:
            has_ext = any(flag in self._flags for flag in EXT_EDX_BITS)
            return CpuidRegisters(eax=_EXT_MAX_LEAF if has_ext else 0)
        if leaf == 0x80000001:
            return CpuidRegisters(edx=self._register(EXT_EDX_BITS))
        return CpuidRegisters()

    def _register(self, bits: dict[str, int]) -> int:
        value = 0
        for flag, bit in bits.items():
            if flag in self._flags:
                value |= 1 << bit
        return value


def _first_processor_fields(text: str) -> dict[str, str]:
    """Champs "cle : valeur" du premier bloc processeur."""
    fields: dict[str, str] = {}
    for line in text.splitlines():
        if not line.strip():
            if fields:
                break
            continue
        key, sep, value = line.partition(":")
        if sep:
            fields.setdefault(key.strip(), value.strip())
    return fields


def _parse_level(raw: Optional[str]) -> int:
    # Les noyaux anciens n'exposent pas "cpuid level": un vendeur suffit alors
    if raw is None:
        return 1
    try:
        return int(raw)
    except ValueError:
        return 0


def _pack_vendor(vendor: str) -> tuple[int, int, int]:
    """Decoupe la chaine constructeur en (EBX, EDX, ECX)."""
    raw = vendor.encode("ascii", errors="replace")[:12].ljust(12, b"\x00")
    return (
        int.from_bytes(raw[0:4], "little"),
        int.from_bytes(raw[4:8], "little"),
        int.from_bytes(raw[8:12], "little"),
    )

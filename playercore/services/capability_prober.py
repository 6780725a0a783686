"""
Service de detection des capacites processeur.

Les capacites sont sondees dans un ordre strict de dependance: chaque sonde
n'est tentee que si la precedente a reussi, car le mecanisme d'interrogation
lui-meme peut etre indisponible sinon. Un echec a l'etape k arrete la chaine
et retourne les drapeaux accumules; les etapes k+1..n ne sont jamais tentees.

Sur les hotes sans mecanisme generique de sondage, un masque fixe propre a
la famille de machine est retourne.
"""

import platform
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from playercore.core.ports.cpu import ICpuidSource
from playercore.core.value_objects import CpuCapability

# Bits des registres CPUID
EDX_MMX = 0x00800000
EDX_SSE = 0x02000000
EDX_SSE2 = 0x04000000
EXT_EDX_AMD_MMXEXT = 0x00400000
EXT_EDX_3DNOW = 0x80000000

LEAF_VENDOR = 0x00000000
LEAF_FEATURES = 0x00000001
LEAF_EXT_MAX = 0x80000000
LEAF_EXT_FEATURES = 0x80000001

AMD_VENDOR = "AuthenticAMD"

# Masques fixes pour les hotes sans sondage generique
X86_64_BASELINE = (
    CpuCapability.I486
    | CpuCapability.I586
    | CpuCapability.MMX
    | CpuCapability.MMXEXT
    | CpuCapability.SSE
    | CpuCapability.SSE2
)

FIXED_PLATFORM_CAPABILITIES: dict[str, CpuCapability] = {
    "x86_64": X86_64_BASELINE,
    "amd64": X86_64_BASELINE,
    "ppc": CpuCapability.ALTIVEC,
    "ppc64": CpuCapability.ALTIVEC,
    "ppc64le": CpuCapability.ALTIVEC,
    "powerpc": CpuCapability.ALTIVEC,
    "power macintosh": CpuCapability.ALTIVEC,
}


@dataclass
class ProbeState:
    """Etat accumule le long de la chaine."""

    capabilities: CpuCapability = CpuCapability.NONE
    vendor: str = ""


# Une etape retourne False pour interrompre la chaine
ProbeStep = Callable[[ICpuidSource, ProbeState], bool]


def probe_id_flag(source: ICpuidSource, state: ProbeState) -> bool:
    """Le bit ID bascule: l'instruction d'identification existe (486)."""
    if not source.has_id_flag():
        return False
    state.capabilities |= CpuCapability.I486
    return True


def probe_max_level(source: ICpuidSource, state: ProbeState) -> bool:
    """La feuille 0 annonce au moins une feuille standard (586)."""
    regs = source.cpuid(LEAF_VENDOR)
    if not regs.eax:
        return False
    state.capabilities |= CpuCapability.I586
    state.vendor = regs.vendor
    return True


def probe_vector_set(source: ICpuidSource, state: ProbeState) -> bool:
    """Extensions vectorielles de la feuille 1 (MMX, puis SSE et SSE2)."""
    regs = source.cpuid(LEAF_FEATURES)
    if not regs.edx & EDX_MMX:
        return False
    state.capabilities |= CpuCapability.MMX
    if regs.edx & EDX_SSE:
        state.capabilities |= CpuCapability.MMXEXT | CpuCapability.SSE
        if regs.edx & EDX_SSE2:
            state.capabilities |= CpuCapability.SSE2
    return True


def probe_extended_level(source: ICpuidSource, state: ProbeState) -> bool:
    """Les feuilles etendues existent (prealable aux extensions constructeur)."""
    regs = source.cpuid(LEAF_EXT_MAX)
    return regs.eax >= LEAF_EXT_FEATURES


def probe_vendor_extensions(source: ICpuidSource, state: ProbeState) -> bool:
    """Extensions constructeur de la feuille etendue 1 (3DNow!, MMX etendu AMD)."""
    regs = source.cpuid(LEAF_EXT_FEATURES)
    if regs.edx & EXT_EDX_3DNOW:
        state.capabilities |= CpuCapability.THREE_DNOW
    if state.vendor == AMD_VENDOR and regs.edx & EXT_EDX_AMD_MMXEXT:
        state.capabilities |= CpuCapability.MMXEXT
    return True


DEFAULT_CHAIN: tuple[ProbeStep, ...] = (
    probe_id_flag,
    probe_max_level,
    probe_vector_set,
    probe_extended_level,
    probe_vendor_extensions,
)


class CapabilityProber:
    """
    Detecteur de capacites processeur a chaine de sondes.

    Args :
        source : Source CPUID, ou None si l'hote n'offre pas de sondage generique
        machine : Famille de machine pour le masque fixe (defaut: platform.machine())
        chain : Etapes de sondage, dans l'ordre de dependance
    """

    def __init__(
        self,
        source: Optional[ICpuidSource] = None,
        machine: Optional[str] = None,
        chain: Sequence[ProbeStep] = DEFAULT_CHAIN,
    ) -> None:
        self._source = source
        self._machine = machine if machine is not None else platform.machine()
        self._chain = tuple(chain)

    def detect(self) -> CpuCapability:
        """
        Detecte les capacites de l'hote. Ne leve jamais d'exception.

        Retourne :
            Le masque de capacites (NONE sur un hote non supporte)
        """
        if self._source is None:
            fixed = FIXED_PLATFORM_CAPABILITIES.get(self._machine.lower(), CpuCapability.NONE)
            logger.debug(f"Capacites fixes pour {self._machine or 'hote inconnu'}: {fixed!r}")
            return fixed

        state = ProbeState()
        for step in self._chain:
            try:
                proceed = step(self._source, state)
            except OSError as e:
                logger.warning(f"Sondage CPU interrompu a l'etape {step.__name__}: {e}")
                break
            if not proceed:
                logger.debug(f"Chaine de sondage arretee a l'etape {step.__name__}")
                break

        logger.debug(f"Capacites detectees: {', '.join(state.capabilities.names()) or 'aucune'}")
        return state.capabilities

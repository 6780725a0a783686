"""
Tests unitaires pour ProcCpuinfoSource.

Tests couvrant:
- Reconstruction des registres CPUID depuis /proc/cpuinfo
- Detection complete via CapabilityProber
- Hotes non x86 et fichier absent
"""

from pathlib import Path

import pytest

from playercore.adapters.cpuinfo import ProcCpuinfoSource
from playercore.core.value_objects import CpuCapability
from playercore.services.capability_prober import EDX_MMX, EDX_SSE2, CapabilityProber

C = CpuCapability

INTEL_CPUINFO = """\
processor\t: 0
vendor_id\t: GenuineIntel
cpu family\t: 6
model name\t: Intel(R) Core(TM) i7-8650U CPU @ 1.90GHz
cpuid level\t: 22
flags\t\t: fpu vme tsc cx8 cmov mmx fxsr sse sse2 syscall nx lm

processor\t: 1
vendor_id\t: GenuineIntel
cpuid level\t: 22
flags\t\t: fpu
"""

AMD_K6_CPUINFO = """\
processor\t: 0
vendor_id\t: AuthenticAMD
cpuid level\t: 1
flags\t\t: fpu tsc cx8 mmx syscall 3dnow mmxext
"""


class TestRegisters:
    """Tests pour la reconstruction des registres."""

    def test_vendor_leaf(self) -> None:
        regs = ProcCpuinfoSource(INTEL_CPUINFO).cpuid(0)
        assert regs.vendor == "GenuineIntel"
        assert regs.eax == 22

    def test_feature_leaf(self) -> None:
        edx = ProcCpuinfoSource(INTEL_CPUINFO).cpuid(1).edx
        assert edx & EDX_MMX
        assert edx & EDX_SSE2

    def test_only_first_processor_is_read(self) -> None:
        source = ProcCpuinfoSource(INTEL_CPUINFO)
        assert source.cpuid(1).edx & EDX_MMX

    def test_extended_leaves(self) -> None:
        source = ProcCpuinfoSource(AMD_K6_CPUINFO)
        assert source.cpuid(0x80000000).eax >= 0x80000001
        assert source.cpuid(0x80000001).edx & (1 << 31)

    def test_unknown_leaf_is_zero(self) -> None:
        regs = ProcCpuinfoSource(INTEL_CPUINFO).cpuid(7)
        assert (regs.eax, regs.ebx, regs.ecx, regs.edx) == (0, 0, 0, 0)

    def test_empty_text_has_no_id_flag(self) -> None:
        assert not ProcCpuinfoSource("").has_id_flag()


class TestDetection:
    """Tests de bout en bout avec le prober."""

    def test_intel(self) -> None:
        caps = CapabilityProber(ProcCpuinfoSource(INTEL_CPUINFO)).detect()
        assert caps == C.I486 | C.I586 | C.MMX | C.MMXEXT | C.SSE | C.SSE2

    def test_amd_k6(self) -> None:
        caps = CapabilityProber(ProcCpuinfoSource(AMD_K6_CPUINFO)).detect()
        assert caps == C.I486 | C.I586 | C.MMX | C.THREE_DNOW | C.MMXEXT


class TestFromPath:
    """Tests pour ProcCpuinfoSource.from_path."""

    def test_reads_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("platform.machine", lambda: "x86_64")
        path = tmp_path / "cpuinfo"
        path.write_text(INTEL_CPUINFO, encoding="utf-8")

        source = ProcCpuinfoSource.from_path(path)
        assert source is not None
        assert source.has_id_flag()

    def test_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("platform.machine", lambda: "x86_64")
        assert ProcCpuinfoSource.from_path(tmp_path / "absent") is None

    def test_non_x86_host(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("platform.machine", lambda: "aarch64")
        path = tmp_path / "cpuinfo"
        path.write_text(INTEL_CPUINFO, encoding="utf-8")
        assert ProcCpuinfoSource.from_path(path) is None

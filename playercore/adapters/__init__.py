"""
Adapters - implementations concretes des ports.

Les adaptateurs relient le domaine au monde exterieur (loguru, /proc/cpuinfo,
sockets, faulthandler) en implementant les interfaces definies dans
core/ports.
"""

from playercore.adapters.banks import ModuleBank, OutputBank
from playercore.adapters.cpuinfo import ProcCpuinfoSource
from playercore.adapters.host import HostPlatform
from playercore.adapters.interface import ConsoleInterface
from playercore.adapters.messages import LoguruMessageSink
from playercore.adapters.network import ChannelNetwork
from playercore.adapters.playlist import Playlist
from playercore.adapters.subsystems import BUILTIN_MODULES, SubsystemFactory

__all__ = [
    "BUILTIN_MODULES",
    "ChannelNetwork",
    "ConsoleInterface",
    "HostPlatform",
    "LoguruMessageSink",
    "ModuleBank",
    "OutputBank",
    "Playlist",
    "ProcCpuinfoSource",
    "SubsystemFactory",
]

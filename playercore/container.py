"""
Container d'injection de dependances via dependency-injector.

Assemble le detecteur de capacites, le parseur d'options, le rendu de
l'aide, la fabrique des sous-systemes et l'orchestrateur du cycle de vie.
"""

from dependency_injector import containers, providers

from playercore.adapters.cpuinfo import ProcCpuinfoSource
from playercore.adapters.subsystems import SubsystemFactory
from playercore.config import Settings
from playercore.services.capability_prober import CapabilityProber
from playercore.services.lifecycle import LifecycleOrchestrator
from playercore.services.option_parser import OptionParser
from playercore.services.usage import UsageRenderer


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        orchestrator = container.orchestrator()
        status = orchestrator.run(sys.argv, os.environ)
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Adapters - implementations concretes des ports
    # None sur un hote non x86: le prober utilise alors un masque fixe
    cpuid_source = providers.Singleton(
        ProcCpuinfoSource.from_path,
        path=config.provided.cpuinfo_path,
    )
    subsystems = providers.Singleton(SubsystemFactory, settings=config)

    # Services
    capability_prober = providers.Singleton(CapabilityProber, source=cpuid_source)
    option_parser = providers.Singleton(OptionParser)
    usage_renderer = providers.Singleton(UsageRenderer)

    # Orchestrateur - nouvelle instance par execution
    orchestrator = providers.Factory(
        LifecycleOrchestrator,
        prober=capability_prober,
        parser=option_parser,
        subsystems=subsystems,
        usage=usage_renderer,
    )

"""
Registres de modules et de sorties.

- ModuleBank : fabriques de modules indexees par (type, nom), remplies a
  l'initialisation depuis une table de modules integres (le chargement
  dynamique de plugins n'est pas gere ici)
- OutputBank : sorties audio ou video vivantes; vide a la creation, les
  sorties restantes sont detruites a la fin
"""

import errno
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from loguru import logger

from playercore.core.ports.subsystems import IModuleBank, IOutputBank, SubsystemError

ModuleKey = tuple[str, str]


class ModuleBank(IModuleBank):
    """
    Registre des modules disponibles.

    Args :
        builtins : Table {(type, nom): fabrique} chargee a init()
    """

    def __init__(self, builtins: Mapping[ModuleKey, Callable[..., Any]]) -> None:
        self._builtins = dict(builtins)
        self._modules: dict[ModuleKey, Callable[..., Any]] = {}

    def init(self) -> None:
        self._modules = dict(self._builtins)
        logger.debug(f"Banque de modules: {len(self._modules)} module(s) integre(s)")

    def register(self, kind: str, name: str, factory: Callable[..., Any]) -> None:
        """Ajoute ou remplace un module."""
        self._modules[(kind, name)] = factory

    def find(self, kind: str, name: str) -> Callable[..., Any]:
        try:
            return self._modules[(kind, name)]
        except KeyError:
            raise SubsystemError(f"no {kind} module named '{name}'", code=errno.ENOENT) from None

    def names(self, kind: str) -> list[str]:
        """Noms des modules d'un type, tries."""
        return sorted(name for module_kind, name in self._modules if module_kind == kind)

    def end(self) -> None:
        self._modules.clear()


class Output(Protocol):
    def destroy(self) -> None:
        ...


class OutputBank(IOutputBank):
    """
    Registre des sorties vivantes d'un type ("aout" ou "vout").

    Args :
        kind : Type de sortie, pour les diagnostics
    """

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._outputs: list[Output] = []

    def init(self) -> None:
        self._outputs = []

    def register(self, output: Output) -> None:
        self._outputs.append(output)

    def remove(self, output: Output) -> None:
        self._outputs.remove(output)

    def __len__(self) -> int:
        return len(self._outputs)

    def end(self) -> None:
        """Detruit les sorties encore enregistrees, la plus recente d'abord."""
        if self._outputs:
            logger.warning(f"Banque {self.kind}: {len(self._outputs)} sortie(s) encore ouverte(s)")
        while self._outputs:
            self._outputs.pop().destroy()

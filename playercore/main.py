"""
Point d'entree du lecteur.

Initialise le container DI et lance une execution complete du cycle de vie;
le statut retourne par l'orchestrateur devient le code de sortie.
"""

import os
import sys

from loguru import logger
from pydantic import ValidationError

from playercore.container import Container
from playercore.utils.constants import ENV_PREFIX, EXIT_BAD_OPTION

container = Container()


def describe_settings_error(error: ValidationError) -> str:
    """Resume une erreur de Settings en une ligne, par variable d'environnement."""
    problems = [
        f"{ENV_PREFIX}{'_'.join(str(part) for part in err['loc']).upper()}: {err['msg']}"
        for err in error.errors()
    ]
    return f"error: invalid configuration ({'; '.join(problems)})"


def main() -> None:
    """Point d'entree de l'application."""
    try:
        orchestrator = container.orchestrator()
    except ValidationError as e:
        # Settings est resolu avant le cycle de vie: pas encore de puits
        logger.error(describe_settings_error(e))
        raise SystemExit(EXIT_BAD_OPTION) from e
    raise SystemExit(orchestrator.run(sys.argv, os.environ))


if __name__ == "__main__":
    main()

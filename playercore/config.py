"""
Configuration de l'application via pydantic-settings.

La configuration est chargee depuis les variables d'environnement avec le prefixe PLAYER_,
et peut optionnellement etre fournie via un fichier .env.

Ces reglages concernent le processus lui-meme (journalisation, choix par defaut
de l'interface, serveur de canaux). Les reglages destines aux sous-systemes
passent par le magasin de configuration rempli par le parseur d'options.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from playercore.utils.constants import ENV_PREFIX

_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Parametres de l'application avec support des variables d'environnement.

    Tous les parametres peuvent etre surcharges via des variables d'environnement
    avec le prefixe PLAYER_.
    Exemple : PLAYER_LOG_LEVEL=DEBUG

    Les chemins sont automatiquement etendus (~ -> repertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de retention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/playercore.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5, ge=1)

    # Interface lancee quand -I/--intf n'est pas fourni
    default_interface: str = Field(default="console")
    interface_poll_interval: float = Field(default=0.1, gt=0)

    # Serveur de canaux (surchargeable par le magasin: channel_server, channel_port)
    channel_server: Optional[str] = Field(default=None)
    channel_port: int = Field(default=6010, ge=1, le=65535)

    # Source des informations processeur (Linux)
    cpuinfo_path: Path = Field(default=Path("/proc/cpuinfo"))

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Etend ~ vers le repertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        """Normalise le niveau de log en majuscules."""
        return str(v).upper()

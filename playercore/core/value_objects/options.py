"""
Objets valeur produits par le parsing de la ligne de commande.

- AudioRequest : type de piste audio DVD demande (-a/--dvdaudio)
- ExitRequest : demande de sortie immediate (aide, aide longue, version)
- RootSettings : reglages racine issus des options (audio, video, canaux, verbosite)
"""

from dataclasses import dataclass
from enum import Enum, IntEnum


class AudioRequest(IntEnum):
    """Codes ecrits dans le magasin pour le type de piste audio DVD."""

    MPEG = 1
    AC3 = 2
    LPCM = 3
    NOAUDIO = 255

    @classmethod
    def from_token(cls, token: str) -> "AudioRequest":
        """Convertit un jeton texte; tout jeton inconnu signifie "pas d'audio"."""
        return _AUDIO_TOKENS.get(token, cls.NOAUDIO)


_AUDIO_TOKENS = {
    "ac3": AudioRequest.AC3,
    "lpcm": AudioRequest.LPCM,
    "mpeg": AudioRequest.MPEG,
}


class ExitRequest(Enum):
    """Options terminales: le processus sort sans poursuivre le parsing."""

    HELP = "help"
    LONG_HELP = "longhelp"
    VERSION = "version"


@dataclass(frozen=True)
class RootSettings:
    """
    Reglages racine appliques au contexte apres le parsing.

    Attributs :
        audio_enabled : False si --noaudio
        video_enabled : False si --novideo
        channels_enabled : True si --channels
        warning_level : Niveau de verbosite, toujours >= 0
    """

    audio_enabled: bool = True
    video_enabled: bool = True
    channels_enabled: bool = False
    warning_level: int = 0

"""
Rendu des textes d'usage, d'aide et de version.

Les textes sont generes depuis la table d'options du parseur, afin que la
grammaire et son aide ne divergent jamais. Le rendu retourne des blocs de
texte; l'orchestrateur les affiche via le puits de diagnostics.
"""

from collections.abc import Sequence
from enum import Enum

from playercore import __version__
from playercore.core.value_objects import ExitRequest
from playercore.services.option_parser import OPTION_TABLE, OptionKind, OptionSpec
from playercore.utils import constants as c


class UsageFashion(Enum):
    """Niveau de detail de l'aide."""

    USAGE = "usage"
    SHORT_HELP = "short"
    LONG_HELP = "long"


SECTION_ORDER = ("interface", "audio", "video", "dvd", "input", "general")

# Parametres du magasin documentes dans l'aide longue, par section
PARAMETER_SECTIONS: tuple[tuple[str, tuple[tuple[str, str, str], ...]], ...] = (
    ("Interface parameters", (
        (c.INTF_METHOD, "<method name>", "interface method"),
    )),
    ("Audio parameters", (
        (c.AOUT_METHOD, "<method name>", "audio method"),
        (c.AOUT_STEREO, "{1|0}", "stereo or mono output"),
        (c.AOUT_SPDIF, "{1|0}", "AC3 pass-through mode"),
    )),
    ("Video parameters", (
        (c.VOUT_METHOD, "<method name>", "display method"),
        (c.VOUT_DISPLAY, "<display name>", "display used"),
        (c.VOUT_WIDTH, "<width>", "display width"),
        (c.VOUT_HEIGHT, "<height>", "display height"),
        (c.VOUT_GRAYSCALE, "{1|0}", "grayscale or color output"),
        (c.VOUT_FULLSCREEN, "{1|0}", "fullscreen"),
        (c.VOUT_OVERLAY, "{1|0}", "overlay"),
        (c.MOTION_METHOD, "<method name>", "motion compensation method"),
        (c.IDCT_METHOD, "<method name>", "IDCT method"),
        (c.YUV_METHOD, "<method name>", "YUV method"),
        (c.VPAR_SYNCHRO, "{I|I+|IP|IP+|IPB}", "synchro algorithm"),
    )),
    ("DVD parameters", (
        (c.INPUT_TITLE, "<title>", "title number"),
        (c.INPUT_CHAPTER, "<chapter>", "chapter number"),
        (c.INPUT_ANGLE, "<angle>", "angle number"),
        (c.INPUT_AUDIO, "{ac3|lpcm|mpeg|off}", "audio type"),
        (c.INPUT_CHANNEL, "[0-15]", "audio channel"),
        (c.INPUT_SUBTITLE, "[0-31]", "subtitle channel"),
    )),
    ("Input parameters", (
        (c.INPUT_METHOD, "<method name>", "input method"),
        (c.INPUT_SERVER, "<hostname>", "video server"),
        (c.INPUT_PORT, "<port>", "video server port"),
        (c.INPUT_BROADCAST, "<addr>", "broadcast mode"),
        (c.INPUT_CHANNEL_SERVER, "<hostname>", "channel server"),
        (c.INPUT_CHANNEL_PORT, "<port>", "channel server port"),
    )),
)

_OPTION_COLUMN = 32


class UsageRenderer:
    """Genere les blocs de texte d'aide pour un nom de programme donne."""

    def __init__(
        self, table: Sequence[OptionSpec] = OPTION_TABLE, env_prefix: str = c.ENV_PREFIX
    ) -> None:
        self._table = tuple(table)
        self._env_prefix = env_prefix

    def render(self, fashion: UsageFashion, argv0: str) -> list[str]:
        """
        Rend l'usage au niveau de detail demande.

        Args :
            fashion : USAGE (rappel court), SHORT_HELP ou LONG_HELP
            argv0 : Nom du programme affiche

        Retourne :
            Liste de blocs de texte a afficher dans l'ordre
        """
        blocks = [f"Usage: {argv0} [options] [parameters] [file]..."]
        if fashion is UsageFashion.USAGE:
            blocks.append(f"Try `{argv0} --help' for more information.")
            return blocks

        blocks.append(self._options_block())
        if fashion is UsageFashion.LONG_HELP:
            blocks.extend(self._parameter_blocks())
        return blocks

    def render_request(self, request: ExitRequest, argv0: str) -> list[str]:
        """Rend le texte associe a une option terminale."""
        if request is ExitRequest.VERSION:
            return [self.version()]
        fashion = UsageFashion.LONG_HELP if request is ExitRequest.LONG_HELP else UsageFashion.SHORT_HELP
        return self.render(fashion, argv0)

    @staticmethod
    def version() -> str:
        return f"{c.PROGRAM_NAME} {__version__}\n{c.WARRANTY_MESSAGE}"

    def _options_block(self) -> str:
        lines = ["", "Options:"]
        for section in SECTION_ORDER:
            specs = [spec for spec in self._table if spec.section == section]
            if not specs:
                continue
            for spec in specs:
                lines.append(_format_option(spec))
            lines.append("")
        return "\n".join(lines).rstrip()

    def _parameter_blocks(self) -> list[str]:
        blocks = []
        for title, entries in PARAMETER_SECTIONS:
            lines = ["", f"{title}:"]
            for key, value, description in entries:
                assignment = f"{self._env_prefix}{key.upper()}={value}"
                lines.append(f"  {assignment:<{_OPTION_COLUMN + 8}}\t{description}")
            blocks.append("\n".join(lines))
        return blocks


def _format_option(spec: OptionSpec) -> str:
    short = next((flag for flag in spec.flags if not flag.startswith("--")), None)
    long = next((flag for flag in spec.flags if flag.startswith("--")), None)

    names = f"{short}, " if short else "    "
    names += long or ""
    if spec.kind is not OptionKind.COUNTER and spec.metavar:
        names += f" {spec.metavar}"
    return f"  {names:<{_OPTION_COLUMN}}\t{spec.help}"

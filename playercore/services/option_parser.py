"""
Service de parsing de la ligne de commande.

Transforme argv en ecritures dans le magasin de configuration et en reglages
racine (audio, video, canaux, verbosite). La grammaire courte (-v, -I ...)
et la grammaire longue (--verbose, --intf ...) sont generees depuis une
seule table d'options et aboutissent aux memes codes d'action.

Quatre formes d'options :
- drapeaux purs : modifient un booleen racine ou incrementent la verbosite
- options a valeur brute : ecrites telles quelles sous une cle fixe
- options a valeur transformee : entier lenient ou petite enumeration (-a)
- options terminales : aide, aide longue, version -> sortie immediate

Les arguments restants ne sont pas consommes: ils sont retournes pour la
passe qui les ajoute a la playlist.
"""

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

import click
from loguru import logger

from playercore.core.entities.config_store import ConfigStore, parse_leading_integer
from playercore.core.value_objects import AudioRequest, ExitRequest, RootSettings
from playercore.utils import constants as c


class OptionKind(Enum):
    """Forme d'une option, qui determine son action."""

    TERMINAL = "terminal"
    COUNTER = "counter"
    LEVEL = "level"
    ROOT_FLAG = "root_flag"
    STORE = "store"
    STORE_CONST = "store_const"
    NUMERIC = "numeric"
    AUDIO_TYPE = "audio_type"


@dataclass(frozen=True)
class OptionSpec:
    """
    Une entree de la table d'options.

    Attributs :
        action : Code d'action interne (nom du parametre click)
        flags : Formes courte et/ou longue ("-I", "--intf")
        kind : Forme de l'option
        key : Cle du magasin (STORE, STORE_CONST, NUMERIC, AUDIO_TYPE)
        value : Constante (STORE_CONST), booleen vise (ROOT_FLAG) ou ExitRequest (TERMINAL)
        metavar : Nom de la valeur dans l'aide
        help : Texte d'aide
        section : Section de l'aide
    """

    action: str
    flags: tuple[str, ...]
    kind: OptionKind
    key: Optional[str] = None
    value: Any = None
    metavar: Optional[str] = None
    help: str = ""
    section: str = "general"

    @property
    def takes_value(self) -> bool:
        return self.kind in (
            OptionKind.LEVEL,
            OptionKind.STORE,
            OptionKind.NUMERIC,
            OptionKind.AUDIO_TYPE,
        )


K = OptionKind

OPTION_TABLE: tuple[OptionSpec, ...] = (
    # Options generales
    OptionSpec("help", ("-h", "--help"), K.TERMINAL, value=ExitRequest.HELP,
               help="print help and exit"),
    OptionSpec("longhelp", ("-H", "--longhelp"), K.TERMINAL, value=ExitRequest.LONG_HELP,
               help="print long help and exit"),
    OptionSpec("version", ("--version",), K.TERMINAL, value=ExitRequest.VERSION,
               help="output version information and exit"),
    # Interface
    OptionSpec("intf", ("-I", "--intf"), K.STORE, key=c.INTF_METHOD, metavar="<module>",
               help="interface method", section="interface"),
    OptionSpec("verbose", ("-v", "--verbose"), K.COUNTER,
               help="verbose mode (cumulative)", section="interface"),
    OptionSpec("warning", ("--warning",), K.LEVEL, metavar="<level>",
               help="warning level (deprecated, use -v)", section="interface"),
    # Audio
    OptionSpec("noaudio", ("--noaudio",), K.ROOT_FLAG, value=("audio_enabled", False),
               help="disable audio", section="audio"),
    OptionSpec("aout", ("-A", "--aout"), K.STORE, key=c.AOUT_METHOD, metavar="<module>",
               help="audio output method", section="audio"),
    OptionSpec("stereo", ("--stereo",), K.STORE_CONST, key=c.AOUT_STEREO, value=1,
               help="stereo audio", section="audio"),
    OptionSpec("mono", ("--mono",), K.STORE_CONST, key=c.AOUT_STEREO, value=0,
               help="mono audio", section="audio"),
    OptionSpec("spdif", ("--spdif",), K.STORE_CONST, key=c.AOUT_SPDIF, value=1,
               help="AC3 pass-through mode", section="audio"),
    # Video
    OptionSpec("novideo", ("--novideo",), K.ROOT_FLAG, value=("video_enabled", False),
               help="disable video", section="video"),
    OptionSpec("vout", ("-V", "--vout"), K.STORE, key=c.VOUT_METHOD, metavar="<module>",
               help="video output method", section="video"),
    OptionSpec("display", ("--display",), K.STORE, key=c.VOUT_DISPLAY, metavar="<display>",
               help="display string", section="video"),
    OptionSpec("width", ("--width",), K.STORE, key=c.VOUT_WIDTH, metavar="<w>",
               help="display width", section="video"),
    OptionSpec("height", ("--height",), K.STORE, key=c.VOUT_HEIGHT, metavar="<h>",
               help="display height", section="video"),
    OptionSpec("grayscale", ("-g", "--grayscale"), K.STORE_CONST, key=c.VOUT_GRAYSCALE, value=1,
               help="grayscale output", section="video"),
    OptionSpec("color", ("--color",), K.STORE_CONST, key=c.VOUT_GRAYSCALE, value=0,
               help="color output", section="video"),
    OptionSpec("fullscreen", ("--fullscreen",), K.STORE_CONST, key=c.VOUT_FULLSCREEN, value=1,
               help="fullscreen output", section="video"),
    OptionSpec("overlay", ("--overlay",), K.STORE_CONST, key=c.VOUT_OVERLAY, value=1,
               help="accelerated display", section="video"),
    OptionSpec("motion", ("--motion",), K.STORE, key=c.MOTION_METHOD, metavar="<module>",
               help="motion compensation method", section="video"),
    OptionSpec("idct", ("--idct",), K.STORE, key=c.IDCT_METHOD, metavar="<module>",
               help="IDCT method", section="video"),
    OptionSpec("yuv", ("--yuv",), K.STORE, key=c.YUV_METHOD, metavar="<module>",
               help="YUV method", section="video"),
    OptionSpec("synchro", ("--synchro",), K.STORE, key=c.VPAR_SYNCHRO, metavar="<type>",
               help="force synchro algorithm", section="video"),
    # DVD
    OptionSpec("dvdtitle", ("-t", "--dvdtitle"), K.NUMERIC, key=c.INPUT_TITLE, metavar="<num>",
               help="choose DVD title", section="dvd"),
    OptionSpec("dvdchapter", ("-T", "--dvdchapter"), K.NUMERIC, key=c.INPUT_CHAPTER,
               metavar="<num>", help="choose DVD chapter", section="dvd"),
    OptionSpec("dvdangle", ("-u", "--dvdangle"), K.NUMERIC, key=c.INPUT_ANGLE, metavar="<num>",
               help="choose DVD angle", section="dvd"),
    OptionSpec("dvdaudio", ("-a", "--dvdaudio"), K.AUDIO_TYPE, key=c.INPUT_AUDIO,
               metavar="<type>", help="choose DVD audio type", section="dvd"),
    OptionSpec("dvdchannel", ("-c", "--dvdchannel"), K.NUMERIC, key=c.INPUT_CHANNEL,
               metavar="<channel>", help="choose DVD audio channel", section="dvd"),
    OptionSpec("dvdsubtitle", ("-s", "--dvdsubtitle"), K.NUMERIC, key=c.INPUT_SUBTITLE,
               metavar="<channel>", help="choose DVD subtitle channel", section="dvd"),
    # Entree
    OptionSpec("input", ("--input",), K.STORE, key=c.INPUT_METHOD, metavar="<module>",
               help="input method", section="input"),
    OptionSpec("channels", ("--channels",), K.ROOT_FLAG, value=("channels_enabled", True),
               help="enable channels", section="input"),
    OptionSpec("server", ("--server",), K.STORE, key=c.INPUT_SERVER, metavar="<host>",
               help="video server address", section="input"),
    OptionSpec("port", ("--port",), K.STORE, key=c.INPUT_PORT, metavar="<port>",
               help="video server port", section="input"),
    OptionSpec("broadcast", ("--broadcast",), K.STORE, key=c.INPUT_BROADCAST, metavar="<addr>",
               help="listen to a broadcast", section="input"),
)

# Jeton de numero de processus injecte par certains hotes (ex: -psn_0_9306113)
HOST_PROCESS_TOKEN_PREFIX = "-psn"

_INPUTS_PARAM = "inputs"

# Une occurrence d'option: son entree de table et sa valeur (None pour un drapeau)
Occurrence = tuple[OptionSpec, Optional[str]]


class BadOption(Exception):
    """
    Option inconnue ou mal formee sur la ligne de commande.

    Attributes:
        token: Le jeton fautif (ex: "--frobnicate")
    """

    def __init__(self, token: str, reason: str = "unknown option") -> None:
        self.token = token
        self.reason = reason
        super().__init__(f"{reason} `{token}'")


@dataclass
class ParseResult:
    """
    Resultat du parsing.

    Attributs :
        settings : Reglages racine a appliquer au contexte
        store : Magasin de configuration (environnement + options)
        inputs : Arguments non-options, dans l'ordre, pour la playlist
        exit_request : Demande de sortie immediate, ou None
        deprecated : Options obsoletes rencontrees
    """

    settings: RootSettings
    store: ConfigStore
    inputs: list[str] = field(default_factory=list)
    exit_request: Optional[ExitRequest] = None
    deprecated: list[str] = field(default_factory=list)


class OptionParser:
    """
    Parseur de ligne de commande genere depuis OPTION_TABLE.

    Chaque occurrence d'option est appliquee dans l'ordre de argv, si bien
    que la derniere ecriture d'une cle gagne. Une option terminale arrete le
    parsing: les jetons qui la suivent ne sont pas examines.

    Utilisation :
        parser = OptionParser()
        result = parser.parse(["--width", "800", "movie.mpg"], os.environ)
        result.store.get_str("width")  # -> "800"
        result.inputs                   # -> ["movie.mpg"]
    """

    def __init__(
        self,
        table: Sequence[OptionSpec] = OPTION_TABLE,
        env_prefix: str = c.ENV_PREFIX,
    ) -> None:
        self._table = tuple(table)
        self._specs = {spec.action: spec for spec in self._table}
        self._env_prefix = env_prefix
        self._command = self._build_command()

        terminal_flags = [
            flag for spec in self._table if spec.kind is K.TERMINAL for flag in spec.flags
        ]
        self._terminal_long = {flag for flag in terminal_flags if flag.startswith("--")}
        self._terminal_short = {flag[1] for flag in terminal_flags if not flag.startswith("--")}

    @property
    def table(self) -> tuple[OptionSpec, ...]:
        return self._table

    def parse(self, args: Sequence[str], env: Mapping[str, str]) -> ParseResult:
        """
        Parse les arguments (sans argv[0]).

        Args :
            args : Arguments de la ligne de commande
            env : Environnement pre-existant, source des valeurs par defaut

        Retourne :
            ParseResult; exit_request est renseigne pour l'aide et la version

        Leve :
            BadOption : option inconnue ou valeur manquante avant toute option terminale
        """
        args = strip_host_tokens(args)
        store = ConfigStore.from_environ(env, self._env_prefix)

        # Un jeton d'aide peut etre la valeur d'une option ("--display -h"):
        # seul le parsing du prefixe qui se termine sur lui permet de trancher.
        for end in self._terminal_candidates(args):
            occurrences, inputs = self._tokenize(args[: end + 1])
            if any(spec.kind is K.TERMINAL for spec, _ in occurrences):
                return self._apply(occurrences, store, inputs)

        occurrences, inputs = self._tokenize(args)
        return self._apply(occurrences, store, inputs)

    def _terminal_candidates(self, args: Sequence[str]) -> Iterator[int]:
        """Indices des jetons qui peuvent contenir une option terminale."""
        for index, token in enumerate(args):
            if token.startswith("--"):
                if token.split("=", 1)[0] in self._terminal_long:
                    yield index
            elif token.startswith("-") and any(ch in self._terminal_short for ch in token[1:]):
                yield index

    def _tokenize(self, args: Sequence[str]) -> tuple[list[Occurrence], list[str]]:
        """
        Decoupe les arguments en occurrences d'options, dans l'ordre de argv.

        Leve :
            BadOption : option inconnue ou valeur manquante
        """
        ctx = click.Context(self._command, info_name=c.PROGRAM_NAME)
        parser = self._command.make_parser(ctx)
        try:
            values, _, order = parser.parse_args(args=list(args))
        except click.NoSuchOption as e:
            raise BadOption(e.option_name) from e
        except click.BadOptionUsage as e:
            raise BadOption(e.option_name, reason="missing value for option") from e
        except click.UsageError as e:
            raise BadOption(" ".join(args), reason=e.format_message()) from e

        # Les options a valeur sont declarees multiple: values[nom] liste
        # leurs valeurs dans l'ordre des occurrences.
        consumed: dict[str, int] = {}
        occurrences: list[Occurrence] = []
        for param in order:
            spec = self._specs.get(param.name)
            if spec is None:
                continue
            if spec.takes_value:
                index = consumed.get(param.name, 0)
                consumed[param.name] = index + 1
                occurrences.append((spec, values[param.name][index]))
            else:
                occurrences.append((spec, None))

        inputs = list(values.get(_INPUTS_PARAM) or ())
        return occurrences, inputs

    def _apply(
        self, occurrences: list[Occurrence], store: ConfigStore, inputs: list[str]
    ) -> ParseResult:
        """Applique les occurrences une a une, dans l'ordre de la ligne de commande."""
        roots: dict[str, Any] = {
            "audio_enabled": True,
            "video_enabled": True,
            "channels_enabled": False,
        }
        level = 0
        deprecated: list[str] = []

        for spec, value in occurrences:
            kind = spec.kind

            if kind is K.TERMINAL:
                return ParseResult(
                    settings=RootSettings(),
                    store=store,
                    inputs=inputs,
                    exit_request=spec.value,
                    deprecated=deprecated,
                )
            if kind is K.COUNTER:
                level += 1
            elif kind is K.LEVEL:
                deprecated.append(spec.flags[-1])
                level = parse_leading_integer(value)
            elif kind is K.ROOT_FLAG:
                name, flag_value = spec.value
                roots[name] = flag_value
            elif kind is K.STORE:
                store.put_str(spec.key, value)
            elif kind is K.STORE_CONST:
                store.put_int(spec.key, spec.value)
            elif kind is K.NUMERIC:
                store.put_int(spec.key, parse_leading_integer(value))
            elif kind is K.AUDIO_TYPE:
                store.put_int(spec.key, AudioRequest.from_token(value))

        if level < 0:
            logger.debug(f"Niveau d'avertissement negatif ({level}) ramene a 0")
            level = 0

        return ParseResult(
            settings=RootSettings(warning_level=level, **roots),
            store=store,
            inputs=inputs,
            deprecated=deprecated,
        )

    def _build_command(self) -> click.Command:
        params: list[click.Parameter] = []
        for spec in self._table:
            decls = [spec.action, *spec.flags]
            if spec.kind is K.COUNTER:
                option = click.Option(decls, count=True)
            elif spec.takes_value:
                option = click.Option(decls, type=str, metavar=spec.metavar, multiple=True)
            else:
                option = click.Option(decls, is_flag=True)
            params.append(option)

        params.append(click.Argument([_INPUTS_PARAM], nargs=-1))
        return click.Command(
            name=c.PROGRAM_NAME,
            params=params,
            add_help_option=False,
        )


def strip_host_tokens(args: Sequence[str]) -> list[str]:
    """Retire le jeton de processus injecte par l'hote en tete des arguments."""
    args = list(args)
    if args and args[0].startswith(HOST_PROCESS_TOKEN_PREFIX):
        logger.debug(f"Jeton hote ignore: {args[0]}")
        return args[1:]
    return args

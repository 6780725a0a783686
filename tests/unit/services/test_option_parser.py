"""
Tests unitaires pour OptionParser.

Tests couvrant:
- Ecritures du magasin (valeur brute, constante, entier lenient, enumeration audio)
- Drapeaux racine et compteur de verbosite
- Options terminales (aide, aide longue, version)
- Options inconnues ou sans valeur
- Jeton hote et arguments restants pour la playlist
"""

import pytest

from playercore.core.value_objects import ExitRequest, RootSettings
from playercore.services.option_parser import (
    OPTION_TABLE,
    BadOption,
    OptionKind,
    OptionParser,
    strip_host_tokens,
)


@pytest.fixture
def parser() -> OptionParser:
    return OptionParser()


class TestStoreWrites:
    """Tests pour les ecritures du magasin."""

    def test_width_height_and_input(self, parser: OptionParser) -> None:
        result = parser.parse(["--width", "800", "--height", "600", "movie.mpg"], {})
        assert result.store.get_str("width") == "800"
        assert result.store.get_str("height") == "600"
        assert result.inputs == ["movie.mpg"]
        assert result.settings == RootSettings()
        assert result.exit_request is None

    def test_short_and_long_forms_agree(self, parser: OptionParser) -> None:
        short = parser.parse(["-I", "console", "-A", "dsp", "-V", "x11"], {})
        long = parser.parse(["--intf", "console", "--aout", "dsp", "--vout", "x11"], {})
        assert short.store.as_dict() == long.store.as_dict()
        assert short.store.get_str("intf") == "console"

    @pytest.mark.parametrize(
        "token,expected",
        [("mpeg", "1"), ("ac3", "2"), ("lpcm", "3"), ("dvorak", "255")],
    )
    def test_dvd_audio(self, parser: OptionParser, token: str, expected: str) -> None:
        result = parser.parse(["-a", token], {})
        assert result.store.get_str("dvd_audio") == expected

    @pytest.mark.parametrize(
        "args,key,expected",
        [
            (["-t", "3"], "dvd_title", "3"),
            (["--dvdchapter", "12abc"], "dvd_chapter", "12"),
            (["-u", "abc"], "dvd_angle", "0"),
            (["-c", "2"], "dvd_channel", "2"),
            (["--dvdsubtitle", "-1"], "dvd_subtitle", "-1"),
        ],
    )
    def test_lenient_numeric(self, parser: OptionParser, args, key: str, expected: str) -> None:
        assert parser.parse(args, {}).store.get_str(key) == expected

    @pytest.mark.parametrize(
        "args,key,expected",
        [
            (["--stereo"], "aout_stereo", "1"),
            (["--mono"], "aout_stereo", "0"),
            (["--spdif"], "aout_spdif", "1"),
            (["-g"], "grayscale", "1"),
            (["--color"], "grayscale", "0"),
            (["--fullscreen"], "fullscreen", "1"),
            (["--overlay"], "overlay", "1"),
        ],
    )
    def test_constants(self, parser: OptionParser, args, key: str, expected: str) -> None:
        assert parser.parse(args, {}).store.get_str(key) == expected

    def test_port_stored_raw(self, parser: OptionParser) -> None:
        assert parser.parse(["--port", "12x"], {}).store.get_str("port") == "12x"

    def test_later_option_overrides_earlier(self, parser: OptionParser) -> None:
        result = parser.parse(["--grayscale", "--color"], {})
        assert result.store.get_str("grayscale") == "0"

    def test_repeated_option_keeps_last_value(self, parser: OptionParser) -> None:
        result = parser.parse(["--width", "640", "--width", "800"], {})
        assert result.store.get_str("width") == "800"

    @pytest.mark.parametrize(
        "args,key,expected",
        [
            (["--grayscale", "--color", "--grayscale"], "grayscale", "1"),
            (["-g", "--color", "-g", "--color"], "grayscale", "0"),
            (["--stereo", "--mono", "--stereo"], "aout_stereo", "1"),
            (["-I", "dummy", "--intf", "console", "-I", "gnome"], "intf", "gnome"),
        ],
    )
    def test_each_occurrence_applied_in_argv_order(
        self, parser: OptionParser, args, key: str, expected: str
    ) -> None:
        assert parser.parse(args, {}).store.get_str(key) == expected


class TestEnvironment:
    """Tests pour les valeurs par defaut issues de l'environnement."""

    def test_environment_seeds_store(self, parser: OptionParser) -> None:
        result = parser.parse([], {"PLAYER_WIDTH": "640"})
        assert result.store.get_str("width") == "640"

    def test_command_line_wins_over_environment(self, parser: OptionParser) -> None:
        result = parser.parse(["--width", "800"], {"PLAYER_WIDTH": "640"})
        assert result.store.get_str("width") == "800"


class TestRootSettings:
    """Tests pour les drapeaux racine et la verbosite."""

    def test_flags(self, parser: OptionParser) -> None:
        result = parser.parse(["--noaudio", "--novideo", "--channels"], {})
        assert result.settings == RootSettings(
            audio_enabled=False, video_enabled=False, channels_enabled=True
        )

    @pytest.mark.parametrize("args", [["-vvv"], ["-v", "-v", "-v"], ["-v", "--verbose", "-v"]])
    def test_verbose_counter(self, parser: OptionParser, args) -> None:
        assert parser.parse(args, {}).settings.warning_level == 3

    def test_deprecated_warning_option(self, parser: OptionParser) -> None:
        result = parser.parse(["--warning", "2"], {})
        assert result.settings.warning_level == 2
        assert result.deprecated == ["--warning"]

    @pytest.mark.parametrize(
        "args,expected",
        [
            (["-v", "--warning", "2", "-v"], 3),
            (["--warning", "5", "-v"], 6),
            (["-v", "-v", "--warning", "1"], 1),
        ],
    )
    def test_verbose_and_warning_interleaved(
        self, parser: OptionParser, args, expected: int
    ) -> None:
        assert parser.parse(args, {}).settings.warning_level == expected

    def test_negative_warning_level_clamped(self, parser: OptionParser) -> None:
        assert parser.parse(["--warning", "-4"], {}).settings.warning_level == 0


class TestTerminalOptions:
    """Tests pour l'aide et la version."""

    @pytest.mark.parametrize(
        "args,expected",
        [
            (["-h"], ExitRequest.HELP),
            (["--help"], ExitRequest.HELP),
            (["-H"], ExitRequest.LONG_HELP),
            (["--longhelp"], ExitRequest.LONG_HELP),
            (["--version"], ExitRequest.VERSION),
            (["--width", "800", "--version", "movie.mpg"], ExitRequest.VERSION),
        ],
    )
    def test_exit_request(self, parser: OptionParser, args, expected: ExitRequest) -> None:
        assert parser.parse(args, {}).exit_request is expected

    @pytest.mark.parametrize(
        "args,expected",
        [
            (["--help", "--frobnicate"], ExitRequest.HELP),
            (["-h", "--width"], ExitRequest.HELP),
            (["-vH", "-Z"], ExitRequest.LONG_HELP),
            (["--version", "--help"], ExitRequest.VERSION),
        ],
    )
    def test_terminal_option_stops_parsing(
        self, parser: OptionParser, args, expected: ExitRequest
    ) -> None:
        assert parser.parse(args, {}).exit_request is expected

    def test_bad_option_before_help_is_reported(self, parser: OptionParser) -> None:
        with pytest.raises(BadOption) as exc_info:
            parser.parse(["--frobnicate", "--help"], {})
        assert exc_info.value.token == "--frobnicate"

    def test_help_token_consumed_as_option_value(self, parser: OptionParser) -> None:
        result = parser.parse(["--display", "-h", "movie.mpg"], {})
        assert result.exit_request is None
        assert result.store.get_str("display") == "-h"
        assert result.inputs == ["movie.mpg"]

    def test_help_token_after_double_dash_is_an_input(self, parser: OptionParser) -> None:
        result = parser.parse(["--", "-h"], {})
        assert result.exit_request is None
        assert result.inputs == ["-h"]


class TestBadOptions:
    """Tests pour les options invalides."""

    def test_unknown_long_option(self, parser: OptionParser) -> None:
        with pytest.raises(BadOption) as exc_info:
            parser.parse(["--frobnicate"], {})
        assert exc_info.value.token == "--frobnicate"
        assert "--frobnicate" in str(exc_info.value)

    def test_unknown_short_option(self, parser: OptionParser) -> None:
        with pytest.raises(BadOption):
            parser.parse(["-Z"], {})

    def test_missing_value(self, parser: OptionParser) -> None:
        with pytest.raises(BadOption) as exc_info:
            parser.parse(["--width"], {})
        assert exc_info.value.token == "--width"


class TestInputs:
    """Tests pour les arguments restants."""

    def test_inputs_keep_order_and_interleave(self, parser: OptionParser) -> None:
        result = parser.parse(["a.mpg", "--width", "800", "b.vob"], {})
        assert result.inputs == ["a.mpg", "b.vob"]

    def test_double_dash_ends_options(self, parser: OptionParser) -> None:
        assert parser.parse(["--", "-weird.mpg"], {}).inputs == ["-weird.mpg"]

    def test_host_process_token_stripped(self, parser: OptionParser) -> None:
        result = parser.parse(["-psn_0_9306113", "movie.mpg"], {})
        assert result.inputs == ["movie.mpg"]

    def test_strip_host_tokens_only_first_position(self) -> None:
        assert strip_host_tokens(["a", "-psn_0_1"]) == ["a", "-psn_0_1"]
        assert strip_host_tokens([]) == []


def test_parse_is_repeatable(parser: OptionParser) -> None:
    args = ["-vv", "--noaudio", "--width", "800", "-a", "ac3", "movie.mpg"]
    first = parser.parse(args, {"PLAYER_HEIGHT": "600"})
    second = parser.parse(args, {"PLAYER_HEIGHT": "600"})
    assert first.store.as_dict() == second.store.as_dict()
    assert first.settings == second.settings
    assert first.inputs == second.inputs


def test_table_covers_every_kind() -> None:
    kinds = {spec.kind for spec in OPTION_TABLE}
    assert kinds == set(OptionKind)
    actions = [spec.action for spec in OPTION_TABLE]
    assert len(actions) == len(set(actions))

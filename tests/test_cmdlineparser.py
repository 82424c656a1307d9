import pytest

from stunkit.cmdlineparser import CmdLineParser, HasArg, ParsedCommandLine


@pytest.fixture
def parser():
    p = CmdLineParser()
    p.add_non_option("server")
    p.add_non_option("port")
    for name in ("localaddr", "localport", "mode", "family", "protocol", "verbosity"):
        p.add_option(name, HasArg.REQUIRED)
    p.add_option("help", HasArg.NO)
    return p


def test_positionals_and_option(parser):
    result = parser.parse_command_line(["prog", "stun.example.com", "3478", "--mode", "full"])
    assert result.error is False
    assert result.get("server") == "stun.example.com"
    assert result.get("port") == "3478"
    assert result.get("mode") == "full"


def test_options_before_positionals_with_equals(parser):
    result = parser.parse_command_line(["prog", "--family=6", "host.example.com"])
    assert result.error is False
    assert result.get("family") == "6"
    assert result.get("server") == "host.example.com"
    assert result.get("port") == ""


def test_single_dash_long_option(parser):
    result = parser.parse_command_line(["prog", "-protocol", "tcp", "server.example.com"])
    assert result.get("protocol") == "tcp"
    assert result.get("server") == "server.example.com"


def test_unique_prefix_matches(parser):
    result = parser.parse_command_line(["prog", "--verb", "2"])
    assert result.error is False
    assert result.get("verbosity") == "2"


def test_ambiguous_prefix_is_error(parser):
    result = parser.parse_command_line(["prog", "--local", "x", "server.example.com"])
    assert result.error is True
    assert "localaddr" not in result.values
    assert "localport" not in result.values


def test_flag_option_records_one(parser):
    result = parser.parse_command_line(["prog", "--help"])
    assert result.get("help") == "1"
    assert result.error is False


def test_flag_option_with_value_is_error(parser):
    result = parser.parse_command_line(["prog", "--help=yes"])
    assert result.error is True
    assert "help" not in result.values


def test_unknown_option_sets_error_but_parsing_continues(parser):
    result = parser.parse_command_line(["prog", "--bogus", "--mode", "basic", "srv"])
    assert result.error is True
    assert result.get("mode") == "basic"
    assert result.get("server") == "srv"


def test_missing_required_argument_is_error(parser):
    result = parser.parse_command_line(["prog", "srv", "--mode"])
    assert result.error is True
    assert "mode" not in result.values


def test_required_argument_may_start_with_dash(parser):
    result = parser.parse_command_line(["prog", "--verbosity", "-1"])
    assert result.get("verbosity") == "-1"


def test_double_dash_ends_options(parser):
    result = parser.parse_command_line(["prog", "--", "-weird", "--"])
    assert result.error is False
    assert result.get("server") == "-weird"
    assert result.get("port") == ""


def test_extra_positionals_are_ignored(parser):
    result = parser.parse_command_line(["prog", "a", "b", "c"])
    assert result.error is False
    assert result.get("server") == "a"
    assert result.get("port") == "b"
    assert "c" not in result.values.values()


def test_start_index_zero_includes_first_argument(parser):
    result = parser.parse_command_line(["first", "second"], 0)
    assert result.get("server") == "first"
    assert result.get("port") == "second"


def test_optional_argument_forms():
    p = CmdLineParser()
    p.add_option("opt", HasArg.OPTIONAL)
    p.add_non_option("rest")
    assert p.parse_command_line(["prog", "--opt"]).get("opt") == "1"
    assert p.parse_command_line(["prog", "--opt=x"]).get("opt") == "x"
    result = p.parse_command_line(["prog", "--opt", "y"])
    assert result.get("opt") == "1"
    assert result.get("rest") == "y"


def test_empty_inline_value_is_kept(parser):
    result = parser.parse_command_line(["prog", "--mode="])
    assert result.values["mode"] == ""


@pytest.mark.parametrize("has_arg", [-1, 3])
def test_add_option_rejects_bad_has_arg(has_arg):
    with pytest.raises(ValueError):
        CmdLineParser().add_option("x", has_arg)


def test_add_option_rejects_missing_name():
    with pytest.raises(ValueError):
        CmdLineParser().add_option(None, HasArg.NO)


def test_parsed_command_line_get_default():
    parsed = ParsedCommandLine(values={"a": "b"})
    assert parsed.get("a") == "b"
    assert parsed.get("missing", "dflt") == "dflt"
import pytest

from quotaday.cli import build_parser, main, version_string


def test_version_string_truncates_commit():
    assert version_string("v1.2.3", "abcdef0123456789") == "v1.2.3+abcdef0"


def test_version_string_short_commit_kept():
    assert version_string("v1.0.0", "abc") == "v1.0.0+abc"


def test_version_string_defaults():
    assert version_string() == "v0.0.0+"


def test_version_command_prints_version(capsys):
    assert main(["version"]) == 0
    assert capsys.readouterr().out == version_string() + "\n"


def test_parser_default_port():
    args = build_parser().parse_args([])
    assert args.port == 80
    assert args.command is None


@pytest.mark.parametrize("argv", [["-p", "8080"], ["--port", "8080"]])
def test_parser_port_option(argv):
    assert build_parser().parse_args(argv).port == 8080


def test_parser_port_before_command():
    args = build_parser().parse_args(["-p", "8080", "version"])
    assert args.port == 8080
    assert args.command == "version"


@pytest.mark.parametrize("value", ["-1", "abc"])
def test_parser_rejects_bad_port(value):
    with pytest.raises(SystemExit) as info:
        build_parser().parse_args(["--port", value])
    assert info.value.code == 2


def test_main_fails_on_unusable_port():
    assert main(["--port", "99999999"]) == 1
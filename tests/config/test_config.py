import logging

import pytest

from errata.config import ErrataConfig, get_config, set_config
from errata.errors import Errors
from errata.exceptions import ErrataError, ErrorKind


@pytest.fixture(autouse=True)
def reset_config():
    set_config(None)
    yield
    set_config(None)


def test_defaults():
    config = ErrataConfig()
    assert config.full_message_format == "{attribute} {message}"
    assert config.bad_line_marker == ">"
    assert config.ok_line_marker == " "
    assert config.log_level == logging.WARNING


def test_from_env_reads_prefixed_variables():
    config = ErrataConfig.from_env(
        {
            "ERRATA_FULL_MESSAGE_FORMAT": "{attribute}: {message}",
            "ERRATA_BAD_LINE_MARKER": "!",
            "ERRATA_OK_LINE_MARKER": ".",
            "ERRATA_LOG_LEVEL": "debug",
        }
    )
    assert config.full_message_format == "{attribute}: {message}"
    assert config.bad_line_marker == "!"
    assert config.ok_line_marker == "."
    assert config.log_level == logging.DEBUG


def test_from_env_overrides_win():
    config = ErrataConfig.from_env({"ERRATA_BAD_LINE_MARKER": "!"}, bad_line_marker="#")
    assert config.bad_line_marker == "#"


@pytest.mark.parametrize(
    "environ",
    [
        {"ERRATA_LOG_LEVEL": "loud"},
        {"ERRATA_BAD_LINE_MARKER": ">>"},
        {"ERRATA_OK_LINE_MARKER": ""},
        {"ERRATA_FULL_MESSAGE_FORMAT": "{attribute}"},
    ],
)
def test_invalid_values_raise_configuration_errors(environ):
    with pytest.raises(ErrataError) as excinfo:
        ErrataConfig.from_env(environ)
    assert excinfo.value.kind is ErrorKind.CONFIGURATION


def test_numeric_log_level_is_accepted():
    assert ErrataConfig.from_env({"ERRATA_LOG_LEVEL": "15"}).log_level == 15


def test_get_config_reads_environment_once(monkeypatch):
    monkeypatch.setenv("ERRATA_FULL_MESSAGE_FORMAT", "{message} ({attribute})")
    config = get_config()
    assert config.full_message_format == "{message} ({attribute})"
    monkeypatch.setenv("ERRATA_FULL_MESSAGE_FORMAT", "{attribute} {message}")
    assert get_config() is config


def test_set_config_applies_to_collections_without_their_own():
    set_config(ErrataConfig(full_message_format="{attribute} -> {message}"))

    class Plain:
        name = None

    errors = Errors(Plain())
    assert errors.full_message("name", "is odd") == "Name -> is odd"
    assert ErrataConfig().with_overrides(bad_line_marker="#").bad_line_marker == "#"


@pytest.mark.parametrize("fmt", ["{attr}: {message}", "{0} {message}", "{message} {attribute!z}"])
def test_format_with_unknown_placeholders_is_rejected(fmt):
    with pytest.raises(ErrataError) as excinfo:
        ErrataConfig(full_message_format=fmt)
    assert excinfo.value.kind is ErrorKind.CONFIGURATION


def test_bad_environment_fails_on_first_use_not_on_import(monkeypatch):
    monkeypatch.setenv("ERRATA_BAD_LINE_MARKER", "!!")
    with pytest.raises(ErrataError) as excinfo:
        get_config()
    assert excinfo.value.kind is ErrorKind.CONFIGURATION

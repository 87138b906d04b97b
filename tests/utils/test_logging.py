import logging
import os
import subprocess
import sys

from errata.utils.logging import (
    get_correlation_id,
    get_logger,
    merge_scope,
    resolve_log_level,
    set_correlation_id,
)


def test_correlation_id_round_trip():
    token = set_correlation_id("test-token")
    assert token == "test-token"
    assert get_correlation_id() == "test-token"


def test_loggers_live_under_the_package_namespace():
    logger = get_logger("tests.logging")
    assert logger.name == "errata.tests.logging"
    root = logging.getLogger("errata")
    assert len(root.handlers) == 1
    get_logger("tests.other")
    assert len(root.handlers) == 1


def test_resolve_log_level_tolerates_bad_values():
    assert resolve_log_level({}) == logging.WARNING
    assert resolve_log_level({"ERRATA_LOG_LEVEL": "debug"}) == logging.DEBUG
    assert resolve_log_level({"ERRATA_LOG_LEVEL": "15"}) == 15
    assert resolve_log_level({"ERRATA_LOG_LEVEL": "loud"}) == logging.WARNING


def test_import_survives_invalid_configuration_variables():
    env = dict(os.environ, ERRATA_BAD_LINE_MARKER="!!", ERRATA_LOG_LEVEL="loud")
    script = (
        "import errata\n"
        "errors = errata.Errors(object())\n"
        "errors.add('name', 'is odd')\n"
        "print(errors.messages)\n"
    )
    result = subprocess.run(
        [sys.executable, "-c", script], env=env, capture_output=True, text=True
    )
    assert result.returncode == 0, result.stderr
    assert "{'name': ['is odd']}" in result.stdout


def test_merge_scope_isolates_correlation_ids():
    set_correlation_id("outer")
    with merge_scope() as scoped:
        assert scoped != "outer"
        assert get_correlation_id() == scoped
    assert get_correlation_id() == "outer"

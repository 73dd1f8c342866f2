"""Test the centralized logging functionality."""

import logging
from io import StringIO

from cargoflow import cli
from cargoflow.analysis import analyze
from cargoflow.logging import (
    get_logger,
    install_handler,
    reset_logging,
    set_global_log_level,
    verbosity_level,
)


def test_centralized_logging():
    """Test that centralized logging works properly."""
    capture = StringIO()
    install_handler(logging.StreamHandler(capture), fmt="%(levelname)s:%(message)s")
    logger = get_logger("cargoflow.test")

    logger.info("Test info message")
    assert "INFO:Test info message" in capture.getvalue()

    # Debug is filtered at the default INFO level
    logger.debug("Test debug message")
    assert "Test debug message" not in capture.getvalue()

    set_global_log_level(logging.DEBUG)
    logger.debug("Test debug message after enable")
    assert "DEBUG:Test debug message after enable" in capture.getvalue()


def test_multiple_loggers_inherit_root_level():
    logger1 = get_logger("cargoflow.module1")
    logger2 = get_logger("cargoflow.module2")
    assert logger1 is not logger2

    set_global_log_level(logging.WARNING)
    assert logging.getLogger("cargoflow").level == logging.WARNING
    assert logger1.getEffectiveLevel() == logging.WARNING
    assert logger2.getEffectiveLevel() == logging.WARNING


def test_install_replaces_previous_handler():
    root = logging.getLogger("cargoflow")
    first = install_handler()
    second = install_handler()
    assert first not in root.handlers
    assert root.handlers == [second]


def test_reset_detaches_handler_and_get_logger_reinstalls():
    root = logging.getLogger("cargoflow")
    reset_logging()
    assert root.handlers == []
    assert root.level == logging.NOTSET

    get_logger("cargoflow.lazy")
    assert len(root.handlers) == 1
    assert root.level == logging.INFO


def test_verbosity_level():
    assert verbosity_level() == logging.INFO
    assert verbosity_level(quiet=True) == logging.WARNING
    assert verbosity_level(verbose=True) == logging.DEBUG
    assert verbosity_level(verbose=True, quiet=True) == logging.DEBUG


def test_default_handler_writes_to_stderr_only(capsys):
    get_logger("cargoflow.stream").warning("to stderr")
    captured = capsys.readouterr()
    assert "to stderr" in captured.err
    assert "to stderr" not in captured.out


def test_cli_keeps_logs_out_of_stdout(tmp_path, capsys):
    graph = tmp_path / "g.txt"
    graph.write_text("2 1\n1 0 7\n2 0 8\n1 2\n1\n")

    cli.main(["run", str(graph)])
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["1:", "2: 7"]
    assert "Analyzed 2 stations" in captured.err


def test_engine_logs_at_debug(caplog, chain_graph):
    with caplog.at_level(logging.DEBUG, logger="cargoflow"):
        analyze(chain_graph)
    messages = [r.getMessage() for r in caplog.records]
    assert any("Fixpoint reached after 3 visits" in m for m in messages)

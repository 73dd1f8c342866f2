from __future__ import annotations

import logging
from pathlib import Path

from cargoflow import cli


def test_cli_verbose_and_quiet_switch_levels(caplog, tmp_path: Path) -> None:
    graph = tmp_path / "g.txt"
    graph.write_text("1 0\n1 0 1\n1\n")

    # verbose enables debug
    with caplog.at_level(logging.DEBUG, logger="cargoflow"):
        cli.main(["--verbose", "run", str(graph)])
    assert any("Debug logging enabled" in r.message for r in caplog.records)
    assert any("Fixpoint reached" in r.message for r in caplog.records)

    # quiet suppresses info
    caplog.clear()
    cli.main(["--quiet", "run", str(graph)])
    assert not any(r.levelno == logging.INFO for r in caplog.records)


def test_cli_default_logs_summary_at_info(caplog, tmp_path: Path) -> None:
    graph = tmp_path / "g.txt"
    graph.write_text("1 0\n1 0 1\n1\n")
    with caplog.at_level(logging.INFO, logger="cargoflow"):
        cli.main(["run", str(graph)])
    assert any("Analyzed 1 stations" in r.getMessage() for r in caplog.records)

import io
import json
import logging
from pathlib import Path

import pytest
import yaml

from cargoflow import cli
from cargoflow.config import AnalysisConfig

CHAIN_TEXT = "3 2\n1 10 20\n2 30 40\n3 20 50\n1 2\n2 3\n1\n"


@pytest.fixture
def chain_file(tmp_path: Path) -> Path:
    path = tmp_path / "chain.txt"
    path.write_text(CHAIN_TEXT)
    return path


def test_run_prints_text_result(chain_file: Path, capsys) -> None:
    cli.main(["run", str(chain_file)])
    captured = capsys.readouterr()
    assert captured.out == "1:\n2: 20\n3: 20 40\n"


def test_run_reads_stdin(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(CHAIN_TEXT))
    cli.main(["run"])
    assert capsys.readouterr().out.splitlines() == ["1:", "2: 20", "3: 20 40"]

    monkeypatch.setattr("sys.stdin", io.StringIO(CHAIN_TEXT))
    cli.main(["run", "-"])
    assert capsys.readouterr().out.splitlines()[-1] == "3: 20 40"


def test_run_json_output(chain_file: Path, capsys) -> None:
    cli.main(["run", "--json", "--order", "fifo", str(chain_file)])
    data = json.loads(capsys.readouterr().out)
    assert data["stations"]["3"] == [20, 40]
    assert data["stats"]["order"] == "fifo"


def test_run_writes_output_file(chain_file: Path, tmp_path: Path, capsys) -> None:
    out_file = tmp_path / "out" / "result.txt"
    cli.main(["run", str(chain_file), "-o", str(out_file)])
    assert out_file.read_text() == "1:\n2: 20\n3: 20 40\n"
    assert capsys.readouterr().out == ""


def test_run_yaml_input(tmp_path: Path, capsys) -> None:
    path = tmp_path / "cycle.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "entry": 1,
                "nodes": [
                    {"id": 1, "unload": 1, "load": 2},
                    {"id": 2, "unload": 3, "load": 4},
                ],
                "links": [{"source": 1, "target": 2}, {"source": 2, "target": 1}],
            }
        )
    )
    cli.main(["run", str(path)])
    assert capsys.readouterr().out == "1: 2 4\n2: 2 4\n"


def test_run_explicit_format_overrides_suffix(tmp_path: Path, capsys) -> None:
    path = tmp_path / "graph.data"
    path.write_text(json.dumps({"entry": 7, "nodes": [{"id": 7, "unload": 0, "load": 1}]}))
    cli.main(["run", "--format", "json", str(path)])
    assert capsys.readouterr().out == "7:\n"


@pytest.mark.parametrize(
    "content",
    [
        "2 1\n1 0 1\n2 1 2\n1 3\n1\n",  # unknown edge endpoint
        "2 0\n1 0 1\n1 1 2\n1\n",  # duplicate id
        "1 0\n1 0\n1\n",  # malformed station line
        "1 0\n1 0 1\n5\n",  # unknown entry
    ],
)
def test_run_invalid_input_exits_nonzero(tmp_path: Path, content: str, caplog) -> None:
    path = tmp_path / "bad.txt"
    path.write_text(content)
    with caplog.at_level(logging.ERROR, logger="cargoflow"):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["run", str(path)])
    assert exc_info.value.code == 1
    assert any("Invalid input" in r.getMessage() for r in caplog.records)


def test_run_missing_file_exits_nonzero(tmp_path: Path, caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="cargoflow"):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["run", str(tmp_path / "missing.txt")])
    assert exc_info.value.code == 1
    assert any("Cannot read input" in r.getMessage() for r in caplog.records)


def test_run_non_utf8_input_exits_nonzero(tmp_path: Path, caplog) -> None:
    path = tmp_path / "bad.txt"
    path.write_bytes(b"1 0\n1 1 \xff\n1\n")
    with caplog.at_level(logging.ERROR, logger="cargoflow"):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["run", str(path)])
    assert exc_info.value.code == 1
    assert any("not valid UTF-8" in r.getMessage() for r in caplog.records)


def test_run_iteration_limit_exits_nonzero(
    chain_file: Path, monkeypatch, caplog, capsys
) -> None:
    monkeypatch.setattr(AnalysisConfig, "iteration_limit", lambda self, n, e, w: 0)
    with caplog.at_level(logging.ERROR, logger="cargoflow"):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["run", str(chain_file)])
    assert exc_info.value.code == 1
    assert any("Analysis failed" in r.getMessage() for r in caplog.records)
    assert capsys.readouterr().out == ""


def test_no_arguments_prints_help(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 0
    assert "usage: cargoflow" in capsys.readouterr().out


def test_unknown_order_is_usage_error(chain_file: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["run", "--order", "dfs", str(chain_file)])
    assert exc_info.value.code == 2

"""Readers and writers for station graphs and analysis results.

Three graph formats are supported:

* **text** -- the line-oriented format::

      <node_count> <edge_count>
      <id> <unload> <load>        (node_count lines)
      <from> <to>                 (edge_count lines)
      <entry_id>

  Blank lines are ignored.

* **node-link** -- a JSON-friendly dict::

      {
          "entry": 1,
          "nodes": [{"id": 1, "unload": 10, "load": 20}, ...],
          "links": [{"source": 1, "target": 2}, ...]
      }

* **yaml** -- the node-link dict stored as a YAML document.
"""

from __future__ import annotations

import json
import numbers
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

import yaml

from cargoflow.analysis.context import AnalysisResult
from cargoflow.errors import MalformedInput
from cargoflow.logging import get_logger
from cargoflow.model.graph import FlowGraph, Station

logger = get_logger(__name__)

PathLike = Union[str, Path]

#: Graph formats accepted by :func:`load_graph`.
FORMATS = ("text", "json", "yaml")

_SUFFIX_FORMATS = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}


def _numbered_lines(lines: Iterable[str]) -> Iterator[Tuple[int, str]]:
    """Yield ``(line_no, stripped_line)`` for non-blank lines."""
    for line_no, line in enumerate(lines, start=1):
        stripped = line.strip()
        if stripped:
            yield line_no, stripped


def _parse_ints(line: str, line_no: int, expected: int, what: str) -> List[int]:
    tokens = line.split()
    if len(tokens) != expected:
        raise MalformedInput(
            f"expected {expected} integer(s) for {what}, got {len(tokens)}: {line!r}",
            line_no,
        )
    try:
        return [int(tok) for tok in tokens]
    except ValueError:
        raise MalformedInput(f"non-integer token in {what}: {line!r}", line_no) from None


def parse_text(lines: Iterable[str]) -> FlowGraph:
    """Parse the line-oriented text format into a graph.

    Args:
        lines: Input lines (with or without trailing newlines).

    Returns:
        Validated FlowGraph.

    Raises:
        MalformedInput: On wrong token counts, non-integer tokens, negative
            counts, missing lines or trailing content.
        DuplicateNodeId: If a station id is declared twice.
        UnknownNodeReference: If an edge or the entry names an undeclared id.
    """
    numbered = _numbered_lines(lines)
    last_line_no = 0

    def next_line(what: str) -> Tuple[int, str]:
        nonlocal last_line_no
        try:
            line_no, line = next(numbered)
        except StopIteration:
            raise MalformedInput(
                f"unexpected end of input while reading {what}", last_line_no + 1
            ) from None
        last_line_no = line_no
        return line_no, line

    line_no, line = next_line("header")
    node_count, edge_count = _parse_ints(line, line_no, 2, "header")
    if node_count < 0 or edge_count < 0:
        raise MalformedInput(f"negative count in header: {line!r}", line_no)

    stations: List[Station] = []
    for _ in range(node_count):
        line_no, line = next_line("station declaration")
        node_id, unload, load = _parse_ints(line, line_no, 3, "station declaration")
        stations.append(Station(node_id, unload, load))

    edges: List[Tuple[int, int]] = []
    for _ in range(edge_count):
        line_no, line = next_line("edge declaration")
        src, dst = _parse_ints(line, line_no, 2, "edge declaration")
        edges.append((src, dst))

    line_no, line = next_line("entry station")
    (entry,) = _parse_ints(line, line_no, 1, "entry station")

    trailing = next(numbered, None)
    if trailing is not None:
        raise MalformedInput(f"unexpected trailing content: {trailing[1]!r}", trailing[0])

    return FlowGraph.build(stations, edges, entry)


@contextmanager
def _utf8_errors() -> Iterator[None]:
    """Report undecodable bytes as MalformedInput."""
    try:
        yield
    except UnicodeDecodeError as exc:
        raise MalformedInput(
            f"input is not valid UTF-8: {exc.reason} at byte {exc.start}"
        ) from exc


def read_text(source: Union[PathLike, IO[str]]) -> FlowGraph:
    """Read a text-format graph from a path or an open text stream."""
    with _utf8_errors():
        if isinstance(source, (str, Path)):
            with open(source, "r", encoding="utf-8") as fh:
                return parse_text(fh)
        return parse_text(source)


def format_text(result: AnalysisResult) -> str:
    """Render a result as one ``"<id>: v1 v2 ..."`` line per station.

    Stations are listed by ascending id and values ascending; a station with
    no cargo renders as ``"<id>:"``.
    """
    lines = []
    for node_id, values in result.sorted_items():
        if values:
            lines.append(f"{node_id}: {' '.join(str(v) for v in values)}")
        else:
            lines.append(f"{node_id}:")
    return "\n".join(lines)


def result_to_json(result: AnalysisResult, indent: Optional[int] = 2) -> str:
    """Serialize a result (station sets and run stats) as JSON."""
    return json.dumps(result.to_dict(), indent=indent)


def graph_to_node_link(graph: FlowGraph) -> Dict[str, Any]:
    """Convert a graph into its node-link dict representation.

    Nodes and links keep declaration order, so the conversion round-trips
    without changing traversal order.
    """
    return {
        "entry": graph.entry,
        "nodes": [
            {"id": s.id, "unload": s.unload, "load": s.load} for s in graph.stations
        ],
        "links": [{"source": src, "target": dst} for src, dst in graph.edges],
    }


def check_int(value: Any, what: str) -> int:
    """Return ``value`` as an ``int``, or raise MalformedInput if it is not one.

    numpy integer scalars are accepted and converted.

    Args:
        value: Candidate station id or cargo value.
        what: Description used in the error message.
    """
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise MalformedInput(f"{what} must be an integer, got {value!r}")
    return int(value)


def _require_int(obj: Dict[str, Any], key: str, where: str) -> int:
    if key not in obj:
        raise MalformedInput(f"{where} is missing '{key}'")
    return check_int(obj[key], f"{where} field '{key}'")


def node_link_to_graph(data: Dict[str, Any]) -> FlowGraph:
    """Build a graph from its node-link dict representation.

    Raises:
        MalformedInput: If the structure or field types are wrong.
        DuplicateNodeId: If a station id is declared twice.
        UnknownNodeReference: If a link or the entry names an undeclared id.
    """
    if not isinstance(data, dict):
        raise MalformedInput(f"graph document must be a mapping, got {type(data).__name__}")

    nodes = data.get("nodes", [])
    links = data.get("links", [])
    if not isinstance(nodes, list) or not isinstance(links, list):
        raise MalformedInput("'nodes' and 'links' must be lists")

    stations: List[Station] = []
    for i, node in enumerate(nodes):
        where = f"nodes[{i}]"
        if not isinstance(node, dict):
            raise MalformedInput(f"{where} must be a mapping")
        stations.append(
            Station(
                _require_int(node, "id", where),
                _require_int(node, "unload", where),
                _require_int(node, "load", where),
            )
        )

    edges: List[Tuple[int, int]] = []
    for i, link in enumerate(links):
        where = f"links[{i}]"
        if not isinstance(link, dict):
            raise MalformedInput(f"{where} must be a mapping")
        edges.append(
            (_require_int(link, "source", where), _require_int(link, "target", where))
        )

    entry = _require_int(data, "entry", "graph document")
    return FlowGraph.build(stations, edges, entry)


def read_json(source: Union[PathLike, IO[str]]) -> FlowGraph:
    """Read a node-link graph stored as JSON."""
    try:
        with _utf8_errors():
            if isinstance(source, (str, Path)):
                with open(source, "r", encoding="utf-8") as fh:
                    data = json.load(fh)
            else:
                data = json.load(source)
    except json.JSONDecodeError as exc:
        raise MalformedInput(f"invalid JSON: {exc.msg}", exc.lineno) from exc
    return node_link_to_graph(data)


def read_yaml(source: Union[PathLike, IO[str]]) -> FlowGraph:
    """Read a node-link graph stored as YAML."""
    try:
        with _utf8_errors():
            if isinstance(source, (str, Path)):
                with open(source, "r", encoding="utf-8") as fh:
                    data = yaml.safe_load(fh)
            else:
                data = yaml.safe_load(source)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        line_no = mark.line + 1 if mark is not None else None
        raise MalformedInput(f"invalid YAML: {exc}", line_no) from exc
    if data is None:
        raise MalformedInput("empty YAML document")
    return node_link_to_graph(data)


def detect_format(path: Optional[PathLike]) -> str:
    """Guess the graph format from a file suffix; defaults to ``"text"``."""
    if path is None:
        return "text"
    return _SUFFIX_FORMATS.get(Path(path).suffix.lower(), "text")


def load_graph(
    source: Union[PathLike, IO[str]], fmt: Optional[str] = None
) -> FlowGraph:
    """Load a graph in any supported format.

    Args:
        source: File path or open text stream.
        fmt: One of ``FORMATS``. When None, detected from the path suffix
            (streams default to text).

    Returns:
        Validated FlowGraph.
    """
    if fmt is None:
        fmt = detect_format(source if isinstance(source, (str, Path)) else None)
    if fmt not in FORMATS:
        raise ValueError(f"Unknown graph format '{fmt}'. Valid formats: {', '.join(FORMATS)}")

    logger.debug("Loading %s graph from %s", fmt, source)
    if fmt == "json":
        return read_json(source)
    if fmt == "yaml":
        return read_yaml(source)
    return read_text(source)

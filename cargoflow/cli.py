"""Command-line interface for cargoflow."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, List, Optional

from cargoflow.algorithms.ordering import reverse_postorder
from cargoflow.analysis import analyze
from cargoflow.config import AnalysisConfig
from cargoflow.errors import CargoFlowError, IterationLimitExceeded
from cargoflow.io import FORMATS, format_text, load_graph, result_to_json
from cargoflow.logging import get_logger, set_global_log_level, verbosity_level
from cargoflow.model.graph import FlowGraph
from cargoflow.types.base import WorklistOrder

logger = get_logger(__name__)


def _format_table(
    headers: List[str],
    rows: List[List[Any]],
    min_width: int = 6,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    all_data = [headers] + rows
    col_widths = []
    for col_idx in range(len(headers)):
        max_width = max(len(str(row[col_idx])) for row in all_data)
        col_widths.append(max(max_width, min_width))

    def format_row(row_data: List[Any]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    for row in rows:
        lines.append(format_row(row))
    return "\n".join(lines)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    return f"{seconds:.2f} s"


def _load(input_path: Optional[Path], fmt: Optional[str]) -> FlowGraph:
    """Load a graph from a file, or from stdin when the path is absent or '-'."""
    if input_path is None or str(input_path) == "-":
        return load_graph(sys.stdin, fmt or "text")
    return load_graph(input_path, fmt)


def _run_analysis(
    input_path: Optional[Path],
    fmt: Optional[str],
    order: WorklistOrder,
    as_json: bool,
    output: Optional[Path],
) -> None:
    """Analyze a graph and print or write the per-station cargo sets."""
    try:
        graph = _load(input_path, fmt)
    except CargoFlowError as exc:
        logger.error(f"Invalid input: {exc}")
        sys.exit(1)
    except OSError as exc:
        logger.error(f"Cannot read input: {exc}")
        sys.exit(1)

    start = perf_counter()
    try:
        result = analyze(graph, AnalysisConfig(order=order))
    except IterationLimitExceeded as exc:
        logger.error(f"Analysis failed: {exc}")
        sys.exit(1)
    elapsed = perf_counter() - start

    logger.info(
        "Analyzed %d stations (%d reachable) in %s with %d visits",
        len(result),
        result.stats.reachable,
        _format_duration(elapsed),
        result.stats.iterations,
    )

    text = result_to_json(result) if as_json else format_text(result)
    if output is None:
        if text:
            print(text)
        return

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text + "\n" if text else "", encoding="utf-8")
    except OSError as exc:
        logger.error(f"Cannot write output: {exc}")
        sys.exit(1)
    logger.info(f"Results written to: {output}")


def _inspect_graph(input_path: Optional[Path], fmt: Optional[str], detail: bool) -> None:
    """Print structural information about a graph without analyzing it."""
    try:
        graph = _load(input_path, fmt)
    except CargoFlowError as exc:
        logger.error(f"Invalid input: {exc}")
        sys.exit(1)
    except OSError as exc:
        logger.error(f"Cannot read input: {exc}")
        sys.exit(1)

    order = reverse_postorder(graph)
    print("GRAPH OVERVIEW")
    print("=" * 60)
    print(f"   Stations: {graph.number_of_nodes():,}")
    print(f"   Edges: {graph.number_of_edges():,}")
    print(f"   Entry: {graph.entry}")
    print(f"   Cargo values: {len(graph.universe):,}")
    print(f"   Reachable from entry: {len(order):,}")
    print(f"   Reverse postorder: {' '.join(str(n) for n in order)}")

    if detail:
        rank = {node_id: i for i, node_id in enumerate(order)}
        rows = [
            [
                s.id,
                s.unload,
                s.load,
                len(graph.predecessors(s.id)),
                len(graph.successors(s.id)),
                rank.get(s.id, "-"),
            ]
            for s in sorted(graph.stations, key=lambda s: s.id)
        ]
        print()
        print(_format_table(["Station", "Unload", "Load", "In", "Out", "RPO"], rows))


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``cargoflow`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="cargoflow",
        description="Compute the cargo present at every station of a railway graph.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{run,inspect}",
        help="Available commands",
    )

    run_parser = subparsers.add_parser("run", help="Analyze a graph")
    run_parser.add_argument(
        "--json", action="store_true", help="Print results as JSON instead of text"
    )
    run_parser.add_argument(
        "--order",
        choices=[o.name.lower() for o in WorklistOrder],
        default=WorklistOrder.RPO.name.lower(),
        help="Worklist selection policy (default: rpo)",
    )
    run_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write results to this file instead of stdout",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Validate a graph and show its structure"
    )
    inspect_parser.add_argument(
        "--detail",
        "-d",
        action="store_true",
        help="Show a per-station table",
    )

    for p in (run_parser, inspect_parser):
        p.add_argument(
            "input",
            nargs="?",
            type=Path,
            default=None,
            help="Graph file; reads stdin when omitted or '-'",
        )
        p.add_argument(
            "--format",
            "-f",
            dest="fmt",
            choices=FORMATS,
            default=None,
            help="Input format (default: detected from file suffix, else text)",
        )

    effective_args = sys.argv[1:] if argv is None else argv

    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    set_global_log_level(verbosity_level(args.verbose, args.quiet))
    logger.debug("Debug logging enabled")

    if args.command == "run":
        _run_analysis(
            input_path=args.input,
            fmt=args.fmt,
            order=WorklistOrder.from_string(args.order),
            as_json=args.json,
            output=args.output,
        )
    elif args.command == "inspect":
        _inspect_graph(args.input, args.fmt, args.detail)


if __name__ == "__main__":
    main()

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from snngraph.config import EdgeFile, InMemory, load_config
from snngraph.embedding import DimReduction, parse_dims, select_embedding
from snngraph.errors import ConfigurationError, GraphBuildError
from snngraph.graph import graph_stats
from snngraph.io.readers import read_edge_file, read_matrix, read_vector
from snngraph.io.writers import write_matrix, write_stdout_json
from snngraph.models import GraphHandle, GraphStats
from snngraph.pipeline import build_graph
from snngraph.utils.logging import configure_logging

app = typer.Typer(name="snngraph", help="Build KNN / SNN graphs over embeddings.")

console = Console(stderr=True)


def _stderr(message: str, *, quiet: bool = False) -> None:
    if not quiet:
        typer.echo(message, err=True)


def _setup_logging(quiet: bool) -> None:
    handler = RichHandler(console=console, show_path=False, show_time=False)
    configure_logging(handler, level=logging.ERROR if quiet else logging.INFO)


def _read_reduction(
    input_path: Path,
    *,
    input_format: str,
    skip_header: bool,
    sdev_path: Path | None,
) -> DimReduction:
    try:
        coordinates = read_matrix(input_path, input_format=input_format, skip_header=skip_header)
        sdev = read_vector(sdev_path) if sdev_path is not None else None
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc
    return DimReduction(coordinates=coordinates, sdev=sdev)


def _print_build_summary(handle: GraphHandle, *, quiet: bool) -> None:
    if quiet:
        return
    kind = f"SNN (prune >= {handle.snn_prune:.4g})" if handle.snn else "KNN"
    _stderr(f"{kind} graph: {handle.n_nodes} nodes, {handle.n_edges} edges, k={handle.k}")
    if handle.path is not None:
        _stderr(f"Edge list written to {handle.path}")


def _stats_table(stats: GraphStats) -> Table:
    table = Table(title="Graph Summary")
    table.add_column("Metric")
    table.add_column("Value", justify="right")

    def fmt(value: float | None) -> str:
        return "-" if value is None else f"{value:.4g}"

    table.add_row("Nodes", str(stats.n_nodes))
    table.add_row("Edges", str(stats.n_edges))
    table.add_row("Isolated nodes", str(stats.n_isolated))
    table.add_row("Mean degree", fmt(stats.mean_degree))
    table.add_row("Max degree", str(stats.max_degree))
    table.add_row("Min weight", fmt(stats.min_weight))
    table.add_row("Max weight", fmt(stats.max_weight))
    table.add_row("Mean weight", fmt(stats.mean_weight))
    return table


@app.command()
def build(
    input_path: Path = typer.Argument(..., help="Embedding matrix (.npy, .csv, or whitespace text)."),
    input_format: str = typer.Option("auto", help="Input format: auto, npy, csv, text."),
    skip_header: bool = typer.Option(False, "--skip-header", help="Skip the first line of text input."),
    dims: str | None = typer.Option(None, help="0-based dimensions to use, e.g. '0-9' or '0,2,4'."),
    sdev: Path | None = typer.Option(None, help="File with per-dimension standard deviations."),
    weight_by_sd: bool = typer.Option(False, "--weight-by-sd", help="Scale dimensions by their sdev."),
    k: int | None = typer.Option(None, "-k", "--k", help="Number of nearest neighbors (default 15)."),
    eps: float | None = typer.Option(None, help="Approximation tolerance; 0 means exact search."),
    snn: bool | None = typer.Option(None, "--snn/--knn", help="Re-weight edges by shared neighbors."),
    snn_prune: float | None = typer.Option(None, help="Minimum Jaccard similarity kept in SNN mode."),
    scope: str | None = typer.Option(None, help="SNN candidate pairs: edges or all."),
    output: Path | None = typer.Option(None, "-o", "--output", help="Write the edge list to this file."),
    matrix: Path | None = typer.Option(None, "--matrix", help="Save the adjacency matrix as .npz."),
    workers: int | None = typer.Option(None, help="Worker threads for search and SNN scoring."),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print JSON output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress stderr output."),
) -> None:
    """Build a nearest-neighbor graph and print a JSON summary to stdout."""
    if output is not None and matrix is not None:
        raise typer.BadParameter("Use either --output (edge file) or --matrix (npz), not both")

    _setup_logging(quiet)
    overrides: dict[str, Any] = {
        "k": k,
        "eps": eps,
        "snn": snn,
        "snn_prune": snn_prune,
        "snn_scope": scope,
        "n_workers": workers,
    }
    try:
        config = load_config(**{key: value for key, value in overrides.items() if value is not None})
        dim_list = parse_dims(dims) if dims is not None else None
    except (ConfigurationError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    reduction = _read_reduction(input_path, input_format=input_format, skip_header=skip_header, sdev_path=sdev)
    target = EdgeFile(path=output) if output is not None else InMemory()
    try:
        embedding = select_embedding(reduction, dim_list, weight_by_sd)
        handle = build_graph(embedding, config, target)
    except ConfigurationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except GraphBuildError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc

    if matrix is not None and handle.matrix is not None:
        write_matrix(handle.matrix, matrix)

    _print_build_summary(handle, quiet=quiet)
    write_stdout_json(handle.summary(), pretty=pretty)


@app.command()
def stats(
    edges_file: Path = typer.Argument(..., help="Edge list written by 'snngraph build -o'."),
    nodes: int | None = typer.Option(None, help="Node count; defaults to the largest index seen."),
    as_json: bool = typer.Option(False, "--json", help="Print stats as JSON to stdout."),
) -> None:
    """Summarize degrees and weights of an edge list file."""
    try:
        edges = read_edge_file(edges_file)
        summary = graph_stats(edges, nodes)
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    if as_json:
        write_stdout_json(summary.model_dump())
        return
    console.print(_stats_table(summary))


if __name__ == "__main__":  # pragma: no cover
    app()

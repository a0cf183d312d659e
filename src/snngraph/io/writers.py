from __future__ import annotations

import csv
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from scipy.sparse import save_npz

if TYPE_CHECKING:
    from scipy.sparse import csr_matrix

    from snngraph.models import EdgeList


def dump_json(
    data: object,
    fp: TextIO,
    *,
    pretty: bool = False,
    sort_keys: bool = False,
) -> None:
    """Write JSON to a stream with compact output by default."""
    if pretty:
        json.dump(data, fp, indent=2, sort_keys=sort_keys)
    else:
        json.dump(data, fp, separators=(",", ":"), sort_keys=sort_keys)
    fp.write("\n")


def write_stdout_json(
    data: object,
    *,
    pretty: bool = False,
    sort_keys: bool = False,
) -> None:
    """Write structured JSON to stdout."""
    dump_json(data, sys.stdout, pretty=pretty, sort_keys=sort_keys)


def write_edge_stream(edges: EdgeList, fp: TextIO) -> None:
    """Write edges as tab-separated rows of 1-indexed v1, v2, weight. No header.

    Float weights are written with repr precision so they read back unchanged.
    """
    writer = csv.writer(fp, delimiter="\t", lineterminator="\n")
    for u, v, weight in zip(
        (edges.u + 1).tolist(),
        (edges.v + 1).tolist(),
        edges.weight.tolist(),
        strict=True,
    ):
        writer.writerow([u, v, weight])


def write_edge_file(edges: EdgeList, path: str | Path) -> None:
    """Write an edge list file compatible with read_edge_file."""
    with open(path, "w", newline="") as f:
        write_edge_stream(edges, f)


def write_matrix(matrix: csr_matrix, path: str | Path) -> None:
    """Save a sparse adjacency matrix in scipy's .npz format."""
    save_npz(path, matrix)

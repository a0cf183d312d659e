from __future__ import annotations

from pathlib import Path
from typing import TextIO

import numpy as np

from snngraph.models import EdgeList


def detect_input_format(path: str | Path, input_format: str | None = None) -> str:
    """Infer matrix file format from path suffix unless an explicit format is given."""
    if input_format is not None and input_format != "auto":
        return input_format

    suffix = Path(path).suffix.lower()
    if suffix == ".npy":
        return "npy"
    if suffix == ".csv":
        return "csv"
    return "text"


def read_matrix(
    path: str | Path,
    *,
    input_format: str | None = None,
    skip_header: bool = False,
) -> np.ndarray:
    """Read a numeric matrix (rows are points) from .npy, CSV, or whitespace text."""
    fmt = detect_input_format(path, input_format)
    skiprows = 1 if skip_header else 0
    if fmt == "npy":
        data = np.load(path, allow_pickle=False)
    elif fmt == "csv":
        data = np.loadtxt(path, delimiter=",", skiprows=skiprows, dtype=np.float64, ndmin=2)
    elif fmt == "text":
        data = np.loadtxt(path, skiprows=skiprows, dtype=np.float64, ndmin=2)
    else:
        raise ValueError(f"Unsupported input format: {fmt}")
    return np.asarray(data, dtype=np.float64)


def read_vector(path: str | Path, *, input_format: str | None = None) -> np.ndarray:
    """Read a flat numeric vector, e.g. per-dimension standard deviations."""
    return read_matrix(path, input_format=input_format).reshape(-1)


def _parse_weight(raw: str) -> int | float:
    try:
        return int(raw)
    except ValueError:
        return float(raw)


def read_edge_stream(stream: TextIO) -> EdgeList:
    """Read tab- or space-separated 1-indexed (v1, v2, weight) rows.

    Blank lines and lines starting with '#' are skipped. Weights stay integer
    when every row holds an integer weight.
    """
    u: list[int] = []
    v: list[int] = []
    weights: list[int | float] = []
    for line_no, line in enumerate(stream, start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        fields = line.split()
        if len(fields) != 3:
            raise ValueError(f"Line {line_no}: expected 3 columns (v1, v2, weight), got {len(fields)}")
        a, b = int(fields[0]), int(fields[1])
        if a < 1 or b < 1:
            raise ValueError(f"Line {line_no}: node indices are 1-based")
        u.append(a - 1)
        v.append(b - 1)
        weights.append(_parse_weight(fields[2]))

    if all(isinstance(w, int) for w in weights):
        weight = np.asarray(weights, dtype=np.int64)
    else:
        weight = np.asarray(weights, dtype=np.float64)
    return EdgeList(
        u=np.asarray(u, dtype=np.int64),
        v=np.asarray(v, dtype=np.int64),
        weight=weight,
    ).sorted()


def read_edge_file(path: str | Path) -> EdgeList:
    """Read an edge list written by write_edge_file."""
    with open(path, newline="") as f:
        return read_edge_stream(f)

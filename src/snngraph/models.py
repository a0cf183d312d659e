from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

import numpy as np
from pydantic import BaseModel, ConfigDict
from scipy.sparse import csr_matrix, triu


@dataclass(frozen=True)
class NeighborList:
    """k nearest neighbors per point, nearest first (0-based indices)."""

    indices: np.ndarray
    distances: np.ndarray
    k: int
    advisories: list[str] = field(default_factory=list)

    @property
    def n_points(self) -> int:
        return int(self.indices.shape[0])


@dataclass(frozen=True)
class EdgeList:
    """Canonical (u < v) undirected edges sorted by (u, v), 0-based."""

    u: np.ndarray
    v: np.ndarray
    weight: np.ndarray

    def __len__(self) -> int:
        return int(self.u.shape[0])

    @classmethod
    def empty(cls, dtype: type = np.int64) -> EdgeList:
        return cls(
            u=np.empty(0, dtype=np.int64),
            v=np.empty(0, dtype=np.int64),
            weight=np.empty(0, dtype=dtype),
        )

    def sorted(self) -> EdgeList:
        """Return a copy ordered by (u, v)."""
        order = np.lexsort((self.v, self.u))
        return EdgeList(u=self.u[order], v=self.v[order], weight=self.weight[order])

    def to_tuples(self) -> list[tuple[int, int, float]]:
        """Edges as Python tuples, handy for comparisons and debugging."""
        return [
            (int(a), int(b), w.item())
            for a, b, w in zip(self.u, self.v, self.weight, strict=True)
        ]


class GraphHandle(BaseModel):
    """Result of a graph build: an adjacency matrix or a persisted edge file."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    k: int
    snn: bool
    snn_prune: float
    n_nodes: int
    n_edges: int
    matrix: csr_matrix | None = None
    path: Path | None = None
    advisories: list[str] = []

    @property
    def source(self) -> Literal["matrix", "file"]:
        return "file" if self.path is not None else "matrix"

    def edges(self) -> EdgeList:
        """Return the graph's edge list regardless of where it is stored."""
        if self.path is not None:
            from snngraph.io.readers import read_edge_file

            return read_edge_file(self.path)
        if self.matrix is None:
            return EdgeList.empty()
        upper = triu(self.matrix, k=1).tocoo()
        return EdgeList(
            u=upper.row.astype(np.int64),
            v=upper.col.astype(np.int64),
            weight=upper.data,
        ).sorted()

    def summary(self) -> dict[str, object]:
        """JSON-friendly description of the handle."""
        return {
            "source": self.source,
            "path": str(self.path) if self.path is not None else None,
            "k": self.k,
            "snn": self.snn,
            "snn_prune": self.snn_prune,
            "n_nodes": self.n_nodes,
            "n_edges": self.n_edges,
            "advisories": list(self.advisories),
        }


class GraphStats(BaseModel):
    """Summary statistics for an assembled graph."""

    n_nodes: int
    n_edges: int
    n_isolated: int
    mean_degree: float
    max_degree: int
    min_weight: float | None
    max_weight: float | None
    mean_weight: float | None

from __future__ import annotations

from snngraph.config import EdgeFile, GraphConfig, InMemory, load_config
from snngraph.edges import build_edge_list
from snngraph.embedding import DimReduction, select_embedding
from snngraph.errors import ConfigurationError, GraphBuildError, PrerequisiteError, SearchFailure
from snngraph.graph import assemble, graph_stats, to_adjacency
from snngraph.models import EdgeList, GraphHandle, GraphStats, NeighborList
from snngraph.neighbors import find_neighbors
from snngraph.pipeline import build_graph
from snngraph.snn import refine_snn

__all__ = [
    "ConfigurationError",
    "DimReduction",
    "EdgeFile",
    "EdgeList",
    "GraphBuildError",
    "GraphConfig",
    "GraphHandle",
    "GraphStats",
    "InMemory",
    "NeighborList",
    "PrerequisiteError",
    "SearchFailure",
    "assemble",
    "build_edge_list",
    "build_graph",
    "find_neighbors",
    "graph_stats",
    "load_config",
    "refine_snn",
    "select_embedding",
    "to_adjacency",
]

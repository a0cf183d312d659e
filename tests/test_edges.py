from __future__ import annotations

import numpy as np

from snngraph.edges import build_edge_list, directed_pairs
from snngraph.models import NeighborList
from snngraph.neighbors import find_neighbors


def _neighbor_list(indices: list[list[int]]) -> NeighborList:
    arr = np.asarray(indices, dtype=np.int64)
    return NeighborList(indices=arr, distances=np.zeros(arr.shape), k=arr.shape[1])


def test_line_of_four_points_gives_chain_edges() -> None:
    edges = build_edge_list(_neighbor_list([[1], [0], [1], [2]]))

    assert edges.to_tuples() == [(0, 1, 2), (1, 2, 1), (2, 3, 1)]


def test_edges_are_canonical_unique_and_count_directions() -> None:
    data = np.random.default_rng(7).normal(size=(80, 3))
    neighbors = find_neighbors(data, k=10)

    edges = build_edge_list(neighbors)

    source, target = directed_pairs(neighbors)
    directed = set(zip(source.tolist(), target.tolist()))
    pairs = list(zip(edges.u.tolist(), edges.v.tolist()))
    assert all(u < v for u, v in pairs)
    assert len(pairs) == len(set(pairs))
    for u, v, w in edges.to_tuples():
        assert w in (1, 2)
        assert w == ((u, v) in directed) + ((v, u) in directed)
    covered = {(min(a, b), max(a, b)) for a, b in directed}
    assert covered == set(pairs)


def test_neighbor_order_within_rows_does_not_matter() -> None:
    data = np.random.default_rng(8).normal(size=(50, 2))
    neighbors = find_neighbors(data, k=10)
    shuffled = np.random.default_rng(9).permuted(neighbors.indices, axis=1)

    expected = build_edge_list(neighbors)
    actual = build_edge_list(NeighborList(indices=shuffled, distances=neighbors.distances, k=10))

    assert actual.to_tuples() == expected.to_tuples()


def test_edges_sorted_by_u_then_v() -> None:
    edges = build_edge_list(_neighbor_list([[3, 2], [0, 3], [3, 0], [1, 2]]))

    keys = list(zip(edges.u.tolist(), edges.v.tolist()))
    assert keys == sorted(keys)
    assert edges.weight.dtype == np.int64

from __future__ import annotations

from io import StringIO

import numpy as np
import pytest

from snngraph.io.readers import read_edge_file, read_edge_stream, read_matrix, read_vector
from snngraph.io.writers import write_edge_file
from snngraph.models import EdgeList


def test_read_matrix_csv_and_text(tmp_path) -> None:
    csv_path = tmp_path / "pcs.csv"
    csv_path.write_text("pc1,pc2\n0.5,1.5\n2.0,3.0\n")
    txt_path = tmp_path / "pcs.txt"
    txt_path.write_text("0.5 1.5\n2.0 3.0\n")

    expected = np.array([[0.5, 1.5], [2.0, 3.0]])
    np.testing.assert_array_equal(read_matrix(csv_path, skip_header=True), expected)
    np.testing.assert_array_equal(read_matrix(txt_path), expected)


def test_read_matrix_npy(tmp_path) -> None:
    path = tmp_path / "pcs.npy"
    np.save(path, np.eye(3))
    np.testing.assert_array_equal(read_matrix(path), np.eye(3))


def test_read_vector_flattens(tmp_path) -> None:
    path = tmp_path / "sdev.txt"
    path.write_text("3.0\n2.0\n1.0\n")
    assert read_vector(path).tolist() == [3.0, 2.0, 1.0]


def test_float_weights_read_back_identically(tmp_path) -> None:
    edges = EdgeList(
        u=np.array([0, 4], dtype=np.int64),
        v=np.array([3, 9], dtype=np.int64),
        weight=np.array([1 / 3, 2 / 7]),
    )
    path = tmp_path / "edges.tsv"

    write_edge_file(edges, path)

    assert path.read_text().splitlines()[0].split("\t")[:2] == ["1", "4"]
    assert read_edge_file(path).to_tuples() == edges.to_tuples()


def test_read_edge_stream_skips_comments_and_keeps_int_weights() -> None:
    edges = read_edge_stream(StringIO("# v1 v2 w\n\n2 3 1\n1 2 2\n"))
    assert edges.to_tuples() == [(0, 1, 2), (1, 2, 1)]
    assert edges.weight.dtype == np.int64


@pytest.mark.parametrize("content", ["1\t2\n", "0\t2\t1\n", "a\tb\t1\n"])
def test_read_edge_stream_rejects_malformed_rows(content: str) -> None:
    with pytest.raises(ValueError):
        read_edge_stream(StringIO(content))

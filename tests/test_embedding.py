from __future__ import annotations

import numpy as np
import pytest

from snngraph.embedding import DimReduction, parse_dims, select_embedding
from snngraph.errors import ConfigurationError, PrerequisiteError


@pytest.fixture
def reduction() -> DimReduction:
    coordinates = np.arange(12, dtype=float).reshape(4, 3)
    return DimReduction(coordinates=coordinates, sdev=np.array([2.0, 1.0, 0.5]))


def test_all_dimensions_selected_by_default(reduction) -> None:
    np.testing.assert_array_equal(select_embedding(reduction), reduction.coordinates)


def test_subset_of_dimensions(reduction) -> None:
    data = select_embedding(reduction, [0, 2])
    np.testing.assert_array_equal(data, reduction.coordinates[:, [0, 2]])


def test_weight_by_sd_scales_selected_columns(reduction) -> None:
    data = select_embedding(reduction, [0, 2], weight_by_sd=True)
    np.testing.assert_allclose(data[:, 0], reduction.coordinates[:, 0] * 2.0)
    np.testing.assert_allclose(data[:, 1], reduction.coordinates[:, 2] * 0.5)


@pytest.mark.parametrize("dims", [[0, 3], [-1], []])
def test_dims_outside_available_range(reduction, dims) -> None:
    with pytest.raises(ConfigurationError):
        select_embedding(reduction, dims)


def test_weight_by_sd_must_be_boolean(reduction) -> None:
    with pytest.raises(ConfigurationError):
        select_embedding(reduction, weight_by_sd="yes")  # type: ignore[arg-type]


def test_missing_reduction_is_a_prerequisite_error() -> None:
    with pytest.raises(PrerequisiteError):
        select_embedding(None)
    with pytest.raises(PrerequisiteError):
        select_embedding(DimReduction(coordinates=np.empty((0, 3))))


def test_weight_by_sd_without_sdev(reduction) -> None:
    bare = DimReduction(coordinates=reduction.coordinates)
    with pytest.raises(PrerequisiteError):
        select_embedding(bare, weight_by_sd=True)


def test_parse_dims_expands_ranges() -> None:
    assert parse_dims("0,2,5-7") == [0, 2, 5, 6, 7]
    assert parse_dims(" 3 ") == [3]


def test_parse_dims_rejects_reversed_range() -> None:
    with pytest.raises(ValueError):
        parse_dims("4-1")

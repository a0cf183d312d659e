from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict

from snngraph.errors import ConfigurationError, PrerequisiteError


class DimReduction(BaseModel):
    """Output of an upstream dimensionality reduction (e.g. PCA).

    coordinates is N x D (points x components); sdev optionally holds the
    standard deviation of each component.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    coordinates: np.ndarray
    sdev: np.ndarray | None = None

    @property
    def n_dims(self) -> int:
        return int(self.coordinates.shape[1]) if self.coordinates.ndim == 2 else 0

    @property
    def is_complete(self) -> bool:
        return self.coordinates.ndim == 2 and self.coordinates.size > 0


def parse_dims(text: str) -> list[int]:
    """Parse '0,2,5-9' into a list of 0-based dimension indices."""
    dims: list[int] = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            first, last = part.split("-", 1)
            lo, hi = int(first), int(last)
            if hi < lo:
                raise ValueError(f"Invalid dimension range: {part}")
            dims.extend(range(lo, hi + 1))
        else:
            dims.append(int(part))
    return dims


def select_embedding(
    reduction: DimReduction | None,
    dims: Sequence[int] | None = None,
    weight_by_sd: bool = False,
) -> np.ndarray:
    """Select embedding columns, optionally scaling each by its standard deviation.

    dims=None keeps every dimension.
    """
    if reduction is None or not reduction.is_complete:
        raise PrerequisiteError("Dimensionality reduction is not complete; run it before building a graph")
    if not isinstance(weight_by_sd, (bool, np.bool_)):
        raise ConfigurationError("weight_by_sd must be a boolean")

    n_dims = reduction.n_dims
    selected = list(range(n_dims)) if dims is None else [int(d) for d in dims]
    if not selected:
        raise ConfigurationError("dims selects no dimensions")
    if any(d < 0 or d >= n_dims for d in selected):
        raise ConfigurationError(f"dims exceed the available dimensions (0-{n_dims - 1})")

    data = np.asarray(reduction.coordinates, dtype=np.float64)[:, selected]
    if weight_by_sd:
        if reduction.sdev is None:
            raise PrerequisiteError("weight_by_sd requires per-dimension standard deviations")
        sdev = np.asarray(reduction.sdev, dtype=np.float64).reshape(-1)
        if sdev.shape[0] < n_dims:
            raise PrerequisiteError(f"Expected {n_dims} standard deviations, got {sdev.shape[0]}")
        data = data * sdev[selected]
    return data

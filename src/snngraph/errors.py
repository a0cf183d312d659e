from __future__ import annotations


class GraphBuildError(Exception):
    """Base class for every fatal graph-construction error."""


class ConfigurationError(GraphBuildError, ValueError):
    """Invalid parameters, detected before any computation starts."""


class PrerequisiteError(GraphBuildError, RuntimeError):
    """An upstream step (dimensionality reduction) has not been completed."""


class SearchFailure(GraphBuildError, RuntimeError):
    """The nearest-neighbor search could not produce a result."""

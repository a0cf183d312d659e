from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ValidationError, field_validator
from pydantic_settings import BaseSettings

from snngraph.errors import ConfigurationError

SimilarityScope = Literal["edges", "all"]

RECOMMENDED_K_RANGE = (10, 50)


class GraphConfig(BaseSettings):
    """Configuration for graph construction, loaded from environment variables."""

    # Neighbor search
    k: int = 15
    eps: float = 0.0

    # SNN refinement
    snn: bool = False
    snn_prune: float = 1 / 15
    snn_scope: SimilarityScope = "edges"

    # Execution
    n_workers: int = 1
    chunk_size: int = 4096

    model_config = {"env_prefix": "SNNGRAPH_"}

    def __init__(self, **values: Any) -> None:
        try:
            super().__init__(**values)
        except ValidationError as exc:
            raise ConfigurationError(str(exc)) from exc

    @field_validator("k", mode="before")
    @classmethod
    def _k_is_integer(cls, value: Any) -> Any:
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            raise ValueError("k must be an integer")
        return value

    @field_validator("k")
    @classmethod
    def _k_is_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("k must be a positive integer")
        return value

    @field_validator("eps")
    @classmethod
    def _eps_non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("eps must be >= 0")
        return value

    @field_validator("snn_prune")
    @classmethod
    def _prune_in_unit_interval(cls, value: float) -> float:
        if not 0.0 <= value <= 1.0:
            raise ValueError("snn_prune must be within [0, 1]")
        return value

    @field_validator("n_workers", "chunk_size")
    @classmethod
    def _at_least_one(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be >= 1")
        return value


def load_config(**overrides: Any) -> GraphConfig:
    """Build a GraphConfig from the environment plus explicit overrides."""
    return GraphConfig(**overrides)


class InMemory(BaseModel):
    """Return the graph as a sparse adjacency matrix."""

    kind: Literal["memory"] = "memory"


class EdgeFile(BaseModel):
    """Persist the graph as a tab-separated, 1-indexed edge list."""

    kind: Literal["file"] = "file"
    path: Path

    def prepare(self) -> None:
        """Create (or truncate) the target so an unwritable path fails fast."""
        try:
            self.path.open("w").close()
        except OSError as exc:
            raise ConfigurationError(f"Cannot create edge file {self.path}: {exc}") from exc


OutputMode = InMemory | EdgeFile

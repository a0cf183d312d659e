from __future__ import annotations

import pytest

from snngraph.config import EdgeFile, GraphConfig, load_config
from snngraph.errors import ConfigurationError


def test_defaults_match_reference_parameters() -> None:
    config = GraphConfig()
    assert config.k == 15
    assert config.eps == 0.0
    assert config.snn is False
    assert config.snn_prune == pytest.approx(1 / 15)
    assert config.snn_scope == "edges"


def test_environment_variables_override_defaults(monkeypatch) -> None:
    monkeypatch.setenv("SNNGRAPH_K", "7")
    monkeypatch.setenv("SNNGRAPH_SNN", "true")
    monkeypatch.setenv("SNNGRAPH_SNN_PRUNE", "0.2")

    config = GraphConfig()

    assert config.k == 7
    assert config.snn is True
    assert config.snn_prune == 0.2


@pytest.mark.parametrize(
    "overrides",
    [
        {"k": 0},
        {"k": -5},
        {"k": 2.5},
        {"k": True},
        {"eps": -1.0},
        {"snn_prune": 1.5},
        {"snn_scope": "dense"},
        {"n_workers": 0},
    ],
)
def test_invalid_settings_raise_configuration_error(overrides) -> None:
    with pytest.raises(ConfigurationError):
        load_config(**overrides)


def test_direct_construction_raises_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="positive integer"):
        GraphConfig(k=0)


def test_invalid_environment_value_raises_configuration_error(monkeypatch) -> None:
    monkeypatch.setenv("SNNGRAPH_K", "-3")

    with pytest.raises(ConfigurationError):
        GraphConfig()


def test_edge_file_prepare_creates_target(tmp_path) -> None:
    target = tmp_path / "edges.tsv"
    EdgeFile(path=target).prepare()
    assert target.exists()
    assert target.read_text() == ""


def test_edge_file_prepare_rejects_missing_directory(tmp_path) -> None:
    with pytest.raises(ConfigurationError):
        EdgeFile(path=tmp_path / "nope" / "edges.tsv").prepare()

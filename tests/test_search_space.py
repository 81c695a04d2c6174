"""Tests for the search space encoder."""

import json

import pytest

from optuna_bridge.distributions import (
    CategoricalDistribution,
    Distribution,
    IntLogUniformDistribution,
    UniformDistribution,
)
from optuna_bridge.search_space import SearchSpace, load_search_space_yaml


class TestSearchSpaceEncoding:
    """Tests for the JSON produced by each add_* call."""

    def test_add_float_uniform(self):
        space = SearchSpace()
        space.add_float("x", -10, 10)
        assert space.to_json() == {
            "x": {"name": "UniformDistribution", "attributes": {"low": -10, "high": 10}}
        }

    def test_add_float_log(self):
        space = SearchSpace()
        space.add_float("lr", 1e-5, 1e-1, log=True)
        assert space.to_json()["lr"] == {
            "name": "LogUniformDistribution",
            "attributes": {"low": 1e-5, "high": 1e-1},
        }

    def test_add_float_discrete(self):
        space = SearchSpace()
        space.add_float("dropout", 0.0, 0.5, step=0.1)
        assert space.to_json()["dropout"] == {
            "name": "DiscreteUniformDistribution",
            "attributes": {"low": 0.0, "high": 0.5, "q": 0.1},
        }

    def test_add_float_step_with_log_raises(self):
        space = SearchSpace()
        with pytest.raises(ValueError, match="step and log"):
            space.add_float("x", 1.0, 10.0, step=0.5, log=True)
        assert "x" not in space

    def test_add_int_defaults(self):
        space = SearchSpace()
        space.add_int("y", -10, 10)
        assert space.to_json() == {
            "y": {
                "name": "IntUniformDistribution",
                "attributes": {"low": -10, "high": 10, "step": 1},
            }
        }

    def test_add_int_log(self):
        space = SearchSpace()
        space.add_int("units", 8, 512, log=True)
        assert space["units"] == IntLogUniformDistribution(8, 512, 1)
        assert space.to_json()["units"]["name"] == "IntLogUniformDistribution"
        assert space.to_json()["units"]["attributes"] == {"low": 8, "high": 512, "step": 1}

    def test_add_categorical(self):
        space = SearchSpace()
        space.add_categorical("c", ["a", "b"])
        assert space.to_json() == {
            "c": {"name": "CategoricalDistribution", "attributes": {"choices": ["a", "b"]}}
        }

    def test_categorical_mixed_primitives(self):
        space = SearchSpace()
        space.add_categorical("mixed", (1, 2.5, "x", True, None))
        assert space["mixed"] == CategoricalDistribution([1, 2.5, "x", True, None])

    def test_every_kind_has_name_and_attributes(self):
        space = SearchSpace()
        space.add_float("a", 0, 1)
        space.add_float("b", 1e-3, 1, log=True)
        space.add_float("c", 0, 1, step=0.25)
        space.add_int("d", 0, 10, step=2)
        space.add_int("e", 1, 100, log=True)
        space.add_categorical("f", [1, 2])

        expected_attributes = {
            "a": {"low", "high"},
            "b": {"low", "high"},
            "c": {"low", "high", "q"},
            "d": {"low", "high", "step"},
            "e": {"low", "high", "step"},
            "f": {"choices"},
        }
        for name, descriptor in space.to_json().items():
            assert set(descriptor) == {"name", "attributes"}
            assert set(descriptor["attributes"]) == expected_attributes[name]


class TestSearchSpaceContainer:
    """Tests for ordering and overwrite behavior."""

    def test_insertion_order_kept(self):
        space = SearchSpace()
        space.add_categorical("c", ["a", "b"])
        space.add_float("x", -10, 10)
        space.add_float("y", -10, 10)
        assert list(space) == ["c", "x", "y"]
        assert list(space.to_json()) == ["c", "x", "y"]

    def test_same_name_overwrites(self):
        space = SearchSpace()
        space.add_float("x", -10, 10)
        space.add_int("z", 0, 3)
        space.add_int("x", 0, 5)
        assert len(space) == 2
        assert list(space) == ["x", "z"]
        assert space.to_json()["x"]["name"] == "IntUniformDistribution"

    def test_dumps_is_compact_json(self):
        space = SearchSpace()
        space.add_float("x", -10, 10)
        text = space.dumps()
        assert " " not in text
        assert json.loads(text) == space.to_json()

    def test_empty_space(self):
        assert SearchSpace().to_json() == {}
        assert SearchSpace().dumps() == "{}"


@pytest.fixture
def search_space_yaml(tmp_path):
    path = tmp_path / "space.yaml"
    path.write_text(
        """
parameters:
  c:
    type: categorical
    choices: [a, b]
  x:
    type: float
    low: -10
    high: 10
  lr:
    type: float
    min: 1e-5
    max: 1e-2
    log: true
  n_layers:
    type: int
    low: 1
    high: 8
    step: 1
  units:
    type: int
    min: 16
    max: 256
    log: true
"""
    )
    return path


class TestSearchSpaceFromYaml:
    """Tests for YAML loading."""

    def test_load_and_build(self, search_space_yaml):
        space = SearchSpace.from_config(load_search_space_yaml(search_space_yaml))

        assert list(space) == ["c", "x", "lr", "n_layers", "units"]
        assert space["x"] == UniformDistribution(-10.0, 10.0)
        encoded = space.to_json()
        assert encoded["lr"]["name"] == "LogUniformDistribution"
        assert encoded["n_layers"]["name"] == "IntUniformDistribution"
        assert encoded["units"]["name"] == "IntLogUniformDistribution"
        assert encoded["c"]["attributes"]["choices"] == ["a", "b"]

    def test_load_nonexistent_file_raises(self):
        with pytest.raises(FileNotFoundError):
            load_search_space_yaml("/nonexistent/space.yaml")

    def test_empty_config_returns_empty_space(self):
        assert len(SearchSpace.from_config({})) == 0

    def test_invalid_type_raises(self):
        config = {"parameters": {"bad": {"type": "complex", "low": 0, "high": 1}}}
        with pytest.raises(ValueError, match="Invalid parameter type"):
            SearchSpace.from_config(config)

    def test_missing_bounds_raises(self):
        config = {"parameters": {"x": {"type": "float", "low": 0}}}
        with pytest.raises(ValueError, match="requires low and high"):
            SearchSpace.from_config(config)

    def test_categorical_without_choices_raises(self):
        config = {"parameters": {"c": {"type": "categorical"}}}
        with pytest.raises(ValueError, match="requires choices"):
            SearchSpace.from_config(config)


class TestDistributions:
    """Tests for the distribution base class."""

    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            Distribution()

    def test_subclass_must_define_attributes(self):
        class Incomplete(Distribution):
            kind = "IncompleteDistribution"

        with pytest.raises(TypeError):
            Incomplete()

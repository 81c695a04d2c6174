"""Search Space encoder and YAML loader.

Builds the JSON object passed to ``optuna ask --search-space``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, Sequence

import yaml

from optuna_bridge.distributions import (
    CategoricalChoice,
    CategoricalDistribution,
    DiscreteUniformDistribution,
    Distribution,
    IntLogUniformDistribution,
    IntUniformDistribution,
    LogUniformDistribution,
    UniformDistribution,
)

logger = logging.getLogger(__name__)


class SearchSpace:
    """Ordered mapping of parameter name to distribution descriptor.

    Adding a name that already exists replaces its descriptor.

    Example:
        space = SearchSpace()
        space.add_categorical("c", ["a", "b"])
        space.add_float("x", -10, 10)
        space.to_json()
        # {"c": {"name": "CategoricalDistribution", ...}, "x": {...}}
    """

    def __init__(self) -> None:
        self._distributions: Dict[str, Distribution] = {}

    def add_float(
        self,
        name: str,
        low: float,
        high: float,
        step: float = 0,
        log: bool = False,
    ) -> None:
        """Add a float parameter.

        Raises:
            ValueError: If both a non-zero step and log scale are requested
        """
        low, high = float(low), float(high)
        if step == 0:
            if log:
                dist: Distribution = LogUniformDistribution(low, high)
            else:
                dist = UniformDistribution(low, high)
        elif not log:
            dist = DiscreteUniformDistribution(low, high, float(step))
        else:
            raise ValueError(
                f"Parameter '{name}': step and log cannot be used together"
            )
        self._distributions[name] = dist

    def add_int(
        self,
        name: str,
        low: int,
        high: int,
        step: int = 1,
        log: bool = False,
    ) -> None:
        low, high, step = int(low), int(high), int(step)
        if log:
            self._distributions[name] = IntLogUniformDistribution(low, high, step)
        else:
            self._distributions[name] = IntUniformDistribution(low, high, step)

    def add_categorical(self, name: str, choices: Sequence[CategoricalChoice]) -> None:
        self._distributions[name] = CategoricalDistribution(list(choices))

    def to_json(self) -> Dict[str, Any]:
        return {name: dist.to_json() for name, dist in self._distributions.items()}

    def dumps(self) -> str:
        """Serialize to compact JSON text."""
        return json.dumps(self.to_json(), separators=(",", ":"))

    def __len__(self) -> int:
        return len(self._distributions)

    def __contains__(self, name: object) -> bool:
        return name in self._distributions

    def __iter__(self) -> Iterator[str]:
        return iter(self._distributions)

    def __getitem__(self, name: str) -> Distribution:
        return self._distributions[name]

    def __repr__(self) -> str:
        return f"SearchSpace({list(self._distributions)})"

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "SearchSpace":
        """Build a search space from a parsed YAML config.

        Example YAML structure:
            parameters:
              x:
                type: float
                low: -10
                high: 10
              n_layers:
                type: int
                low: 1
                high: 8
                log: true
              optimizer:
                type: categorical
                choices: [adam, sgd]

        ``min``/``max`` are accepted as aliases of ``low``/``high``.

        Raises:
            ValueError: On an unknown type or missing bounds/choices
        """
        space = cls()

        parameters = config.get("parameters", {})
        if not parameters:
            logger.warning("No parameters found in search space config")
            return space

        for param_name, spec in parameters.items():
            if not isinstance(spec, dict):
                raise ValueError(f"Invalid parameter spec for {param_name}: {spec!r}")

            param_type = spec.get("type")
            if param_type == "categorical":
                choices = spec.get("choices")
                if not choices:
                    raise ValueError(
                        f"Parameter '{param_name}' of type 'categorical' requires choices"
                    )
                space.add_categorical(param_name, choices)
                continue

            if param_type not in ("int", "float"):
                raise ValueError(
                    f"Invalid parameter type '{param_type}' for {param_name}. "
                    "Must be 'int', 'float', or 'categorical'."
                )

            low = spec.get("low", spec.get("min"))
            high = spec.get("high", spec.get("max"))
            if low is None or high is None:
                raise ValueError(
                    f"Parameter '{param_name}' of type '{param_type}' requires low and high"
                )

            log = bool(spec.get("log", False))
            if param_type == "int":
                space.add_int(param_name, low, high, step=spec.get("step") or 1, log=log)
            else:
                space.add_float(param_name, low, high, step=spec.get("step") or 0, log=log)

            logger.debug(f"Parsed parameter: {param_name} -> {space[param_name]}")

        logger.info(f"Parsed {len(space)} parameters")
        return space


def load_search_space_yaml(path: str | Path) -> Dict[str, Any]:
    """Load a search space configuration from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If YAML parsing fails
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Search space config not found: {path}")

    logger.info(f"Loading search space from: {path}")
    with open(path) as f:
        config = yaml.safe_load(f)

    return config or {}

"""Trial value objects parsed from optuna CLI output."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Type, TypeVar

from optuna_bridge.config import TrialState

T = TypeVar("T")


def _check_type(name: str, value: Any, type_: type) -> None:
    # bool is a subclass of int but never stands in for a number here
    if isinstance(value, bool) and type_ is not bool:
        ok = False
    elif type_ is float:
        ok = isinstance(value, (int, float))
    else:
        ok = isinstance(value, type_)
    if not ok:
        raise TypeError(
            f"Parameter '{name}' is {type(value).__name__}, not {type_.__name__}"
        )


@dataclass(frozen=True)
class Trial:
    """A sampled parameter assignment returned by ``optuna ask``.

    Attributes:
        number: Trial number assigned by the external tool
        params: Parameter name -> sampled value
    """

    number: int
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Trial":
        """Parse ``{"number": int, "params": {...}}``.

        Raises:
            KeyError: If a field is missing
            TypeError: If ``data`` is not a JSON object
        """
        return cls(number=int(data["number"]), params=data["params"])

    def param(self, name: str, type_: Optional[Type[T]] = None) -> Any:
        """Return a sampled value, optionally checked against ``type_``.

        ``float`` accepts integer values; ``bool`` never satisfies ``int``
        or ``float``.

        Raises:
            KeyError: If ``name`` was not sampled in this trial
            TypeError: If the value does not have the requested type
        """
        value = self.params[name]
        if type_ is not None:
            _check_type(name, value, type_)
            if type_ is float:
                value = float(value)
        return value


@dataclass(frozen=True)
class FrozenTrial:
    """A trial record reported by ``optuna trials`` or ``optuna best-trial``.

    Wraps a :class:`Trial` and adds its state and objective value. ``value``
    is NaN unless the state is ``COMPLETE``.
    """

    trial: Trial
    state: str
    value: float = math.nan

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "FrozenTrial":
        """Parse a frozen trial JSON object.

        A multi-objective ``values`` list contributes its first element.

        Raises:
            KeyError: If ``number``, ``params`` or ``state`` is missing, or a
                complete trial has no value
            TypeError: If ``data`` is not a JSON object
        """
        state = str(data["state"])
        value = math.nan
        if state == TrialState.COMPLETE.value:
            if "value" in data:
                value = float(data["value"])
            else:
                value = float(data["values"][0])
        return cls(trial=Trial.from_json(data), state=state, value=value)

    @property
    def number(self) -> int:
        return self.trial.number

    @property
    def params(self) -> Mapping[str, Any]:
        return self.trial.params

    @property
    def is_complete(self) -> bool:
        return self.state == TrialState.COMPLETE.value

    def param(self, name: str, type_: Optional[Type[T]] = None) -> Any:
        return self.trial.param(name, type_)

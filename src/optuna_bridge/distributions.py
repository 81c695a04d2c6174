"""Distribution descriptors understood by ``optuna ask --search-space``."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Union

CategoricalChoice = Union[None, bool, int, float, str]


@dataclass(frozen=True)
class Distribution(ABC):
    """Base descriptor: a kind name plus its attributes."""

    kind: ClassVar[str] = ""

    @abstractmethod
    def attributes(self) -> Dict[str, Any]:
        """Return the bound or choice fields of this distribution."""

    def to_json(self) -> Dict[str, Any]:
        return {"name": self.kind, "attributes": self.attributes()}


@dataclass(frozen=True)
class UniformDistribution(Distribution):
    kind: ClassVar[str] = "UniformDistribution"

    low: float
    high: float

    def attributes(self) -> Dict[str, Any]:
        return {"low": self.low, "high": self.high}


@dataclass(frozen=True)
class LogUniformDistribution(Distribution):
    kind: ClassVar[str] = "LogUniformDistribution"

    low: float
    high: float

    def attributes(self) -> Dict[str, Any]:
        return {"low": self.low, "high": self.high}


@dataclass(frozen=True)
class DiscreteUniformDistribution(Distribution):
    kind: ClassVar[str] = "DiscreteUniformDistribution"

    low: float
    high: float
    q: float

    def attributes(self) -> Dict[str, Any]:
        return {"low": self.low, "high": self.high, "q": self.q}


@dataclass(frozen=True)
class IntUniformDistribution(Distribution):
    kind: ClassVar[str] = "IntUniformDistribution"

    low: int
    high: int
    step: int = 1

    def attributes(self) -> Dict[str, Any]:
        return {"low": self.low, "high": self.high, "step": self.step}


@dataclass(frozen=True)
class IntLogUniformDistribution(Distribution):
    kind: ClassVar[str] = "IntLogUniformDistribution"

    low: int
    high: int
    step: int = 1

    def attributes(self) -> Dict[str, Any]:
        return {"low": self.low, "high": self.high, "step": self.step}


@dataclass(frozen=True)
class CategoricalDistribution(Distribution):
    kind: ClassVar[str] = "CategoricalDistribution"

    choices: List[CategoricalChoice] = field(default_factory=list)

    def attributes(self) -> Dict[str, Any]:
        return {"choices": list(self.choices)}

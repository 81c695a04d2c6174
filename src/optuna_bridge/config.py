"""Configuration for optuna-bridge.

Defines the enums shared across the package and the pydantic model that
backs the command-line front end.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

logger = logging.getLogger(__name__)

ENV_PREFIX = "OPTUNA_BRIDGE_"
CONFIG_ENV_VAR = f"{ENV_PREFIX}CONFIG"


class StudyDirection(str, Enum):
    """Optimization direction of a study."""

    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"


class TrialState(str, Enum):
    """Trial state labels reported by the optuna CLI."""

    RUNNING = "RUNNING"
    COMPLETE = "COMPLETE"
    PRUNED = "PRUNED"
    FAIL = "FAIL"
    WAITING = "WAITING"


class BridgeConfig(BaseModel):
    """Settings needed to address one study through the optuna CLI.

    Attributes:
        executable: Name or path of the optuna executable
        storage: Storage URI passed verbatim (sqlite:///..., postgresql://...)
        study_name: Name of the study (not needed to list studies)
        direction: Optimization direction
        skip_if_exists: Reuse an existing study on create
        timeout: Per-command timeout in seconds (None waits forever)
        search_space: Optional path to a YAML search space file
    """

    executable: str = "optuna"
    storage: str
    study_name: Optional[str] = None
    direction: StudyDirection = StudyDirection.MINIMIZE
    skip_if_exists: bool = False
    timeout: Optional[float] = None
    search_space: Optional[str] = None

    @field_validator("direction", mode="before")
    @classmethod
    def normalize_direction(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.lower()
        return v

    @field_validator("search_space")
    @classmethod
    def expand_search_space_path(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return os.path.expandvars(os.path.expanduser(v))


_ENV_FIELDS = {
    "executable": "EXECUTABLE",
    "storage": "STORAGE",
    "study_name": "STUDY_NAME",
    "direction": "DIRECTION",
    "timeout": "TIMEOUT",
    "search_space": "SEARCH_SPACE",
}


def env_overrides() -> Dict[str, str]:
    """Collect OPTUNA_BRIDGE_* environment variables as config fields."""
    overrides: Dict[str, str] = {}
    for field_name, suffix in _ENV_FIELDS.items():
        value = os.getenv(f"{ENV_PREFIX}{suffix}")
        if value:
            overrides[field_name] = value
    return overrides


def load_config(
    path: Optional[Union[str, Path]] = None,
    **overrides: Any,
) -> BridgeConfig:
    """Load configuration from YAML, the environment and explicit overrides.

    Later sources win: YAML file, then OPTUNA_BRIDGE_* variables (a ``.env``
    file is read first), then keyword overrides that are not None.

    Args:
        path: YAML config file. Falls back to $OPTUNA_BRIDGE_CONFIG.
        **overrides: Field values that take precedence over everything else

    Raises:
        FileNotFoundError: If an explicit config file doesn't exist
        pydantic.ValidationError: If required fields are missing or invalid
    """
    load_dotenv()

    if path is None:
        path = os.getenv(CONFIG_ENV_VAR)

    data: Dict[str, Any] = {}
    if path:
        path = Path(path).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")
        logger.info(f"Loading config from: {path}")
        with open(path) as f:
            data = yaml.safe_load(f) or {}

    data.update(env_overrides())
    data.update({k: v for k, v in overrides.items() if v is not None})

    return BridgeConfig(**data)

"""
optuna-bridge: drive optuna studies through the optuna command-line tool.

Search spaces are serialized to JSON, ``optuna`` is run as a subprocess for
every operation, and its JSON output is parsed into small value objects.
"""

__version__ = "0.1.0"

from optuna_bridge.config import BridgeConfig, StudyDirection, TrialState, load_config
from optuna_bridge.runner import CommandRunner, run_command
from optuna_bridge.search_space import SearchSpace, load_search_space_yaml
from optuna_bridge.study import Study, list_studies
from optuna_bridge.trial import FrozenTrial, Trial

MINIMIZE = StudyDirection.MINIMIZE
MAXIMIZE = StudyDirection.MAXIMIZE

__all__ = [
    "__version__",
    # Config
    "BridgeConfig",
    "StudyDirection",
    "TrialState",
    "MINIMIZE",
    "MAXIMIZE",
    "load_config",
    # Process
    "CommandRunner",
    "run_command",
    # Search space
    "SearchSpace",
    "load_search_space_yaml",
    # Study / trials
    "Study",
    "list_studies",
    "Trial",
    "FrozenTrial",
]

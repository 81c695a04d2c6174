"""Study handle driving the optuna CLI.

A :class:`Study` holds only the storage URI, study name and direction. Every
operation rebuilds a command line from those fields, runs it, and parses the
JSON the tool prints. Nothing is cached between calls; the tool's storage is
the source of truth.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from optuna_bridge.commands import CommandBuilder
from optuna_bridge.config import BridgeConfig, StudyDirection
from optuna_bridge.runner import CommandRunner
from optuna_bridge.search_space import SearchSpace
from optuna_bridge.trial import FrozenTrial, Trial

logger = logging.getLogger(__name__)

Runner = Callable[[Sequence[str]], str]


class Study:
    """Stateless handle on a study managed by the optuna CLI.

    Example:
        study = Study("sqlite:///example.db", "test_study", skip_if_exists=True)
        space = SearchSpace()
        space.add_float("x", -10, 10)
        trial = study.ask(space)
        study.tell(trial, trial.param("x", float) ** 2)
        best = study.best_trial()
    """

    def __init__(
        self,
        storage: str,
        study_name: str,
        direction: Union[StudyDirection, str] = StudyDirection.MINIMIZE,
        skip_if_exists: bool = False,
        runner: Optional[Runner] = None,
        executable: str = "optuna",
        create: bool = True,
    ):
        """Initialize the handle and create the study.

        Args:
            storage: Storage URI, passed verbatim to the tool
            study_name: Name of the study
            direction: Optimization direction
            skip_if_exists: Reuse an existing study instead of failing
            runner: Callable taking an argument list and returning stdout
            executable: optuna executable name or path
            create: Issue ``create-study``; use :meth:`load` to skip it
        """
        self.storage = storage
        self.study_name = study_name
        self.direction = StudyDirection(direction)
        self._runner: Runner = runner if runner is not None else CommandRunner()
        self._commands = CommandBuilder(executable)

        if create:
            logger.info(f"Creating study '{study_name}' ({self.direction.value})")
            self._run(
                self._commands.create_study(
                    storage, study_name, self.direction, skip_if_exists
                )
            )

    @classmethod
    def load(
        cls,
        storage: str,
        study_name: str,
        direction: Union[StudyDirection, str] = StudyDirection.MINIMIZE,
        runner: Optional[Runner] = None,
        executable: str = "optuna",
    ) -> "Study":
        """Build a handle on an existing study without issuing ``create-study``."""
        return cls(
            storage,
            study_name,
            direction,
            runner=runner,
            executable=executable,
            create=False,
        )

    @classmethod
    def from_config(
        cls, config: BridgeConfig, runner: Optional[Runner] = None, create: bool = True
    ) -> "Study":
        """Build a study handle from a loaded :class:`BridgeConfig`.

        Raises:
            ValueError: If the config has no study name
        """
        if not config.study_name:
            raise ValueError("A study name is required (--study-name or OPTUNA_BRIDGE_STUDY_NAME)")
        if runner is None:
            runner = CommandRunner(timeout=config.timeout)
        return cls(
            config.storage,
            config.study_name,
            config.direction,
            skip_if_exists=config.skip_if_exists,
            runner=runner,
            executable=config.executable,
            create=create,
        )

    def _run(self, args: Sequence[str]) -> str:
        return self._runner(args)

    def _run_json(self, args: Sequence[str]) -> Any:
        # Empty output from a failed command raises json.JSONDecodeError here
        return json.loads(self._run(args))

    def ask(self, search_space: SearchSpace) -> Trial:
        """Sample a new trial from ``search_space``."""
        data = self._run_json(
            self._commands.ask(
                self.storage, self.study_name, self.direction, search_space.dumps()
            )
        )
        trial = Trial.from_json(data)
        logger.debug(f"Asked trial {trial.number}: {dict(trial.params)}")
        return trial

    def tell(
        self,
        trial: Union[Trial, FrozenTrial, int],
        value: Optional[float] = None,
        state: Optional[str] = None,
        skip_if_finished: bool = False,
    ) -> None:
        """Report the result of a trial.

        Telling the same trial twice is not guarded against; the tool
        decides what happens.

        Args:
            trial: Trial (or bare trial number) to finish
            value: Objective value; omit when telling a fail/pruned state
            state: Optional final state, e.g. "complete", "fail", "pruned"
            skip_if_finished: Ask the tool to ignore already finished trials

        Raises:
            ValueError: If neither a value nor a state is given
        """
        if value is None and state is None:
            raise ValueError("tell needs a value or a state")
        number = trial if isinstance(trial, int) else trial.number
        logger.debug(f"Telling trial {number}: value={value} state={state}")
        self._run(
            self._commands.tell(
                self.storage,
                self.study_name,
                number,
                value=value,
                state=state,
                skip_if_finished=skip_if_finished,
            )
        )

    def trials(self) -> List[FrozenTrial]:
        """Return all trials in the order the tool reports them."""
        data = self._run_json(self._commands.trials(self.storage, self.study_name))
        return [FrozenTrial.from_json(item) for item in data]

    def best_trial(self) -> FrozenTrial:
        """Return the best trial as reported by the tool."""
        data = self._run_json(self._commands.best_trial(self.storage, self.study_name))
        return FrozenTrial.from_json(data)

    def delete(self) -> None:
        logger.info(f"Deleting study '{self.study_name}'")
        self._run(self._commands.delete_study(self.storage, self.study_name))

    def __repr__(self) -> str:
        return (
            f"Study(storage={self.storage!r}, study_name={self.study_name!r}, "
            f"direction={self.direction.value!r})"
        )


def list_studies(
    storage: str,
    runner: Optional[Runner] = None,
    executable: str = "optuna",
) -> List[Dict[str, Any]]:
    """Return the rows of ``optuna studies -f json`` unchanged."""
    runner = runner if runner is not None else CommandRunner()
    output = runner(CommandBuilder(executable).studies(storage))
    return json.loads(output)

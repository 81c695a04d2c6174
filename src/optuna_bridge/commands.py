"""Command builder for optuna CLI operations."""

from __future__ import annotations

from typing import List, Optional

from optuna_bridge.config import StudyDirection


class CommandBuilder:
    """Builds argument lists for the optuna CLI.

    Every list has the shape
    ``[executable, subcommand, "--storage", uri, "--study-name", name, ...]``.
    The storage URI is passed through verbatim.
    """

    def __init__(self, executable: str = "optuna"):
        self.executable = executable

    def base_command(self, subcommand: str, storage: str, study_name: str) -> List[str]:
        return [
            self.executable,
            subcommand,
            "--storage", storage,
            "--study-name", study_name,
        ]

    def create_study(
        self,
        storage: str,
        study_name: str,
        direction: StudyDirection = StudyDirection.MINIMIZE,
        skip_if_exists: bool = False,
    ) -> List[str]:
        cmd = self.base_command("create-study", storage, study_name)
        cmd += ["--direction", StudyDirection(direction).value]
        if skip_if_exists:
            cmd.append("--skip-if-exists")
        return cmd

    def ask(
        self,
        storage: str,
        study_name: str,
        direction: StudyDirection,
        search_space: str,
    ) -> List[str]:
        """Build an ``ask`` command.

        Args:
            storage: Storage URI
            study_name: Study name
            direction: Optimization direction
            search_space: Search space serialized as JSON text
        """
        cmd = self.base_command("ask", storage, study_name)
        cmd += ["--direction", StudyDirection(direction).value]
        cmd += ["--search-space", search_space]
        return cmd

    def tell(
        self,
        storage: str,
        study_name: str,
        trial_number: int,
        value: Optional[float] = None,
        state: Optional[str] = None,
        skip_if_finished: bool = False,
    ) -> List[str]:
        """Build a ``tell`` command.

        The value is rendered with ``repr`` so it round-trips without loss.
        """
        cmd = self.base_command("tell", storage, study_name)
        cmd += ["--trial-number", str(int(trial_number))]
        if value is not None:
            cmd += ["--values", repr(float(value))]
        if state is not None:
            cmd += ["--state", state.lower()]
        if skip_if_finished:
            cmd.append("--skip-if-finished")
        return cmd

    def trials(self, storage: str, study_name: str) -> List[str]:
        return self.base_command("trials", storage, study_name) + ["-f", "json"]

    def best_trial(self, storage: str, study_name: str) -> List[str]:
        return self.base_command("best-trial", storage, study_name) + ["-f", "json"]

    def delete_study(self, storage: str, study_name: str) -> List[str]:
        return self.base_command("delete-study", storage, study_name)

    def studies(self, storage: str) -> List[str]:
        return [self.executable, "studies", "--storage", storage, "-f", "json"]

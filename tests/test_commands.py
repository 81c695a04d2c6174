"""Tests for optuna CLI argument lists."""

from optuna_bridge.commands import CommandBuilder
from optuna_bridge.config import StudyDirection

STORAGE = "sqlite:///example.db"
NAME = "test_study"
BASE = ["--storage", STORAGE, "--study-name", NAME]


class TestCommandBuilder:
    """Tests for CommandBuilder."""

    def test_create_study(self):
        cmd = CommandBuilder().create_study(STORAGE, NAME, StudyDirection.MINIMIZE)
        assert cmd == ["optuna", "create-study", *BASE, "--direction", "minimize"]

    def test_create_study_skip_if_exists(self):
        cmd = CommandBuilder().create_study(STORAGE, NAME, StudyDirection.MAXIMIZE, True)
        assert cmd == [
            "optuna", "create-study", *BASE, "--direction", "maximize", "--skip-if-exists",
        ]

    def test_ask_passes_search_space_as_single_argument(self):
        space = '{"x":{"name":"UniformDistribution","attributes":{"low":-10,"high":10}}}'
        cmd = CommandBuilder().ask(STORAGE, NAME, StudyDirection.MINIMIZE, space)
        assert cmd == [
            "optuna", "ask", *BASE, "--direction", "minimize", "--search-space", space,
        ]

    def test_tell_value(self):
        cmd = CommandBuilder().tell(STORAGE, NAME, 3, 0.1)
        assert cmd == ["optuna", "tell", *BASE, "--trial-number", "3", "--values", "0.1"]

    def test_tell_value_keeps_precision(self):
        cmd = CommandBuilder().tell(STORAGE, NAME, 0, 1 / 3)
        assert float(cmd[cmd.index("--values") + 1]) == 1 / 3

    def test_tell_state_and_skip(self):
        cmd = CommandBuilder().tell(STORAGE, NAME, 5, state="PRUNED", skip_if_finished=True)
        assert cmd == [
            "optuna", "tell", *BASE, "--trial-number", "5",
            "--state", "pruned", "--skip-if-finished",
        ]

    def test_trials_and_best_trial_request_json(self):
        builder = CommandBuilder()
        assert builder.trials(STORAGE, NAME) == ["optuna", "trials", *BASE, "-f", "json"]
        assert builder.best_trial(STORAGE, NAME) == ["optuna", "best-trial", *BASE, "-f", "json"]

    def test_delete_and_studies(self):
        builder = CommandBuilder()
        assert builder.delete_study(STORAGE, NAME) == ["optuna", "delete-study", *BASE]
        assert builder.studies(STORAGE) == ["optuna", "studies", "--storage", STORAGE, "-f", "json"]

    def test_custom_executable(self):
        cmd = CommandBuilder("/opt/venv/bin/optuna").trials(STORAGE, NAME)
        assert cmd[0] == "/opt/venv/bin/optuna"

    def test_names_with_shell_characters_are_not_quoted(self):
        name = "study'; rm -rf /"
        cmd = CommandBuilder().trials(STORAGE, name)
        assert cmd[cmd.index("--study-name") + 1] == name

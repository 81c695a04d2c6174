"""Shared fixtures for optuna-bridge tests."""

import json
import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


class FakeRunner:
    """Records argument lists and replays canned stdout per subcommand."""

    def __init__(self, responses=None):
        self.calls = []
        self.responses = dict(responses or {})

    def __call__(self, args):
        self.calls.append(list(args))
        response = self.responses.get(args[1], "")
        if not isinstance(response, str):
            response = json.dumps(response)
        return response

    def subcommands(self):
        return [call[1] for call in self.calls]


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove OPTUNA_BRIDGE_* variables and keep .env files out of reach."""
    for suffix in ("CONFIG", "EXECUTABLE", "STORAGE", "STUDY_NAME", "DIRECTION", "TIMEOUT", "SEARCH_SPACE"):
        monkeypatch.delenv(f"OPTUNA_BRIDGE_{suffix}", raising=False)
    monkeypatch.setattr("optuna_bridge.config.load_dotenv", lambda *a, **k: False)
    return monkeypatch

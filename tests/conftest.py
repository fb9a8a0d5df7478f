import pytest
from click.testing import CliRunner

from marktools.filesystem import BOOKMARK_DIR_ENV_VAR, MAX_LINE_LENGTH_ENV_VAR


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    """Keeps the caller's marktools settings out of every test."""
    monkeypatch.delenv(MAX_LINE_LENGTH_ENV_VAR, raising=False)
    monkeypatch.delenv(BOOKMARK_DIR_ENV_VAR, raising=False)

"""
Pytest configuration and shared fixtures for Tanuki tests.
"""

import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

from tanuki.adapters.mock import MockAdapter
from tanuki.client import GitlabClient
from tanuki.config.settings import (
    ENV_ENDPOINT,
    ENV_PRIVATE_TOKEN,
    ENV_USER_AGENT,
    ClientConfig,
)
from tanuki.logging_config import setup_logging

FIXTURES_DIR = Path(__file__).parent / "fixtures"

TEST_ENDPOINT = "https://example.test/api/v1"
TEST_TOKEN = "T"


def load_fixture(name: str) -> bytes:
    """
    Read a JSON fixture as raw response bytes.

    Args:
        name: Fixture name without the .json extension.

    Returns:
        File contents.
    """
    return (FIXTURES_DIR / f"{name}.json").read_bytes()


@pytest.fixture(scope="session", autouse=True)
def configure_test_logging() -> None:
    """Route structured logs through stdlib logging at WARNING for the session."""
    setup_logging(level="WARNING", json_format=False)


@pytest.fixture(autouse=True)
def clean_gitlab_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep GITLAB_API_* variables from the host out of every test."""
    for name in (ENV_ENDPOINT, ENV_PRIVATE_TOKEN, ENV_USER_AGENT):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory that is cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fixture() -> Callable[[str], bytes]:
    """Loader for JSON fixtures under tests/fixtures."""
    return load_fixture


@pytest.fixture
def config() -> ClientConfig:
    """Client configuration pointing at a fake GitLab instance."""
    return ClientConfig(endpoint=TEST_ENDPOINT, token=TEST_TOKEN)


@pytest.fixture
def mock_adapter() -> MockAdapter:
    return MockAdapter()


@pytest.fixture
def client(config: ClientConfig, mock_adapter: MockAdapter) -> Generator[GitlabClient, None, None]:
    """Client wired to the mock adapter."""
    gitlab = GitlabClient(config, adapter=mock_adapter)
    yield gitlab
    gitlab.close()

"""
Shared pytest fixtures for the env_conf test suite.

Provides:
- Isolation of the environment variables the tests touch
- A fresh ConfigRegistry per test
- A scratch working directory for override files
"""

import pytest

import env_conf
from env_conf import ConfigRegistry

# Every variable a test may set; removed before each test so the host
# environment cannot leak into assertions.
TEST_VARIABLES = [
    "APP_ENV",
    "APP_NAME",
    "APP_DEPLOY",
    "ARRAY",
    "DATABASE_URL",
    "EMPTY",
    "FOO",
    "FOO_DATABASE_URL",
    "LOG_FORMAT",
    "LOG_LEVEL",
    "PORT",
    "RACK_ENV",
    "T",
    "UNKNOWN",
    "URL",
    "VALUE",
    "VAULT_BOOLEAN_VAR",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove test variables from os.environ and reset the shared registry."""
    for name in TEST_VARIABLES:
        monkeypatch.delenv(name, raising=False)

    env_conf.reset()
    yield
    env_conf.reset()


@pytest.fixture
def registry():
    """Fresh registry reading the live process environment."""
    return ConfigRegistry()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test inside an empty scratch directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write_env_file(workdir):
    """Write an override file into the scratch directory."""

    def _write(name: str, content: str):
        path = workdir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write

"""Shared fixtures for dbtasks tests."""

import subprocess

import pytest

from dbtasks.config import DatabaseConfig, TasksConfig, set_default_config
from dbtasks.storage.connection_handler import ConnectionHandler


@pytest.fixture(autouse=True)
def _isolated_default_config():
    """Keep config files on the test machine out of the default config."""
    set_default_config(TasksConfig())
    yield
    set_default_config(None)


@pytest.fixture()
def db_path(tmp_path):
    return tmp_path / "t.sqlite3"


@pytest.fixture()
def db_config(db_path):
    return DatabaseConfig(database=str(db_path), env_name="test")


@pytest.fixture()
def handler():
    h = ConnectionHandler()
    yield h
    h.clear_all_connections()


class FakeRun:
    """Stand-in for subprocess.run that records every invocation."""

    def __init__(self, returncode=0, output="CREATE TABLE users (id INTEGER);\n"):
        self.returncode = returncode
        self.output = output
        self.calls = []

    def __call__(self, argv, stdout=None, stdin=None):
        self.calls.append({
            "argv": list(argv),
            "stdin": stdin.read() if stdin is not None else None,
        })
        if stdout is not None:
            stdout.write(self.output)
        return subprocess.CompletedProcess(argv, self.returncode)

    @property
    def last_argv(self):
        return self.calls[-1]["argv"]


@pytest.fixture()
def fake_run(monkeypatch):
    """Patch subprocess.run in the command runner with a successful FakeRun."""
    fake = FakeRun()
    monkeypatch.setattr("dbtasks.tasks.commands.subprocess.run", fake)
    return fake


@pytest.fixture()
def failing_run(monkeypatch):
    """Patch subprocess.run in the command runner with a FakeRun exiting 1."""
    fake = FakeRun(returncode=1, output="")
    monkeypatch.setattr("dbtasks.tasks.commands.subprocess.run", fake)
    return fake

"""Integration test fixtures for real tmux testing."""

import shutil
import subprocess
import uuid

import pytest

from celeris.config import ENV_SOCKET_NAME
from celeris.session import Session

# Private server for the real-tmux tests; the user's default server is never touched.
TEST_SOCKET = "celeris_test"


def _kill_server() -> None:
    subprocess.run(["tmux", "-L", TEST_SOCKET, "kill-server"], capture_output=True)


@pytest.fixture(autouse=True, scope="session")
def clean_tmux():
    """Start and finish the run with no celeris_test server alive."""
    if shutil.which("tmux") is None:
        yield
        return
    _kill_server()
    yield
    _kill_server()


@pytest.fixture(autouse=True)
def tmux_socket(clean_env, monkeypatch):
    """Point every tmux command at the test socket."""
    monkeypatch.setenv(ENV_SOCKET_NAME, TEST_SOCKET)


@pytest.fixture
def session_name():
    """A unique session name, killed after the test if it still runs."""
    name = f"__celeris_testing_{uuid.uuid4().hex[:8]}"
    yield name
    subprocess.run(
        ["tmux", "-L", TEST_SOCKET, "kill-session", "-t", f"={name}"],
        capture_output=True,
    )


@pytest.fixture
def session(session_name) -> Session:
    """A freshly built session on the test socket."""
    return Session.builder(session_name).build()

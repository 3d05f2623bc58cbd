"""Shared test fixtures for the celeris test suite."""

import subprocess

import pytest

from celeris.config import ENV_SOCKET_NAME, ENV_SOCKET_PATH


class FakeTmux:
    """Stand-in for subprocess.run that records tmux invocations.

    Responses are registered per tmux subcommand. Several responses for the
    same subcommand are consumed in order; the last one then repeats.
    Unregistered subcommands succeed with empty output.

    Attributes:
        calls: Every command line passed to subprocess.run.
    """

    def __init__(self):
        self.calls: list[list[str]] = []
        self._responses: dict[str, list[tuple[bytes, bytes, int]]] = {}

    def register(
        self,
        subcommand: str,
        stdout: str | bytes = "",
        stderr: str | bytes = "",
        returncode: int = 0,
    ) -> None:
        if isinstance(stdout, str):
            stdout = stdout.encode()
        if isinstance(stderr, str):
            stderr = stderr.encode()
        self._responses.setdefault(subcommand, []).append((stdout, stderr, returncode))

    def __call__(self, cmd, **kwargs):
        cmd = list(cmd)
        self.calls.append(cmd)
        queue = self._responses.get(subcommand_of(cmd), [])
        if len(queue) > 1:
            stdout, stderr, returncode = queue.pop(0)
        elif queue:
            stdout, stderr, returncode = queue[0]
        else:
            stdout, stderr, returncode = b"", b"", 0
        return subprocess.CompletedProcess(cmd, returncode, stdout, stderr)

    def subcommands(self) -> list[str]:
        """Subcommands in call order."""
        return [subcommand_of(cmd) for cmd in self.calls]

    def calls_for(self, subcommand: str) -> list[list[str]]:
        """All recorded command lines for one subcommand."""
        return [cmd for cmd in self.calls if subcommand_of(cmd) == subcommand]


def subcommand_of(cmd: list[str]) -> str:
    """Return the tmux subcommand, skipping socket selection flags."""
    args = cmd[1:]
    while args and args[0] in ("-L", "-S"):
        args = args[2:]
    return args[0] if args else ""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Run every test outside tmux with the default socket."""
    for var in (ENV_SOCKET_NAME, ENV_SOCKET_PATH, "TMUX"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def fake_tmux(monkeypatch):
    """Replace subprocess.run with a FakeTmux for the duration of a test."""
    fake = FakeTmux()
    monkeypatch.setattr(subprocess, "run", fake)
    yield fake

"""Errors raised by the tmux control layer.

Every failure the layer can produce is one of the classes below. All of
them derive from CelerisError so callers (the CLI, layout scripts) can
catch the whole family in one place.
"""

import shlex


class CelerisError(Exception):
    """Base exception for all celeris operations."""

    pass


class ConfigError(CelerisError):
    """Raised when the environment selects an invalid tmux configuration."""

    pass


class ExecutionFailed(CelerisError):
    """Raised when tmux exits non-zero or produces non-text output.

    Attributes:
        command: The full argument list that was executed.
        stderr: Captured standard error of the failed process.
    """

    def __init__(self, command: list[str], stderr: str):
        self.command = list(command)
        self.stderr = stderr
        super().__init__(f"command `{shlex.join(self.command)}` failed: {stderr.strip()}")


class TargetNotFound(CelerisError):
    """Raised when a session, window or pane address no longer exists."""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"target: {address}, doesn't exist")


class AlreadyExists(CelerisError):
    """Raised when a session with the requested name is already running."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"session with name: {name}, already exists")


class MalformedResponse(CelerisError):
    """Raised when tmux output does not match the requested format."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"unexpected tmux response: {raw.strip()!r}")


class RootNotFound(CelerisError):
    """Raised when a custom root directory does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"root doesn't exist: {path}")


class InvalidPercentage(CelerisError):
    """Raised when a split percentage is outside 0-100."""

    def __init__(self, value: int):
        self.value = value
        super().__init__(f"percentage amount out of range 0-100: {value}")


class InvalidSize(CelerisError):
    """Raised when an absolute split size is negative."""

    def __init__(self, cells: int):
        self.cells = cells
        super().__init__(f"absolute split size must be non-negative: {cells}")


class AttachFailed(CelerisError):
    """Raised when attach-session or switch-client exits non-zero.

    Attributes:
        target: Address of the session that was being attached.
        stderr: What tmux printed before failing.
    """

    def __init__(self, target: str, stderr: str):
        self.target = target
        self.stderr = stderr
        super().__init__(f"failed to attach session {target}: {stderr.strip()}")


class NoLastSession(CelerisError):
    """Raised when switching to the last session but none was recorded."""

    pass

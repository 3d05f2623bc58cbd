"""tmux sessions: creation, recovery and bringing them to the foreground."""

import logging
import os
import threading
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from celeris.errors import AlreadyExists, AttachFailed, ConfigError, MalformedResponse, TargetNotFound
from celeris.options import Root
from celeris.runner import execute, run_interactive
from celeris.target import SessionTarget, WindowTarget
from celeris.tmux import format_fields, parse_fields, server_running, tmux_command

if TYPE_CHECKING:
    from celeris.window import WindowCore


logger = logging.getLogger(__name__)

TMUX_ENV_MARKER = "TMUX"


class TerminalState(Enum):
    """Where the calling process runs relative to tmux."""

    IN_TMUX = "in_tmux"
    NORMAL = "normal"


class SessionBuilder:
    """Collects options for a new detached session.

    Only build() talks to tmux; calling it twice creates two sessions (or
    fails the second time with AlreadyExists).
    """

    def __init__(self, name: str):
        self._name = name
        self._root = Root.default()

    @property
    def name(self) -> str:
        return self._name

    def root(self, path: str | Path) -> "SessionBuilder":
        """Start the session in ``path``.

        Raises:
            RootNotFound: If the directory does not exist.
        """
        self._root = Root.custom(path)
        return self

    def _command(self) -> list[str]:
        return tmux_command(
            "new-session", "-d", "-s", self._name,
            "-P", "-F", format_fields("#{window_id}", "#{session_id}"),
            *self._root.to_args(),
        )

    def build(self) -> "Session":
        """Create the session.

        Returns:
            Session: Handle holding the session target and the target of
                the window tmux created implicitly.

        Raises:
            AlreadyExists: If a session with this exact name is running.
            MalformedResponse: If tmux did not answer with both ids.
            ExecutionFailed: If new-session itself failed.
        """
        if SessionTarget.by_name(self._name).exists():
            raise AlreadyExists(self._name)

        output = execute(self._command())
        default_window_id, session_id = parse_fields(output, 2)

        target = SessionTarget(session_id)
        logger.info("created session %s (%s)", self._name, session_id)
        return Session(target, target.window_target(default_window_id))


class Session:
    """A live tmux session.

    Tracks how many windows were built against it. The first window built
    takes over the slot of the window tmux created with the session, so a
    fresh session ends up with exactly the windows the caller asked for.
    """

    def __init__(
        self,
        target: SessionTarget,
        default_window_target: WindowTarget,
        window_count: int = 0,
    ):
        self._target = target
        self._default_window_target = default_window_target
        self._window_count = window_count
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Session({self._target.address!r}, windows={self._window_count})"

    @staticmethod
    def builder(name: str) -> "SessionBuilder":
        return SessionBuilder(name)

    @classmethod
    def from_existing(cls, identifier: str) -> "Session":
        """Wrap a session that is already running.

        The window count is taken from tmux, so a recovered session with
        windows never reclaims anything.

        Args:
            identifier: Session id (``$3``) or exact session name.

        Returns:
            Session: Handle for the running session.

        Raises:
            TargetNotFound: If no such session exists.
            MalformedResponse: If tmux's answer cannot be parsed.
        """
        # Reason: a bare name would let tmux fall back to prefix matching.
        if identifier.startswith("$"):
            lookup = SessionTarget(identifier)
        else:
            lookup = SessionTarget.by_name(identifier)
        if not lookup.exists():
            raise TargetNotFound(identifier)

        # Reason: the trailing colon makes tmux resolve the identifier as a
        # session; display-message otherwise treats it as a pane target.
        output = execute(
            tmux_command(
                "display-message", "-p", "-t", f"{lookup.address}:",
                format_fields("#{window_id}", "#{session_id}", "#{session_windows}"),
            )
        )
        default_window_id, session_id, window_count = parse_fields(output, 3)
        if not window_count.isdigit():
            raise MalformedResponse(output)

        target = SessionTarget(session_id)
        return cls(target, target.window_target(default_window_id), int(window_count))

    @property
    def target(self) -> SessionTarget:
        return self._target

    @property
    def default_window_target(self) -> WindowTarget:
        return self._default_window_target

    @property
    def window_count(self) -> int:
        with self._lock:
            return self._window_count

    def register_window(self, window: "WindowCore") -> None:
        """Record a newly built window, reclaiming the implicit one first.

        The check and the increment happen under one lock, so when windows
        are built concurrently exactly one of them performs the move.

        Args:
            window: Identity of the window that was just created.
        """
        with self._lock:
            if self._window_count == 0:
                logger.debug(
                    "reclaiming %s with %s",
                    self._default_window_target.address,
                    window.target.address,
                )
                window.move_kill(self._default_window_target)
            self._window_count += 1

    @staticmethod
    def terminal_state() -> TerminalState:
        """Detect whether the caller already runs inside tmux.

        Read from the environment on every call.

        Raises:
            ConfigError: If the marker variable is not valid text.
        """
        marker = os.environ.get(TMUX_ENV_MARKER)
        if marker is None:
            return TerminalState.NORMAL
        try:
            marker.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ConfigError(f"${TMUX_ENV_MARKER} is not valid text") from exc
        return TerminalState.IN_TMUX

    def attach(self) -> None:
        """Bring this session to the foreground.

        Inside tmux the current client is switched; from a bare terminal
        attach-session takes over the terminal and blocks until the user
        detaches.

        Raises:
            TargetNotFound: If the session is gone.
            AttachFailed: If tmux refused to attach or switch.
        """
        state = self.terminal_state()
        subcommand = "switch-client" if state is TerminalState.IN_TMUX else "attach-session"
        cmd = self._target.targeted_command(subcommand)

        logger.debug("%s -> %s", state.value, subcommand)
        returncode, stderr = run_interactive(cmd)
        if returncode != 0:
            raise AttachFailed(self._target.address, stderr)

    def kill(self) -> None:
        """Kill the session and every window in it."""
        execute(self._target.targeted_command("kill-session"))

    @staticmethod
    def active_name() -> str | None:
        """Name of the session the caller is attached to.

        Returns:
            str | None: None when no server runs or the caller is outside
                tmux.
        """
        if not server_running():
            return None
        if Session.terminal_state() is TerminalState.NORMAL:
            return None
        output = execute(tmux_command("display-message", "-p", "#{session_name}"))
        return output.strip()

    @staticmethod
    def list_sessions() -> list[str]:
        """Names of all running sessions.

        Returns:
            list[str]: Empty when no server is running.
        """
        if not server_running():
            return []
        output = execute(tmux_command("list-sessions", "-F", "#{session_name}"))
        return [line for line in output.strip().splitlines() if line]

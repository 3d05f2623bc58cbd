"""Addressing for tmux sessions, windows and panes.

A target keeps the ids it was derived from, so finer targets can be built
without asking tmux again. Address syntax:

    session  <session_id>
    window   <session_id>:<window_id>
    pane     <session_id>:<window_id>.<pane_id>
"""

from dataclasses import dataclass

from celeris.errors import TargetNotFound
from celeris.runner import probe
from celeris.tmux import tmux_command


class Target:
    """Behaviour shared by every target kind."""

    @property
    def address(self) -> str:
        raise NotImplementedError

    def exists(self) -> bool:
        """Check whether tmux can still resolve this address.

        Returns:
            bool: True if ``has-session`` accepts the address.
        """
        return probe(tmux_command("has-session", "-t", self.address))

    def targeted_command(self, subcommand: str, flag: str = "-t") -> list[str]:
        """Build a tmux command aimed at this target.

        tmux exits 1 without detail when a target vanished out of band, so
        the address is probed first and reported by name.

        Args:
            subcommand: tmux subcommand, e.g. ``select-pane``.
            flag: Flag carrying the address (``-s`` for move sources).

        Returns:
            list[str]: Command arguments ready to be extended.

        Raises:
            TargetNotFound: If the target no longer exists.
        """
        if not self.exists():
            raise TargetNotFound(self.address)
        return tmux_command(subcommand, flag, self.address)

    def __str__(self) -> str:
        return self.address


@dataclass(frozen=True)
class SessionTarget(Target):
    session_id: str

    @classmethod
    def by_name(cls, name: str) -> "SessionTarget":
        """Target a session by exact name, bypassing tmux prefix matching."""
        return cls(f"={name}")

    @property
    def address(self) -> str:
        return self.session_id

    def window_target(self, window_id: str) -> "WindowTarget":
        return WindowTarget(self.session_id, window_id)


@dataclass(frozen=True)
class WindowTarget(Target):
    session_id: str
    window_id: str

    @property
    def address(self) -> str:
        return f"{self.session_id}:{self.window_id}"

    def pane_target(self, pane_id: str) -> "PaneTarget":
        return PaneTarget(self.session_id, self.window_id, pane_id)


@dataclass(frozen=True)
class PaneTarget(Target):
    session_id: str
    window_id: str
    pane_id: str

    @classmethod
    def from_sibling(cls, sibling: "PaneTarget", pane_id: str) -> "PaneTarget":
        """Derive a target for another pane in the sibling's window."""
        return cls(sibling.session_id, sibling.window_id, pane_id)

    @property
    def address(self) -> str:
        return f"{self.session_id}:{self.window_id}.{self.pane_id}"

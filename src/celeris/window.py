"""tmux windows and their default panes."""

import logging
from dataclasses import dataclass
from pathlib import Path

from celeris.options import INHERIT_PANE_PATH, Direction, Root
from celeris.pane import Pane
from celeris.runner import execute
from celeris.session import Session
from celeris.target import PaneTarget, WindowTarget
from celeris.tmux import format_fields, parse_fields


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WindowCore:
    """Identity of a freshly created window, before any Pane wraps it.

    tmux returns the window id and its default pane id together, but the
    session has to register the window before the public Window exists.
    This record carries just the ids through that step.

    Attributes:
        target: The window's address.
        default_pane_target: Address of the pane tmux created with it.
    """

    target: WindowTarget
    default_pane_target: PaneTarget

    def set_option(self, option: str, value: str) -> None:
        execute(self.target.targeted_command("set-window-option") + [option, value])

    def select(self) -> None:
        execute(self.target.targeted_command("select-window"))

    def even_out(self, direction: Direction) -> None:
        execute(self.target.targeted_command("select-layout") + [direction.even_layout])

    def move_kill(self, other: WindowTarget) -> None:
        """Move this window into ``other``'s slot, killing ``other``."""
        execute(
            self.target.targeted_command("move-window", flag="-s")
            + ["-t", other.address, "-k"]
        )


class WindowBuilder:
    """Collects options for a new window in a session."""

    def __init__(self, session: Session):
        self._session = session
        self._name: str | None = None
        self._shell_command: str | None = None
        self._root = Root.default()

    def name(self, name: str) -> "WindowBuilder":
        self._name = name
        return self

    def root(self, path: str | Path) -> "WindowBuilder":
        """Start the window in ``path``.

        Raises:
            RootNotFound: If the directory does not exist.
        """
        self._root = Root.custom(path)
        return self

    def shell_command(self, command: str) -> "WindowBuilder":
        """Run ``command`` instead of the default shell.

        tmux hands the string to the shell, so quoting is the caller's.
        """
        self._shell_command = command
        return self

    def _prepare_options(self) -> list[str]:
        options: list[str] = []
        if self._name is not None:
            options.extend(["-n", self._name])
        options.extend(self._root.to_args(inherit=INHERIT_PANE_PATH))
        # Reason: the shell command is positional and must come last.
        if self._shell_command is not None:
            options.append(self._shell_command)
        return options

    def _create_window(self) -> WindowCore:
        options = self._prepare_options()
        output = execute(
            self._session.target.targeted_command("new-window")
            + ["-P", "-F", format_fields("#{pane_id}", "#{window_id}")]
            + options
        )
        default_pane_id, window_id = parse_fields(output, 2)

        target = self._session.target.window_target(window_id)
        return WindowCore(target, target.pane_target(default_pane_id))

    def build(self) -> "Window":
        """Create the window.

        The first window built against a session replaces the window tmux
        created along with it. A window given an explicit name keeps it:
        automatic renaming is switched off.

        Returns:
            Window: The new window with its default pane.
        """
        core = self._create_window()
        self._session.register_window(core)

        if self._name is not None:
            core.set_option("allow-rename", "off")

        logger.debug("built window %s", core.target.address)
        return Window(core)


class Window:
    def __init__(self, core: WindowCore):
        self._core = core
        self._default_pane = Pane(core.default_pane_target)

    def __repr__(self) -> str:
        return f"Window({self._core.target.address!r})"

    @staticmethod
    def builder(session: Session) -> WindowBuilder:
        return WindowBuilder(session)

    @property
    def target(self) -> WindowTarget:
        return self._core.target

    @property
    def default_pane(self) -> Pane:
        return self._default_pane

    def even_out(self, direction: Direction) -> None:
        """Give every pane in the window an equal share along ``direction``."""
        self._core.even_out(direction)

    def select(self) -> None:
        """Make this the active window of its session."""
        self._core.select()

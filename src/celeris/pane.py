"""tmux panes and splitting them."""

from dataclasses import dataclass
from pathlib import Path

from celeris.errors import MalformedResponse
from celeris.options import INHERIT_PANE_PATH, Direction, Root, SplitSize
from celeris.runner import execute
from celeris.target import PaneTarget
from celeris.tmux import FIELD_SEPARATOR


class SplitBuilder:
    """Collects options for splitting a pane.

    The size is only validated in build(), so one builder can be reused to
    try several sizes.
    """

    def __init__(self, sibling_target: PaneTarget, direction: Direction):
        self._sibling_target = sibling_target
        self._direction = direction
        self._root = Root.default()
        self._size: SplitSize | None = None

    def size(self, size: SplitSize) -> "SplitBuilder":
        self._size = size
        return self

    def root(self, path: str | Path) -> "SplitBuilder":
        """Start the new pane in ``path``.

        Raises:
            RootNotFound: If the directory does not exist.
        """
        self._root = Root.custom(path)
        return self

    def _prepare_options(self) -> list[str]:
        # requires tmux 3.1+ for "-l <n>%"
        options = [self._direction.split_flag]
        if self._size is not None:
            options.extend(["-l", self._size.to_arg()])
        # Reason: without -c tmux uses the client's cwd, not the sibling's.
        options.extend(self._root.to_args(inherit=INHERIT_PANE_PATH))
        return options

    def build(self) -> "Pane":
        """Split the sibling pane.

        Returns:
            Pane: The newly created pane.

        Raises:
            InvalidPercentage: If a percentage size is outside 0-100.
            InvalidSize: If an absolute size is negative.
            TargetNotFound: If the sibling pane is gone.
            MalformedResponse: If tmux did not print a pane id.
        """
        options = self._prepare_options()
        output = execute(
            self._sibling_target.targeted_command("split-window")
            + ["-P", "-F", "#{pane_id}"]
            + options
        )
        pane_id = output.strip()
        if not pane_id or FIELD_SEPARATOR in pane_id or "\n" in pane_id:
            raise MalformedResponse(output)
        return Pane(PaneTarget.from_sibling(self._sibling_target, pane_id))


@dataclass(frozen=True)
class Pane:
    target: PaneTarget

    def split(self, direction: Direction) -> SplitBuilder:
        return SplitBuilder(self.target, direction)

    def select(self) -> None:
        execute(self.target.targeted_command("select-pane"))

    def run_command(self, command: str) -> None:
        """Type ``command`` into the pane and press Enter.

        This is keystroke injection into whatever runs in the pane, not an
        exec; no shell escaping is applied.
        """
        execute(self.target.targeted_command("send-keys") + [command, "Enter"])

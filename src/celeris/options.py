"""Value types for builder options: roots, directions and split sizes."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from celeris.errors import InvalidPercentage, InvalidSize, RootNotFound


# tmux expands this against the targeted pane, not the calling process.
INHERIT_PANE_PATH = "#{pane_current_path}"


@dataclass(frozen=True)
class Root:
    """Working directory for a new session, window or pane.

    Attributes:
        path: Explicit directory, or None to inherit.
    """

    path: Path | None = None

    @classmethod
    def default(cls) -> "Root":
        return cls()

    @classmethod
    def custom(cls, path: str | Path) -> "Root":
        """Build an explicit root, checking that the directory exists.

        Args:
            path: Directory to start in. ``~`` is expanded.

        Returns:
            Root: The validated root.

        Raises:
            RootNotFound: If the path does not exist.
        """
        resolved = Path(path).expanduser()
        if not resolved.exists():
            raise RootNotFound(resolved)
        return cls(resolved)

    @property
    def is_default(self) -> bool:
        return self.path is None

    def to_args(self, inherit: str | None = None) -> list[str]:
        """Build the ``-c`` option for this root.

        Args:
            inherit: Value to pass when no explicit path is set. None means
                omit ``-c`` and let tmux decide.

        Returns:
            list[str]: ``["-c", dir]`` or an empty list.
        """
        if self.path is not None:
            return ["-c", str(self.path)]
        if inherit is not None:
            return ["-c", inherit]
        return []


class Direction(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def split_flag(self) -> str:
        return "-h" if self is Direction.HORIZONTAL else "-v"

    @property
    def even_layout(self) -> str:
        return "even-horizontal" if self is Direction.HORIZONTAL else "even-vertical"


@dataclass(frozen=True)
class Percentage:
    """Split size as a share of the sibling pane, 0 to 100 inclusive.

    The bound is checked when the size is turned into arguments, so an
    out-of-range value only fails the build that uses it.
    """

    value: int

    def to_arg(self) -> str:
        if not 0 <= self.value <= 100:
            raise InvalidPercentage(self.value)
        return f"{self.value}%"


@dataclass(frozen=True)
class Absolute:
    """Split size in terminal cells."""

    cells: int

    def to_arg(self) -> str:
        if self.cells < 0:
            raise InvalidSize(self.cells)
        return str(self.cells)


SplitSize = Percentage | Absolute

"""Remembers the last session switched away from."""

from pathlib import Path


LAST_SESSION_FILE = "last_session"


class LastSessionStore:
    """Single-value store kept in the cache directory.

    Attributes:
        path: File holding the session name.
    """

    def __init__(self, cache_dir: Path):
        self.path = Path(cache_dir) / LAST_SESSION_FILE

    def save(self, name: str) -> None:
        """Record ``name`` as the last session, creating the cache dir if needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(name)

    def get(self) -> str | None:
        """Return the recorded session name, or None if nothing was saved."""
        if not self.path.exists():
            return None
        name = self.path.read_text().strip()
        return name or None

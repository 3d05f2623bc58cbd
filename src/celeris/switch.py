"""Switching between sessions.

Decides whether a named session is already in front, running in the
background, or has to be created, and acts accordingly.
"""

import logging
from enum import Enum
from pathlib import Path

from celeris.errors import NoLastSession
from celeris.history import LastSessionStore
from celeris.session import Session
from celeris.window import Window


logger = logging.getLogger(__name__)


class SwitchResult(Enum):
    ALREADY_ACTIVE = "already_active"
    ATTACHED = "attached"
    CREATED = "created"


def create_session(
    name: str, root: str | Path | None = None, window_name: str | None = None
) -> Session:
    """Create a session holding a single window.

    Args:
        name: Session name.
        root: Starting directory. tmux's default when None.
        window_name: Name for the window; tmux names it after the running
            command when None.

    Returns:
        Session: The new session, with its implicit window reclaimed.
    """
    builder = Session.builder(name)
    if root is not None:
        builder.root(root)
    session = builder.build()

    window_builder = Window.builder(session)
    if window_name is not None:
        window_builder.name(window_name)
    window_builder.build()
    return session


def switch_to(
    name: str, store: LastSessionStore, root: str | Path | None = None
) -> SwitchResult:
    """Bring the session ``name`` to the foreground.

    Handles three cases:
    1. ``name`` is the active session: nothing to do.
    2. ``name`` is running: attach (or switch-client) to it.
    3. Otherwise: create it with one window, then attach.

    The previously active session is remembered so switch_last() can
    return to it.

    Args:
        name: Session name.
        store: Where the previous session is recorded.
        root: Starting directory used only when the session is created.

    Returns:
        SwitchResult: Which of the three cases applied.
    """
    active = Session.active_name()
    if name == active:
        logger.info("session %s is already attached", name)
        return SwitchResult.ALREADY_ACTIVE

    running = [s for s in Session.list_sessions() if s != active]

    # Record the session being left, not the target, so --last toggles.
    if active is not None:
        store.save(active)

    if name in running:
        Session.from_existing(name).attach()
        return SwitchResult.ATTACHED

    logger.info("session %s is not running, creating it", name)
    create_session(name, root=root).attach()
    return SwitchResult.CREATED


def switch_last(store: LastSessionStore, root: str | Path | None = None) -> SwitchResult:
    """Switch back to the session recorded by the previous switch.

    Raises:
        NoLastSession: If no session has been recorded yet.
    """
    last = store.get()
    if last is None:
        raise NoLastSession("no last session saved")
    return switch_to(last, store, root=root)


def session_listing(include_active: bool = False) -> list[str]:
    """List running sessions for display.

    Args:
        include_active: Keep the active session, marked with a trailing ``*``.

    Returns:
        list[str]: Sorted, de-duplicated session names.
    """
    active = Session.active_name()
    names = sorted(set(Session.list_sessions()))

    listing: list[str] = []
    for name in names:
        if name == active:
            if not include_active:
                continue
            name = f"{name}*"
        listing.append(name)
    return listing

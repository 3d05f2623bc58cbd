"""Tests for session switching (switch.py) and the last-session store (history.py).

Session queries are monkeypatched so each scenario controls which session
is active and which are running.
"""

import pytest

from celeris.errors import NoLastSession
from celeris.history import LastSessionStore
from celeris.session import Session
from celeris.switch import SwitchResult, create_session, session_listing, switch_last, switch_to


class FakeSession:
    """Records attach() calls instead of talking to tmux."""

    def __init__(self, name: str):
        self.name = name
        self.attached = False

    def attach(self) -> None:
        self.attached = True


@pytest.fixture
def store(tmp_path) -> LastSessionStore:
    return LastSessionStore(tmp_path / "cache")


@pytest.fixture
def tmux_state(monkeypatch):
    """Configure the active and running sessions seen by switch.py.

    Returns:
        dict: Mutable state with ``active``, ``running``, ``recovered`` and
            ``created`` keys.
    """
    state: dict = {"active": None, "running": [], "recovered": [], "created": []}

    monkeypatch.setattr(Session, "active_name", staticmethod(lambda: state["active"]))
    monkeypatch.setattr(Session, "list_sessions", staticmethod(lambda: list(state["running"])))

    def fake_from_existing(identifier):
        """Return a FakeSession for a running session."""
        session = FakeSession(identifier)
        state["recovered"].append(session)
        return session

    def fake_create(name, root=None, window_name=None):
        """Return a FakeSession for a newly created session."""
        session = FakeSession(name)
        state["created"].append((session, root))
        return session

    monkeypatch.setattr(Session, "from_existing", staticmethod(fake_from_existing))
    monkeypatch.setattr("celeris.switch.create_session", fake_create)
    return state


# ---------------------------------------------------------------------------
# LastSessionStore
# ---------------------------------------------------------------------------


def test_store_empty(store):
    """Nothing saved yet reads back as None."""
    assert store.get() is None


def test_store_round_trip_creates_directory(store):
    """save() creates the cache directory and get() reads the name back."""
    store.save("work")

    assert store.path.read_text() == "work"
    assert store.get() == "work"


# ---------------------------------------------------------------------------
# switch_to / switch_last
# ---------------------------------------------------------------------------


def test_switch_to_active_is_noop(tmux_state, store):
    """Switching to the attached session does nothing."""
    tmux_state["active"] = "work"
    tmux_state["running"] = ["work"]

    assert switch_to("work", store) is SwitchResult.ALREADY_ACTIVE
    assert tmux_state["recovered"] == []
    assert store.get() is None


def test_switch_to_running_attaches(tmux_state, store):
    """A running session is recovered and attached; the old one is remembered."""
    tmux_state["active"] = "main"
    tmux_state["running"] = ["main", "work"]

    assert switch_to("work", store) is SwitchResult.ATTACHED

    (session,) = tmux_state["recovered"]
    assert session.name == "work"
    assert session.attached
    assert store.get() == "main"


def test_switch_to_missing_creates(tmux_state, store, tmp_path):
    """A session that is not running is created in the given root, then attached."""
    assert switch_to("fresh", store, root=tmp_path) is SwitchResult.CREATED

    ((session, root),) = tmux_state["created"]
    assert session.name == "fresh"
    assert session.attached
    assert root == tmp_path
    # Reason: outside tmux there is no previous session to remember.
    assert store.get() is None


def test_switch_last(tmux_state, store):
    """switch_last goes to the recorded session."""
    tmux_state["active"] = "work"
    tmux_state["running"] = ["main", "work"]
    store.save("main")

    assert switch_last(store) is SwitchResult.ATTACHED
    assert tmux_state["recovered"][0].name == "main"
    assert store.get() == "work"


def test_switch_last_without_history(tmux_state, store):
    """Nothing recorded raises NoLastSession."""
    with pytest.raises(NoLastSession):
        switch_last(store)


# ---------------------------------------------------------------------------
# session_listing
# ---------------------------------------------------------------------------


def test_listing_excludes_active(tmux_state):
    """The active session is hidden by default; the rest are sorted."""
    tmux_state["active"] = "main"
    tmux_state["running"] = ["zeta", "main", "alpha"]

    assert session_listing() == ["alpha", "zeta"]


def test_listing_marks_active(tmux_state):
    """include_active keeps the active session with a trailing star."""
    tmux_state["active"] = "main"
    tmux_state["running"] = ["zeta", "main", "alpha"]

    assert session_listing(include_active=True) == ["alpha", "main*", "zeta"]


def test_listing_no_server(tmux_state):
    """No running sessions gives an empty listing."""
    assert session_listing(include_active=True) == []


# ---------------------------------------------------------------------------
# create_session
# ---------------------------------------------------------------------------


def test_create_session_builds_one_window(fake_tmux, tmp_path):
    """create_session builds the session and reclaims its implicit window."""
    fake_tmux.register("has-session", returncode=1)
    fake_tmux.register("has-session", returncode=0)
    fake_tmux.register("new-session", stdout="@0|$4\n")
    fake_tmux.register("new-window", stdout="%1|@1\n")

    session = create_session("work", root=tmp_path, window_name="editor")

    assert session.window_count == 1
    assert fake_tmux.subcommands() == [
        "has-session", "new-session",
        "has-session", "new-window",
        "has-session", "move-window",
        "has-session", "set-window-option",
    ]

"""celeris CLI entry point."""

import logging
from pathlib import Path
from typing import Optional

import typer
from coolname import generate_slug
from rich.console import Console

from celeris import __version__
from celeris.config import load_config
from celeris.errors import CelerisError
from celeris.history import LastSessionStore
from celeris.session import Session
from celeris.switch import SwitchResult, create_session, session_listing, switch_last, switch_to


app = typer.Typer(
    name="celeris",
    help="celeris — reproducible tmux sessions.",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"celeris {__version__}")
        raise typer.Exit()


def _fail(exc: Exception) -> typer.Exit:
    """Report an error the way every command does and build the exit."""
    # Reason: tmux stderr may contain brackets rich would read as markup.
    console.print(f"Error: {exc}", markup=False)
    return typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log tmux commands."),
) -> None:
    """celeris — reproducible tmux sessions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = load_config()
    except CelerisError as exc:
        raise _fail(exc)


@app.command("list")
def list_cmd(
    include_active: bool = typer.Option(
        False, "--include-active", "-a", help="Include the attached session, marked with '*'."
    ),
    tmux_format: bool = typer.Option(
        False, "--tmux-format", "-t", help="Space-separated output for tmux status lines."
    ),
) -> None:
    """List running tmux sessions."""
    try:
        names = session_listing(include_active=include_active)
    except CelerisError as exc:
        raise _fail(exc)

    typer.echo((" " if tmux_format else "\n").join(names))


@app.command("switch")
def switch_cmd(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(None, help="Session to switch to."),
    last: bool = typer.Option(False, "--last", "-l", help="Switch to the previous session."),
    root: Optional[Path] = typer.Option(
        None, "--root", "-r", help="Directory used if the session has to be created."
    ),
) -> None:
    """Switch to a session, creating it if it is not running.

    Inside tmux the current client is switched; from a bare terminal the
    session is attached and this command returns when you detach.

    Args:
        ctx: Typer context carrying the loaded config.
        name: Session name.
        last: Switch to the session that was active before the last switch.
        root: Starting directory for a newly created session.
    """
    if last == (name is not None):
        console.print("Error: give either a session name or --last.")
        raise typer.Exit(code=1)

    store = LastSessionStore(ctx.obj["config"].cache_dir)
    try:
        if last:
            result = switch_last(store, root=root)
        else:
            result = switch_to(name, store, root=root)
    except CelerisError as exc:
        raise _fail(exc)

    if result is SwitchResult.ALREADY_ACTIVE:
        console.print("Session is already attached.")


@app.command("new")
def new_cmd(
    name: Optional[str] = typer.Argument(None, help="Session name (auto-generated if omitted)."),
    root: Optional[Path] = typer.Option(None, "--root", "-r", help="Working directory."),
    window: Optional[str] = typer.Option(None, "--window", "-w", help="Name of the first window."),
    detach: bool = typer.Option(False, "--detach", "-D", help="Create session without attaching."),
) -> None:
    """Create a new tmux session with a single window.

    Args:
        name: Name for the new session.
        root: Working directory. Defaults to tmux's choice.
        window: Name for the first window.
        detach: Create the session but stay where you are.
    """
    # Reason: Generate a random slug when the user omits the session name.
    if name is None:
        name = generate_slug(2)

    try:
        session = create_session(name, root=root, window_name=window)
        console.print(f"Created session {name}")
        if not detach:
            session.attach()
    except CelerisError as exc:
        raise _fail(exc)


@app.command("kill")
def kill_cmd(
    name: str = typer.Argument(..., help="Session to kill."),
) -> None:
    """Kill a running tmux session."""
    try:
        Session.from_existing(name).kill()
    except CelerisError as exc:
        raise _fail(exc)

    console.print(f"Killed session {name}")


# Alias: celeris s → celeris switch
app.command("s", hidden=True)(switch_cmd)

# Alias: celeris l → celeris list
app.command("l", hidden=True)(list_cmd)

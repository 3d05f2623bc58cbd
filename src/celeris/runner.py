"""Process execution for tmux commands.

Each call spawns exactly one process and waits for it. Nothing is retried
here; callers decide what a failure means.
"""

import logging
import shlex
import subprocess

from celeris.errors import ExecutionFailed


logger = logging.getLogger(__name__)


def execute(cmd: list[str]) -> str:
    """Run a command and return its stdout.

    Args:
        cmd: Program and arguments.

    Returns:
        str: Decoded standard output.

    Raises:
        ExecutionFailed: If the process cannot be spawned, exits non-zero,
            or writes output that is not valid UTF-8.
    """
    logger.debug("exec: %s", shlex.join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True)
    except OSError as exc:
        raise ExecutionFailed(cmd, str(exc)) from exc

    try:
        stdout = result.stdout.decode("utf-8")
        stderr = result.stderr.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ExecutionFailed(cmd, "tmux returned invalid utf-8") from exc

    if result.returncode != 0:
        logger.debug("exit %d: %s", result.returncode, stderr.strip())
        raise ExecutionFailed(cmd, stderr)

    return stdout


def probe(cmd: list[str]) -> bool:
    """Run a command for its exit status only.

    Args:
        cmd: Program and arguments.

    Returns:
        bool: True if the command exited with status 0.

    Raises:
        ExecutionFailed: If the process cannot be spawned.
    """
    logger.debug("probe: %s", shlex.join(cmd))
    try:
        result = subprocess.run(
            cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL
        )
    except OSError as exc:
        raise ExecutionFailed(cmd, str(exc)) from exc
    return result.returncode == 0


def run_interactive(cmd: list[str]) -> tuple[int, str]:
    """Run a command attached to the caller's terminal.

    stdin and stdout are inherited so tmux can take over the terminal;
    only stderr is captured so a failure can be reported.

    Args:
        cmd: Program and arguments.

    Returns:
        tuple[int, str]: Exit status and captured stderr.

    Raises:
        ExecutionFailed: If the process cannot be spawned
            or its stderr is not valid UTF-8.
    """
    logger.debug("interactive: %s", shlex.join(cmd))
    try:
        result = subprocess.run(cmd, stderr=subprocess.PIPE)
    except OSError as exc:
        raise ExecutionFailed(cmd, str(exc)) from exc
    try:
        stderr = (result.stderr or b"").decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ExecutionFailed(cmd, "tmux returned invalid utf-8") from exc
    return result.returncode, stderr

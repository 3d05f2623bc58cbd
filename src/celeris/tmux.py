"""tmux command builder and output parser."""

from celeris.config import load_config
from celeris.errors import MalformedResponse
from celeris.runner import probe


FIELD_SEPARATOR = "|"


def tmux_command(*args: str) -> list[str]:
    """Build a tmux command line for the configured server.

    The socket selection is re-read from the environment on every call.

    Args:
        *args: Subcommand and its arguments.

    Returns:
        list[str]: Command arguments starting with ``tmux``.

    Raises:
        ConfigError: If the socket environment variables are invalid.
    """
    return ["tmux", *load_config().socket_args(), *args]


def format_fields(*fields: str) -> str:
    """Join tmux format variables into a single -F format string.

    Args:
        *fields: Format variables such as ``#{window_id}``.

    Returns:
        str: The fields joined with FIELD_SEPARATOR.
    """
    return FIELD_SEPARATOR.join(fields)


def parse_fields(raw: str, count: int) -> list[str]:
    """Split one line of -F output into exactly ``count`` fields.

    Args:
        raw: Raw stdout from a tmux command using format_fields().
        count: Number of fields the format requested.

    Returns:
        list[str]: The fields in format order.

    Raises:
        MalformedResponse: If the delimiter count does not match.
    """
    fields = raw.strip().split(FIELD_SEPARATOR)
    if len(fields) != count or not all(fields):
        raise MalformedResponse(raw)
    return fields


def server_running() -> bool:
    """Check whether a tmux server is listening on the configured socket.

    Returns:
        bool: True if the server answered.
    """
    return probe(tmux_command("display-message", "-p", "#{socket_path}"))

"""Environment-driven configuration for the tmux control layer."""

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from celeris.errors import ConfigError


ENV_SOCKET_NAME = "CELERIS_TMUX_SOCKET_NAME"
ENV_SOCKET_PATH = "CELERIS_TMUX_SOCKET_PATH"
DEFAULT_CACHE_DIR = Path.home() / ".cache" / "celeris"


class CelerisConfig(BaseModel):
    """Runtime configuration model.

    Attributes:
        socket_name: tmux server socket name, passed as ``-L``.
        socket_path: tmux server socket path, passed as ``-S``.
        cache_dir: Directory for small state files (last session).
    """

    socket_name: str | None = None
    socket_path: Path | None = None
    cache_dir: Path = DEFAULT_CACHE_DIR

    @field_validator("socket_name", "socket_path", mode="before")
    @classmethod
    def require_text(cls, v):
        """Reject values that are not valid UTF-8 and treat "" as unset.

        Args:
            v: Raw value taken from the environment.

        Returns:
            The value unchanged, or None for an empty string.
        """
        if v is None:
            return None
        try:
            # Reason: os.environ smuggles undecodable bytes in as surrogates.
            str(v).encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("value is not valid UTF-8 text")
        return v or None

    @model_validator(mode="after")
    def exclusive_socket(self) -> "CelerisConfig":
        """Ensure at most one socket selector is set.

        Returns:
            CelerisConfig: The validated config.
        """
        if self.socket_name is not None and self.socket_path is not None:
            raise ValueError(
                f"{ENV_SOCKET_NAME} and {ENV_SOCKET_PATH} are mutually exclusive"
            )
        return self

    def socket_args(self) -> list[str]:
        """Build the tmux flags that select the configured server.

        Returns:
            list[str]: ``["-L", name]``, ``["-S", path]`` or an empty list.
        """
        if self.socket_name is not None:
            return ["-L", self.socket_name]
        if self.socket_path is not None:
            return ["-S", str(self.socket_path)]
        return []


def load_config(environ: Mapping[str, str] | None = None) -> CelerisConfig:
    """Load configuration from environment variables.

    Args:
        environ: Mapping to read from. Defaults to os.environ, read at call
            time so changes between calls are honoured.

    Returns:
        CelerisConfig: The loaded and validated configuration.

    Raises:
        ConfigError: If both socket variables are set or either is not text.
    """
    env = os.environ if environ is None else environ

    data: dict = {
        "socket_name": env.get(ENV_SOCKET_NAME),
        "socket_path": env.get(ENV_SOCKET_PATH),
    }
    xdg_cache = env.get("XDG_CACHE_HOME")
    if xdg_cache:
        data["cache_dir"] = Path(xdg_cache) / "celeris"

    try:
        return CelerisConfig(**data)
    except ValidationError as exc:
        raise ConfigError(f"invalid tmux configuration: {exc}") from exc

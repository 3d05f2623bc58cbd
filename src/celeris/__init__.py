"""celeris: reproducible tmux sessions."""

__version__ = "0.1.0"

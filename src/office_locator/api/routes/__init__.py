"""Route group exports."""

from . import health, offices, sessions

__all__ = ["health", "offices", "sessions"]

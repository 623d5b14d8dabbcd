"""Map viewport synchronization."""

from .controller import ViewportController, resolve_view
from .states import ViewportInputs, ViewportSnapshot, ViewState

__all__ = [
    "ViewportController",
    "ViewportInputs",
    "ViewportSnapshot",
    "ViewState",
    "resolve_view",
]

"""View-state machine: loaded, filtering, filtered, and error views."""

from .application import Application
from .model import ViewModel
from .states import (
    ErrorView,
    FilteredView,
    FilteringView,
    LoadedView,
    Transition,
    View,
    is_filter_back_key,
)

__all__ = [
    "Application",
    "ErrorView",
    "FilteredView",
    "FilteringView",
    "LoadedView",
    "Transition",
    "View",
    "ViewModel",
    "is_filter_back_key",
]

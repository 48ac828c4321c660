"""Input-layer public API: raw key decoding and key bindings."""

from .keymap import DEFAULT_KEYMAP, KeyBinding, KeyMap
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "DEFAULT_KEYMAP",
    "KeyBinding",
    "KeyMap",
]

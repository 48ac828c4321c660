"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the log table, the filter input line, and the
help strip. Field values are raw escape prefixes; ``reset`` closes them.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    reverse: str
    table_header: str
    table_selected: str
    level_error: str
    level_warn: str
    level_info: str
    level_debug: str
    status: str
    pill: str
    input_prompt: str
    input_placeholder: str
    input_completion: str
    help_key: str
    help_dim: str
    error_title: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    table_header="\033[1;38;5;81m",
    table_selected="\033[7m",
    level_error="\033[38;5;203m",
    level_warn="\033[38;5;214m",
    level_info="\033[38;5;42m",
    level_debug="\033[2;38;5;250m",
    status="\033[2;38;5;250m",
    pill="\033[1;38;5;229;48;5;57m",
    input_prompt="\033[38;5;63m",
    input_placeholder="\033[38;5;245m",
    input_completion="\033[2;38;5;250m",
    help_key="\033[38;5;246m",
    help_dim="\033[2;38;5;240m",
    error_title="\033[1;38;5;203m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    table_header="\033[1;38;5;45m",
    table_selected="\033[7m",
    level_error="\033[38;5;209m",
    level_warn="\033[38;5;215m",
    level_info="\033[38;5;84m",
    level_debug="\033[2;38;5;110m",
    status="\033[2;38;5;110m",
    pill="\033[1;38;5;231;48;5;25m",
    input_prompt="\033[38;5;39m",
    input_placeholder="\033[38;5;110m",
    input_completion="\033[2;38;5;153m",
    help_key="\033[38;5;153m",
    help_dim="\033[2;38;5;110m",
    error_title="\033[1;38;5;209m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="",
    table_header="",
    table_selected="",
    level_error="",
    level_warn="",
    level_info="",
    level_debug="",
    status="",
    pill="",
    input_prompt="",
    input_placeholder="",
    input_completion="",
    help_key="",
    help_dim="",
    error_title="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]

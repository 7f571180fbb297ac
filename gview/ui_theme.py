"""UI theme definitions and selection helpers.

Themes colour panel chrome, the file list, annotations and modals. Syntax
highlighting of file content is a separate Pygments style setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by panels and the screen composer."""

    name: str
    reset: str
    reverse: str
    border_focused: str
    border_unfocused: str
    text_unfocused: str
    title: str
    filter_partial: str
    filter_fuzzy: str
    filter_regex: str
    list_marker: str
    commit_id: str
    line_number: str
    blame_author: str
    status_error: str
    help_heading: str
    help_key: str
    help_dim: str
    modal_border: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    border_focused="\033[38;5;252m",
    border_unfocused="\033[2;38;5;240m",
    text_unfocused="\033[38;5;244m",
    title="\033[1m",
    filter_partial="\033[38;5;33m",
    filter_fuzzy="\033[38;5;160m",
    filter_regex="\033[38;5;34m",
    list_marker="\033[38;5;44m",
    commit_id="\033[38;5;220m",
    line_number="\033[38;5;109m",
    blame_author="\033[38;5;110m",
    status_error="\033[1;38;5;203m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
    modal_border="\033[38;5;45m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    border_focused="\033[38;5;45m",
    border_unfocused="\033[2;38;5;31m",
    text_unfocused="\033[38;5;67m",
    title="\033[1;38;5;153m",
    filter_partial="\033[38;5;39m",
    filter_fuzzy="\033[38;5;209m",
    filter_regex="\033[38;5;84m",
    list_marker="\033[38;5;39m",
    commit_id="\033[38;5;215m",
    line_number="\033[38;5;73m",
    blame_author="\033[38;5;117m",
    status_error="\033[1;38;5;209m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
    help_dim="\033[2;38;5;110m",
    modal_border="\033[38;5;39m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="\033[7m",
    border_focused="",
    border_unfocused="",
    text_unfocused="",
    title="",
    filter_partial="",
    filter_fuzzy="",
    filter_regex="",
    list_marker="",
    commit_id="",
    line_number="",
    blame_author="",
    status_error="",
    help_heading="",
    help_key="",
    help_dim="",
    modal_border="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
    PLAIN_THEME.name: PLAIN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    return tuple(sorted(_THEMES.keys()))


def resolve_theme(name: str | None) -> UITheme:
    """Return the theme called ``name``, falling back to the default."""
    if not name:
        return DEFAULT_THEME
    return _THEMES.get(str(name).strip().lower(), DEFAULT_THEME)


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "resolve_theme",
]

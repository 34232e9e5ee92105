"""UI theme definitions and selection helpers.

Themes map the semantic components a view draws (titles, headers, rows,
footers) to ANSI SGR sequences. Views only name components; the window
resolves them through the active theme.
"""

from __future__ import annotations

from dataclasses import dataclass

CMP_NONE = "none"
CMP_BORDER = "border"
CMP_REFVIEW_TITLE = "refview_title"
CMP_REFVIEW_FOOTER = "refview_footer"
CMP_REFVIEW_BRANCHES_HEADER = "refview_branches_header"
CMP_REFVIEW_BRANCH = "refview_branch"
CMP_REFVIEW_TAGS_HEADER = "refview_tags_header"
CMP_REFVIEW_TAG = "refview_tag"
CMP_COMMITVIEW_TITLE = "commitview_title"
CMP_COMMITVIEW_FOOTER = "commitview_footer"
CMP_COMMITVIEW_ROW = "commitview_row"
CMP_HELPBAR_KEY = "helpbar_key"
CMP_HELPBAR_TEXT = "helpbar_text"
CMP_STATUSBAR = "statusbar"

_STYLED_COMPONENTS = frozenset(
    {
        CMP_BORDER,
        CMP_REFVIEW_TITLE,
        CMP_REFVIEW_FOOTER,
        CMP_REFVIEW_BRANCHES_HEADER,
        CMP_REFVIEW_BRANCH,
        CMP_REFVIEW_TAGS_HEADER,
        CMP_REFVIEW_TAG,
        CMP_COMMITVIEW_TITLE,
        CMP_COMMITVIEW_FOOTER,
        CMP_COMMITVIEW_ROW,
        CMP_HELPBAR_KEY,
        CMP_HELPBAR_TEXT,
        CMP_STATUSBAR,
    }
)


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by windows and bars."""

    name: str
    reset: str
    selected_active: str
    selected_inactive: str
    border: str
    refview_title: str
    refview_footer: str
    refview_branches_header: str
    refview_branch: str
    refview_tags_header: str
    refview_tag: str
    commitview_title: str
    commitview_footer: str
    commitview_row: str
    helpbar_key: str
    helpbar_text: str
    statusbar: str

    def style_for(self, component: str) -> str:
        """Return the SGR prefix for ``component``; unknown components are unstyled."""
        if component not in _STYLED_COMPONENTS:
            return ""
        return getattr(self, component)


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    selected_active="\033[7m",
    selected_inactive="\033[2;7m",
    border="\033[2m",
    refview_title="\033[1;38;5;81m",
    refview_footer="\033[2;38;5;250m",
    refview_branches_header="\033[1;34m",
    refview_branch="\033[38;5;252m",
    refview_tags_header="\033[1;34m",
    refview_tag="\033[38;5;229m",
    commitview_title="\033[1;38;5;81m",
    commitview_footer="\033[2;38;5;250m",
    commitview_row="\033[38;5;252m",
    helpbar_key="\033[38;5;229m",
    helpbar_text="\033[2;38;5;250m",
    statusbar="\033[7m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    selected_active="\033[7m",
    selected_inactive="\033[2;7m",
    border="\033[2;38;5;31m",
    refview_title="\033[1;38;5;45m",
    refview_footer="\033[2;38;5;110m",
    refview_branches_header="\033[1;38;5;45m",
    refview_branch="\033[38;5;117m",
    refview_tags_header="\033[1;38;5;45m",
    refview_tag="\033[38;5;153m",
    commitview_title="\033[1;38;5;39m",
    commitview_footer="\033[2;38;5;110m",
    commitview_row="\033[38;5;252m",
    helpbar_key="\033[38;5;153m",
    helpbar_text="\033[2;38;5;110m",
    statusbar="\033[7;38;5;39m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="\033[0m",
    selected_active="\033[7m",
    selected_inactive="\033[4m",
    border="",
    refview_title="",
    refview_footer="",
    refview_branches_header="",
    refview_branch="",
    refview_tags_header="",
    refview_tag="",
    commitview_title="",
    commitview_footer="",
    commitview_row="",
    helpbar_key="",
    helpbar_text="",
    statusbar="",
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
    "CMP_NONE",
    "CMP_BORDER",
    "CMP_REFVIEW_TITLE",
    "CMP_REFVIEW_FOOTER",
    "CMP_REFVIEW_BRANCHES_HEADER",
    "CMP_REFVIEW_BRANCH",
    "CMP_REFVIEW_TAGS_HEADER",
    "CMP_REFVIEW_TAG",
    "CMP_COMMITVIEW_TITLE",
    "CMP_COMMITVIEW_FOOTER",
    "CMP_COMMITVIEW_ROW",
    "CMP_HELPBAR_KEY",
    "CMP_HELPBAR_TEXT",
    "CMP_STATUSBAR",
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]

"""Bordered text window used as the drawing surface for views.

A view fills a ``RenderWindow`` row by row with plain text plus a theme
component name; the window owns clipping, horizontal offset, selection
highlighting, the border with its embedded title/footer, and styling.
``lines()`` then yields fully composed ANSI rows of exactly ``cols`` cells.
"""

from __future__ import annotations

from dataclasses import dataclass

from .ansi import display_width, pad_to_width, slice_columns
from .errors import WindowError
from .ui_theme import CMP_BORDER, CMP_NONE, DEFAULT_THEME, UITheme

BORDER_HORIZONTAL = "─"
BORDER_VERTICAL = "│"
BORDER_TOP_LEFT = "┌"
BORDER_TOP_RIGHT = "┐"
BORDER_BOTTOM_LEFT = "└"
BORDER_BOTTOM_RIGHT = "┘"


@dataclass(frozen=True)
class ViewDimension:
    rows: int
    cols: int


@dataclass
class _WindowRow:
    text: str = ""
    component: str = CMP_NONE


class RenderWindow:
    """Fixed-size cell grid with a one-cell border around the content area.

    Row ``0`` and row ``rows - 1`` belong to the border; content rows are
    addressed ``1..rows - 2`` so a view can map its visible window directly.
    """

    def __init__(self, window_id: str, rows: int, cols: int, theme: UITheme | None = None) -> None:
        self.window_id = window_id
        self.rows = max(0, rows)
        self.cols = max(0, cols)
        self.theme = theme or DEFAULT_THEME
        self.clear()

    def clear(self) -> None:
        """Reset content, selection, border, title, and footer."""
        self._content = [_WindowRow() for _ in range(self.rows)]
        self._selected_row: int | None = None
        self._selected_active = False
        self._border = False
        self._title: tuple[str, str] | None = None
        self._footer: tuple[str, str] | None = None

    def view_dimensions(self) -> ViewDimension:
        return ViewDimension(rows=self.rows, cols=self.cols)

    def inner_cols(self) -> int:
        return max(0, self.cols - 2)

    def _check_content_row(self, row_index: int) -> None:
        if not 1 <= row_index <= self.rows - 2:
            raise WindowError(
                f"Row {row_index} is outside content rows 1..{self.rows - 2} of window {self.window_id}"
            )

    def set_row(self, row_index: int, start_column: int, component: str, text: str) -> None:
        """Place ``text`` on a content row, viewed from ``start_column`` onwards."""
        self._check_content_row(row_index)
        self._content[row_index] = _WindowRow(
            text=slice_columns(text, start_column, self.inner_cols()),
            component=component,
        )

    def set_selected_row(self, row_index: int, active: bool) -> None:
        """Highlight one content row; ``active`` picks the focused style."""
        self._check_content_row(row_index)
        self._selected_row = row_index
        self._selected_active = active

    def draw_border(self) -> None:
        self._border = True

    def set_title(self, component: str, text: str) -> None:
        self._title = (component, text)

    def set_footer(self, component: str, text: str) -> None:
        self._footer = (component, text)

    def row_text(self, row_index: int) -> str:
        """Return plain text stored on a content row (for inspection)."""
        return self._content[row_index].text

    def title_text(self) -> str | None:
        return self._title[1] if self._title is not None else None

    def footer_text(self) -> str | None:
        return self._footer[1] if self._footer is not None else None

    def selected_row(self) -> int | None:
        return self._selected_row

    def _styled(self, component: str, text: str) -> str:
        style = self.theme.style_for(component)
        if not style or not text:
            return text
        return f"{style}{text}{self.theme.reset}"

    def _border_line(self, left: str, right: str, label: tuple[str, str] | None, align_right: bool) -> str:
        inner = self.inner_cols()
        if not self._border:
            return " " * self.cols
        label_text = ""
        label_component = CMP_NONE
        if label is not None and inner > 2:
            label_component, raw = label
            label_text = slice_columns(f" {raw} ", 0, inner)
        fill = BORDER_HORIZONTAL * (inner - display_width(label_text))
        if align_right:
            body = self._styled(CMP_BORDER, left + fill) + self._styled(label_component, label_text)
            return body + self._styled(CMP_BORDER, right)
        body = self._styled(CMP_BORDER, left) + self._styled(label_component, label_text)
        return body + self._styled(CMP_BORDER, fill + right)

    def _content_line(self, row_index: int) -> str:
        row = self._content[row_index]
        text = pad_to_width(row.text, self.inner_cols())
        if row_index == self._selected_row:
            highlight = self.theme.selected_active if self._selected_active else self.theme.selected_inactive
            body = f"{self.theme.style_for(row.component)}{highlight}{text}{self.theme.reset}"
        else:
            body = self._styled(row.component, text)
        edge = self._styled(CMP_BORDER, BORDER_VERTICAL) if self._border else " "
        return f"{edge}{body}{edge}"

    def lines(self) -> list[str]:
        """Compose all rows of the window as ANSI-styled strings."""
        if self.rows == 0 or self.cols < 2:
            return [" " * self.cols for _ in range(self.rows)]
        if self.rows == 1:
            return [self._border_line(BORDER_TOP_LEFT, BORDER_TOP_RIGHT, self._title, False)]
        out = [self._border_line(BORDER_TOP_LEFT, BORDER_TOP_RIGHT, self._title, False)]
        for row_index in range(1, self.rows - 1):
            out.append(self._content_line(row_index))
        out.append(self._border_line(BORDER_BOTTOM_LEFT, BORDER_BOTTOM_RIGHT, self._footer, True))
        return out


class LineBuilder:
    """Accumulates styled segments for a single-line bar (status or help)."""

    def __init__(self, width: int, theme: UITheme | None = None) -> None:
        self.width = max(0, width)
        self.theme = theme or DEFAULT_THEME
        self._segments: list[tuple[str, str]] = []

    def append(self, component: str, text: str) -> LineBuilder:
        self._segments.append((component, text))
        return self

    def plain_text(self) -> str:
        return "".join(text for _component, text in self._segments)

    def build(self) -> str:
        """Return the bar clipped and padded to ``width`` columns."""
        out: list[str] = []
        used = 0
        for component, text in self._segments:
            if used >= self.width:
                break
            visible = slice_columns(text, 0, self.width - used)
            used += display_width(visible)
            style = self.theme.style_for(component)
            out.append(f"{style}{visible}{self.theme.reset}" if style and visible else visible)
        if used < self.width:
            out.append(" " * (self.width - used))
        return "".join(out)


__all__ = ["ViewDimension", "RenderWindow", "LineBuilder"]

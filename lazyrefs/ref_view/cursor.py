"""Cursor and scroll-window state for list views."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass
class ViewPos:
    """Active row plus the first visible row and column of the window."""

    active_row_index: int = 0
    view_start_row_index: int = 0
    view_start_column: int = 0

    def step_to_selectable(
        self,
        direction: int,
        row_count: int,
        is_selectable: Callable[[int], bool],
    ) -> bool:
        """Move one row in ``direction``, skipping rows that cannot hold the cursor.

        Stepping continues until a selectable row is reached or the list
        boundary is hit. When no selectable row exists in that direction the
        cursor is left where it was and ``False`` is returned.
        """
        if row_count <= 0 or direction == 0:
            return False
        step = 1 if direction > 0 else -1
        last_index = row_count - 1
        start_index = self.active_row_index
        if (step < 0 and start_index <= 0) or (step > 0 and start_index >= last_index):
            return False

        index = start_index + step
        while 0 < index < last_index and not is_selectable(index):
            index += step

        if not is_selectable(index):
            return False
        self.active_row_index = index
        return True

    def move_to_first_line(self) -> bool:
        if self.active_row_index == 0:
            return False
        self.active_row_index = 0
        return True

    def move_to_last_line(self, row_count: int, is_selectable: Callable[[int], bool] | None = None) -> bool:
        """Jump to the last row (or last selectable row); ``True`` when it moved."""
        if row_count <= 0:
            return False
        index = row_count - 1
        if is_selectable is not None:
            while index > 0 and not is_selectable(index):
                index -= 1
        if index == self.active_row_index:
            return False
        self.active_row_index = index
        return True

    def move_page_right(self, page_cols: int) -> bool:
        if page_cols <= 0:
            return False
        self.view_start_column += page_cols
        return True

    def move_page_left(self, page_cols: int) -> bool:
        """Shift left one page, clamped at column 0; ``False`` when already there."""
        if self.view_start_column == 0:
            return False
        self.view_start_column = max(0, self.view_start_column - max(0, page_cols))
        return True

    def determine_view_start_row(self, visible_rows: int) -> None:
        """Scroll so the active row sits inside ``visible_rows`` rows."""
        if self.active_row_index < self.view_start_row_index:
            self.view_start_row_index = self.active_row_index
        elif visible_rows > 0 and self.active_row_index - self.view_start_row_index >= visible_rows:
            self.view_start_row_index = self.active_row_index - visible_rows + 1


__all__ = ["ViewPos"]

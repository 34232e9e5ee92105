"""Ref view: collapsible Branches/Tags list fed by background loads.

All mutable state (groups, rows, cursor, focus) is owned by ``RefView`` and
guarded by one lock. Public entry points acquire it; private helpers whose
names start with ``_`` assume it is already held. Load callbacks arrive on
background threads, take the same lock to rebuild rows, and then ask the
host for a repaint through ``channels.update_display()``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..actions import (
    ACTION_FIRST_LINE,
    ACTION_LAST_LINE,
    ACTION_NEXT_LINE,
    ACTION_PREV_LINE,
    ACTION_SCROLL_LEFT,
    ACTION_SCROLL_RIGHT,
    ACTION_SELECT,
    VIEW_REF,
    ActionMessage,
    KeyActionRegistry,
    default_key_registry,
    render_key_binding_help,
)
from ..repo.types import Branch, Tag
from ..ui_theme import (
    CMP_NONE,
    CMP_REFVIEW_BRANCH,
    CMP_REFVIEW_BRANCHES_HEADER,
    CMP_REFVIEW_FOOTER,
    CMP_REFVIEW_TAG,
    CMP_REFVIEW_TAGS_HEADER,
    CMP_REFVIEW_TITLE,
)
from ..window import LineBuilder, RenderWindow, ViewDimension
from .cursor import ViewPos
from .listeners import RefListener, RefListenerRegistry
from .rows import (
    GROUP_ROW_KINDS,
    LEAF_ROW_KINDS,
    RV_BRANCH,
    RV_BRANCH_GROUP,
    RV_TAG,
    RV_TAG_GROUP,
    RefGroup,
    RefSnapshot,
    RenderedRef,
    default_ref_groups,
    detached_head_display_value,
    generate_rendered_refs,
    head_branch_row_index,
)

if TYPE_CHECKING:
    from ..repo.git import GitRepoData
    from ..runtime.channels import Channels

logger = logging.getLogger(__name__)

REF_THEME_COMPONENTS: dict[str, str] = {
    RV_BRANCH_GROUP: CMP_REFVIEW_BRANCHES_HEADER,
    RV_BRANCH: CMP_REFVIEW_BRANCH,
    RV_TAG_GROUP: CMP_REFVIEW_TAGS_HEADER,
    RV_TAG: CMP_REFVIEW_TAG,
}

REF_VIEW_TITLE = "Refs"


class RefView:
    """List of local branches and tags with cursor, scrolling, and selection."""

    def __init__(
        self,
        repo_data: GitRepoData,
        channels: Channels,
        key_registry: KeyActionRegistry | None = None,
    ) -> None:
        self.repo_data = repo_data
        self.channels = channels
        self.key_registry = key_registry or default_key_registry()
        self.ref_groups: list[RefGroup] = default_ref_groups()
        self.rendered_refs: list[RenderedRef] = []
        self.view_pos = ViewPos()
        self.view_dimension = ViewDimension(rows=0, cols=0)
        self.active = False
        self._listeners = RefListenerRegistry()
        self._loads_issued = False
        self._initialised = False
        self._lock = threading.Lock()
        self._handlers: dict[str, Callable[[], None]] = {
            ACTION_PREV_LINE: self._move_up_ref,
            ACTION_NEXT_LINE: self._move_down_ref,
            ACTION_SCROLL_RIGHT: self._scroll_right,
            ACTION_SCROLL_LEFT: self._scroll_left,
            ACTION_FIRST_LINE: self._move_to_first_ref,
            ACTION_LAST_LINE: self._move_to_last_ref,
            ACTION_SELECT: self._select_ref,
        }

    def view_id(self) -> str:
        return VIEW_REF

    def register_ref_listener(self, listener: RefListener) -> None:
        """Append ``listener``; listeners are never removed."""
        self._listeners.register(listener)

    def initialise(self) -> None:
        """Load HEAD, start branch/tag loads, and announce the starting ref.

        Raises ``DataLoadError`` when HEAD cannot be read or a load cannot be
        started, and ``RefListenerError`` when a listener rejects the starting
        ref. Calling again after success does nothing.
        """
        if self._initialised:
            return
        logger.info("Initialising RefView")

        if not self._loads_issued:
            self.repo_data.load_head()
            self.repo_data.load_local_branches(self._on_branches_loaded)
            self.repo_data.load_local_tags(self._on_tags_loaded)
            self._loads_issued = True

        with self._lock:
            self._generate_rendered_refs()

        head, head_branch = self.repo_data.head()
        branch_name = head_branch.name if head_branch is not None else detached_head_display_value(head)
        self._listeners.notify(branch_name, head)
        self._initialised = True

    def _on_branches_loaded(self, branches: list[Branch]) -> None:
        logger.debug("Local branches loaded: %d", len(branches))
        with self._lock:
            snapshot = self._generate_rendered_refs()
            row_index = head_branch_row_index(self.rendered_refs, snapshot)
            if row_index is not None:
                self.view_pos.active_row_index = row_index
        self.channels.update_display()

    def _on_tags_loaded(self, tags: list[Tag]) -> None:
        logger.debug("Local tags loaded: %d", len(tags))
        with self._lock:
            self._generate_rendered_refs()
        self.channels.update_display()

    def _ref_snapshot(self) -> RefSnapshot:
        head, head_branch = self.repo_data.head()
        branches, branches_loading = self.repo_data.local_branches()
        tags, tags_loading = self.repo_data.local_tags()
        return RefSnapshot(
            head=head,
            head_branch=head_branch,
            branches=tuple(branches),
            branches_loading=branches_loading,
            tags=tuple(tags),
            tags_loading=tags_loading,
        )

    def _is_selectable(self, index: int) -> bool:
        return self.rendered_refs[index].selectable

    def _generate_rendered_refs(self) -> RefSnapshot:
        logger.debug("Generating rendered refs")
        snapshot = self._ref_snapshot()
        self.rendered_refs = generate_rendered_refs(self.ref_groups, snapshot)
        self._keep_cursor_on_selectable_row()
        return snapshot

    def _keep_cursor_on_selectable_row(self) -> None:
        """Pull the cursor back onto a header or leaf after the rows changed."""
        row_count = len(self.rendered_refs)
        view_pos = self.view_pos
        if row_count == 0:
            view_pos.active_row_index = 0
            return
        index = min(view_pos.active_row_index, row_count - 1)
        while index > 0 and not self._is_selectable(index):
            index -= 1
        view_pos.active_row_index = index

    def render(self, win: RenderWindow) -> None:
        logger.debug("Rendering RefView")
        with self._lock:
            self.view_dimension = win.view_dimensions()
            rows = max(0, win.rows - 2)
            ref_count = len(self.rendered_refs)
            view_pos = self.view_pos
            view_pos.determine_view_start_row(rows)
            ref_index = view_pos.view_start_row_index

            for win_row_index in range(rows):
                if ref_index >= ref_count:
                    break
                rendered_ref = self.rendered_refs[ref_index]
                component = REF_THEME_COMPONENTS.get(rendered_ref.kind, CMP_NONE)
                win.set_row(win_row_index + 1, view_pos.view_start_column, component, rendered_ref.value)
                ref_index += 1

            if rows > 0 and ref_count > 0:
                win.set_selected_row(view_pos.active_row_index - view_pos.view_start_row_index + 1, self.active)

            win.draw_border()
            win.set_title(CMP_REFVIEW_TITLE, REF_VIEW_TITLE)

            if ref_count > 0:
                footer = self._footer_text(self.rendered_refs[view_pos.active_row_index])
                if footer:
                    win.set_footer(CMP_REFVIEW_FOOTER, footer)

    def _footer_text(self, rendered_ref: RenderedRef) -> str:
        snapshot = self._ref_snapshot()
        kind = rendered_ref.kind
        if kind == RV_BRANCH_GROUP:
            if snapshot.branches_loading:
                return "Branches: Loading..."
            return f"Branches: {snapshot.branch_row_count()}"
        if kind == RV_BRANCH:
            return f"Branch {rendered_ref.ref_num} of {snapshot.branch_row_count()}"
        if kind == RV_TAG_GROUP:
            if snapshot.tags_loading:
                return "Tags: Loading..."
            return f"Tags: {len(snapshot.tags)}"
        if kind == RV_TAG:
            return f"Tag {rendered_ref.ref_num} of {len(snapshot.tags)}"
        logger.debug("No footer for ref row kind %s", kind)
        return ""

    def render_status_bar(self, line_builder: LineBuilder) -> None:
        return None

    def render_help_bar(self, line_builder: LineBuilder) -> None:
        render_key_binding_help(
            line_builder,
            self.key_registry,
            [ActionMessage(ACTION_SELECT, "Select")],
        )

    def on_active_change(self, active: bool) -> None:
        logger.debug("RefView active: %s", active)
        with self._lock:
            self.active = active

    def handle_key_press(self, key: str) -> None:
        logger.debug("RefView handling key %r - NOP", key)

    def handle_action(self, action: str) -> None:
        """Run the handler bound to ``action``; unknown actions are ignored."""
        logger.debug("RefView handling action %s", action)
        with self._lock:
            handler = self._handlers.get(action)
            if handler is not None:
                handler()

    def _move_up_ref(self) -> None:
        if self.view_pos.step_to_selectable(-1, len(self.rendered_refs), self._is_selectable):
            logger.debug("Moved up to ref row %d", self.view_pos.active_row_index)
            self.channels.update_display()
        else:
            logger.debug("No valid ref entry to move to")

    def _move_down_ref(self) -> None:
        if self.view_pos.step_to_selectable(1, len(self.rendered_refs), self._is_selectable):
            logger.debug("Moved down to ref row %d", self.view_pos.active_row_index)
            self.channels.update_display()
        else:
            logger.debug("No valid ref entry to move to")

    def _page_cols(self) -> int:
        return max(0, self.view_dimension.cols - 2)

    def _scroll_right(self) -> None:
        if self.view_pos.move_page_right(self._page_cols()):
            logger.debug("Scrolling right. View starts at column %d", self.view_pos.view_start_column)
            self.channels.update_display()

    def _scroll_left(self) -> None:
        if self.view_pos.move_page_left(self._page_cols()):
            logger.debug("Scrolling left. View starts at column %d", self.view_pos.view_start_column)
            self.channels.update_display()

    def _move_to_first_ref(self) -> None:
        if self.view_pos.move_to_first_line():
            logger.debug("Moving to first ref")
            self.channels.update_display()

    def _move_to_last_ref(self) -> None:
        if self.view_pos.move_to_last_line(len(self.rendered_refs), self._is_selectable):
            logger.debug("Moving to last ref")
            self.channels.update_display()

    def _select_ref(self) -> None:
        if not self.rendered_refs:
            return
        rendered_ref = self.rendered_refs[self.view_pos.active_row_index]

        if rendered_ref.kind in GROUP_ROW_KINDS:
            group = rendered_ref.group
            group.expanded = not group.expanded
            logger.debug("Setting ref group %s to expanded %s", group.name, group.expanded)
            self._generate_rendered_refs()
            self.channels.update_display()
        elif rendered_ref.kind in LEAF_ROW_KINDS:
            logger.debug("Selecting ref %s:%s", rendered_ref.ref_name(), rendered_ref.oid)
            self._listeners.notify(rendered_ref.ref_name(), rendered_ref.oid)
            self.channels.update_display()
        else:
            logger.warning("Unexpected ref type %s", rendered_ref.kind)


__all__ = ["RefView", "REF_THEME_COMPONENTS", "REF_VIEW_TITLE"]

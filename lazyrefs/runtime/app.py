"""Browser composition: ref view on the left, commit view on the right.

``BrowserApp`` owns focus, pane geometry, and the transient status message.
It turns key tokens into view actions and renders both views plus the
status and help bars into one frame of terminal lines.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from ..actions import (
    ACTION_GROW_REF_PANE,
    ACTION_NEXT_VIEW,
    ACTION_QUIT,
    ACTION_SHRINK_REF_PANE,
    ActionMessage,
    KeyActionRegistry,
    default_key_registry,
    render_key_binding_help,
)
from ..commit_view import CommitView
from ..errors import LazyRefsError
from ..ref_view import RefView
from ..ui_theme import CMP_STATUSBAR, UITheme, resolve_theme
from ..window import LineBuilder, RenderWindow
from .channels import Channels
from .config import DEFAULT_REF_PANE_PERCENT, load_ref_pane_percent, save_ref_pane_percent

if TYPE_CHECKING:
    from ..repo.git import GitRepoData

logger = logging.getLogger(__name__)

MIN_PANE_COLS = 12
PANE_RESIZE_STEP = 2
BAR_ROWS = 2


def compute_ref_width(columns: int, percent: float) -> int:
    """Return the ref pane width for ``columns``, leaving room for the commit pane."""
    if columns <= 2 * MIN_PANE_COLS:
        return max(0, columns // 2)
    width = int(round((percent / 100.0) * columns))
    return max(MIN_PANE_COLS, min(columns - MIN_PANE_COLS, width))


class BrowserApp:
    def __init__(
        self,
        repo_data: GitRepoData,
        channels: Channels,
        theme: UITheme,
        ref_pane_percent: float = DEFAULT_REF_PANE_PERCENT,
        key_registry: KeyActionRegistry | None = None,
    ) -> None:
        self.channels = channels
        self.theme = theme
        self.ref_pane_percent = ref_pane_percent
        self.key_registry = key_registry or default_key_registry()
        self.ref_view = RefView(repo_data, channels, self.key_registry)
        self.commit_view = CommitView(repo_data, channels)
        self.ref_view.register_ref_listener(self.commit_view.on_ref_select)
        self.views = [self.ref_view, self.commit_view]
        self.active_view_index = 0
        self.status_message = ""
        self._last_columns = 0

    @property
    def active_view(self):
        return self.views[self.active_view_index]

    def initialise(self) -> None:
        """Initialise the commit view first so it can receive the starting ref."""
        self.commit_view.initialise()
        self.ref_view.initialise()
        self.active_view.on_active_change(True)

    def next_view(self) -> None:
        self.active_view.on_active_change(False)
        self.active_view_index = (self.active_view_index + 1) % len(self.views)
        self.active_view.on_active_change(True)
        logger.debug("Focused view %s", self.active_view.view_id())
        self.channels.update_display()

    def resize_ref_pane(self, delta: int) -> None:
        columns = self._last_columns
        if columns <= 2 * MIN_PANE_COLS:
            return
        current = compute_ref_width(columns, self.ref_pane_percent)
        target = max(MIN_PANE_COLS, min(columns - MIN_PANE_COLS, current + delta))
        if target == current:
            return
        self.ref_pane_percent = (target / columns) * 100.0
        save_ref_pane_percent(columns, target)
        self.channels.update_display()

    def handle_key(self, key: str) -> bool:
        """Dispatch one key token; return ``True`` when the browser should quit."""
        self.status_message = ""
        action = self.key_registry.action_for(key)
        if action == ACTION_QUIT:
            return True
        try:
            if action == ACTION_NEXT_VIEW:
                self.next_view()
            elif action == ACTION_SHRINK_REF_PANE:
                self.resize_ref_pane(-PANE_RESIZE_STEP)
            elif action == ACTION_GROW_REF_PANE:
                self.resize_ref_pane(PANE_RESIZE_STEP)
            elif action is not None:
                self.active_view.handle_action(action)
            else:
                self.active_view.handle_key_press(key)
        except LazyRefsError as exc:
            logger.exception("Action for key %r failed", key)
            self.status_message = str(exc)
            self.channels.update_display()
        return False

    def _render_view(self, view, win: RenderWindow) -> None:
        try:
            view.render(win)
        except LazyRefsError as exc:
            logger.exception("Rendering %s view failed", view.view_id())
            self.status_message = str(exc)
            win.clear()
            win.draw_border()

    def compose_frame(self, columns: int, lines: int) -> list[str]:
        """Render both panes and the two bars into ``lines`` rows of ``columns`` width."""
        self._last_columns = columns
        content_rows = max(0, lines - BAR_ROWS)
        ref_width = compute_ref_width(columns, self.ref_pane_percent)
        ref_win = RenderWindow("ref", content_rows, ref_width, self.theme)
        commit_win = RenderWindow("commit", content_rows, columns - ref_width, self.theme)
        self._render_view(self.ref_view, ref_win)
        self._render_view(self.commit_view, commit_win)

        out = [left + right for left, right in zip(ref_win.lines(), commit_win.lines())]

        status_bar = LineBuilder(columns, self.theme)
        if self.status_message:
            status_bar.append(CMP_STATUSBAR, f" {self.status_message}")
        else:
            self.active_view.render_status_bar(status_bar)
        help_bar = LineBuilder(columns, self.theme)
        self.active_view.render_help_bar(help_bar)
        render_key_binding_help(
            help_bar,
            self.key_registry,
            [ActionMessage(ACTION_NEXT_VIEW, "Switch view"), ActionMessage(ACTION_QUIT, "Quit")],
        )
        out.append(status_bar.build())
        out.append(help_bar.build())
        return out[: max(0, lines)]


def write_frame(lines: list[str]) -> None:
    out = "\033[H\033[J" + "\r\n".join(lines)
    os.write(sys.stdout.fileno(), out.encode("utf-8", errors="replace"))


def run_browser(repo_root: Path, theme_name: str | None, no_color: bool) -> None:
    """Build the browser for ``repo_root`` and run it until the user quits.

    ``DataLoadError`` from the initial HEAD read propagates before the
    terminal is switched into raw mode.
    """
    from ..repo.git import GitRepoData
    from .loop import run_main_loop
    from .terminal import TerminalController

    channels = Channels()
    repo_data = GitRepoData(repo_root, channels)
    app = BrowserApp(
        repo_data,
        channels,
        resolve_theme(theme_name, no_color=no_color),
        ref_pane_percent=load_ref_pane_percent(),
    )
    app.initialise()

    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    run_main_loop(app, terminal, stdin_fd, channels, write_frame)


__all__ = [
    "MIN_PANE_COLS",
    "BrowserApp",
    "compute_ref_width",
    "write_frame",
    "run_browser",
]

"""Main interactive event loop for the terminal UI.

Repaints when a view or background load requests it or the terminal size
changes, and feeds decoded keys to the browser. Feature logic lives in
``BrowserApp``; this loop is only wiring.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..input import read_key
from .channels import Channels
from .terminal import TerminalController

if TYPE_CHECKING:
    from .app import BrowserApp

KEY_POLL_TIMEOUT_MS = 120


def run_main_loop(
    app: BrowserApp,
    terminal: TerminalController,
    stdin_fd: int,
    channels: Channels,
    write_frame: Callable[[list[str]], None],
    get_terminal_size: Callable[..., object] = shutil.get_terminal_size,
) -> None:
    """Run until ``app.handle_key`` reports a quit."""
    last_size: tuple[int, int] | None = None
    dirty = True
    skip_next_lf = False

    with terminal.raw_mode():
        while True:
            term = get_terminal_size((80, 24))
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                dirty = True
            if channels.consume_update():
                dirty = True
            if dirty:
                write_frame(app.compose_frame(term.columns, term.lines))
                dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=KEY_POLL_TIMEOUT_MS)
            except KeyboardInterrupt:
                continue
            if key == "":
                continue
            if skip_next_lf and key == "ENTER_LF":
                skip_next_lf = False
                continue

            # Terminals send CR, LF, or CRLF for Enter.
            if key == "ENTER_CR":
                key = "ENTER"
                skip_next_lf = True
            elif key == "ENTER_LF":
                key = "ENTER"
                skip_next_lf = False
            else:
                skip_next_lf = False

            if app.handle_key(key):
                break
            dirty = True


__all__ = ["KEY_POLL_TIMEOUT_MS", "run_main_loop"]

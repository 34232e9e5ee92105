"""Cross-thread repaint requests.

Background loads and view handlers call ``update_display()`` from any thread;
the main loop consumes the request before drawing. Requests made between two
frames coalesce into a single repaint.
"""

from __future__ import annotations

import threading


class Channels:
    """Thread-safe display-update signal shared by views and data sources."""

    def __init__(self) -> None:
        self._display_update = threading.Event()

    def update_display(self) -> None:
        self._display_update.set()

    def consume_update(self) -> bool:
        """Return whether a repaint was requested, clearing the request."""
        if not self._display_update.is_set():
            return False
        self._display_update.clear()
        return True


__all__ = ["Channels"]

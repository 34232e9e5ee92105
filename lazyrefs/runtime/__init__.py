"""Public runtime orchestration entry points.

Groups the browser bootstrap (``run_browser``) and the event loop used by
the CLI and by tests.
"""

from __future__ import annotations


def run_browser(*args, **kwargs):
    """Lazily import the browser entrypoint to keep package imports light."""
    from .app import run_browser as _run_browser

    return _run_browser(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import the loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


__all__ = ["run_browser", "run_main_loop"]

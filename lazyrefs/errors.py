"""Exception types raised by the ref and commit views."""

from __future__ import annotations


class LazyRefsError(Exception):
    """Base class for all lazyrefs failures."""


class DataLoadError(LazyRefsError):
    """Repository data could not be loaded during view initialisation."""


class RefListenerError(LazyRefsError):
    """A ref listener failed; listeners registered after it were skipped.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, listener: object, ref_name: str) -> None:
        super().__init__(f"Ref listener {listener!r} failed for {ref_name!r}")
        self.listener = listener
        self.ref_name = ref_name


class ViewStateError(LazyRefsError):
    """A view was asked to draw state it was never told about."""


class WindowError(LazyRefsError):
    """A render call addressed a row outside the window."""


__all__ = [
    "LazyRefsError",
    "DataLoadError",
    "RefListenerError",
    "ViewStateError",
    "WindowError",
]

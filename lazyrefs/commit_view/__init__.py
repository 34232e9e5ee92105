"""Commit view with a per-ref viewport cache."""

from .view import CommitView, ViewIndex, format_commit_row

__all__ = ["CommitView", "ViewIndex", "format_commit_row"]

"""Ref view: grouped branch/tag list, its cursor, and selection listeners."""

from .cursor import ViewPos
from .listeners import RefListener, RefListenerRegistry
from .rows import (
    RV_BRANCH,
    RV_BRANCH_GROUP,
    RV_LOADING,
    RV_SPACE,
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
from .view import RefView

__all__ = [
    "ViewPos",
    "RefListener",
    "RefListenerRegistry",
    "RV_BRANCH",
    "RV_BRANCH_GROUP",
    "RV_LOADING",
    "RV_SPACE",
    "RV_TAG",
    "RV_TAG_GROUP",
    "RefGroup",
    "RefSnapshot",
    "RenderedRef",
    "default_ref_groups",
    "detached_head_display_value",
    "generate_rendered_refs",
    "head_branch_row_index",
    "RefView",
]

"""Row generation for the ref view.

Rows are rebuilt wholesale from a snapshot of group state and repository
data every time anything changes. Each group is a tagged record; member rows
are produced by a pure dispatch on the group's kind.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..repo.types import Branch, Oid, Tag

RV_BRANCH_GROUP = "branch_group"
RV_BRANCH = "branch"
RV_TAG_GROUP = "tag_group"
RV_TAG = "tag"
RV_SPACE = "space"
RV_LOADING = "loading"

SELECTABLE_ROW_KINDS = frozenset({RV_BRANCH_GROUP, RV_BRANCH, RV_TAG_GROUP, RV_TAG})
GROUP_ROW_KINDS = frozenset({RV_BRANCH_GROUP, RV_TAG_GROUP})
LEAF_ROW_KINDS = frozenset({RV_BRANCH, RV_TAG})

GROUP_BRANCHES = "branches"
GROUP_TAGS = "tags"

LOADING_DISPLAY_VALUE = "   Loading..."
MEMBER_INDENT = "   "


@dataclass
class RefGroup:
    """Named collapsible group of refs; ``kind`` selects its row rule."""

    name: str
    kind: str
    expanded: bool = False

    @property
    def header_kind(self) -> str:
        return RV_BRANCH_GROUP if self.kind == GROUP_BRANCHES else RV_TAG_GROUP

    def header_value(self) -> str:
        expand_char = "-" if self.expanded else "+"
        return f"  [{expand_char}] {self.name}"


@dataclass(frozen=True)
class RenderedRef:
    """One row of the flattened ref list."""

    value: str
    kind: str
    oid: Oid | None = None
    group: RefGroup | None = field(default=None, repr=False)
    ref_num: int = 0

    @property
    def selectable(self) -> bool:
        return self.kind in SELECTABLE_ROW_KINDS

    def ref_name(self) -> str:
        """Return the display value without leading indentation."""
        return self.value.lstrip(" ")


@dataclass(frozen=True)
class RefSnapshot:
    """Repository state the generator reads; ``head`` is ``None`` until loaded."""

    head: Oid | None = None
    head_branch: Branch | None = None
    branches: tuple[Branch, ...] = ()
    branches_loading: bool = True
    tags: tuple[Tag, ...] = ()
    tags_loading: bool = True

    @property
    def head_detached(self) -> bool:
        return self.head is not None and self.head_branch is None

    def branch_row_count(self) -> int:
        """Number of branch rows shown once loaded, including a detached HEAD row."""
        return len(self.branches) + (1 if self.head_detached else 0)


def default_ref_groups() -> list[RefGroup]:
    """Return the fixed groups in display order: Branches (expanded), Tags."""
    return [
        RefGroup(name="Branches", kind=GROUP_BRANCHES, expanded=True),
        RefGroup(name="Tags", kind=GROUP_TAGS),
    ]


def detached_head_display_value(oid: Oid) -> str:
    return f"HEAD detached at {oid.short()}"


def _loading_row(group: RefGroup) -> RenderedRef:
    return RenderedRef(value=LOADING_DISPLAY_VALUE, kind=RV_LOADING, group=group)


def _branch_rows(group: RefGroup, snapshot: RefSnapshot) -> list[RenderedRef]:
    if snapshot.branches_loading:
        return [_loading_row(group)]

    rows: list[RenderedRef] = []
    branch_num = 1
    if snapshot.head_detached:
        rows.append(
            RenderedRef(
                value=f"{MEMBER_INDENT}{detached_head_display_value(snapshot.head)}",
                kind=RV_BRANCH,
                oid=snapshot.head,
                group=group,
                ref_num=branch_num,
            )
        )
        branch_num += 1

    for branch in snapshot.branches:
        rows.append(
            RenderedRef(
                value=f"{MEMBER_INDENT}{branch.name}",
                kind=RV_BRANCH,
                oid=branch.oid,
                group=group,
                ref_num=branch_num,
            )
        )
        branch_num += 1
    return rows


def _tag_rows(group: RefGroup, snapshot: RefSnapshot) -> list[RenderedRef]:
    if snapshot.tags_loading:
        return [_loading_row(group)]
    return [
        RenderedRef(
            value=f"{MEMBER_INDENT}{tag.name}",
            kind=RV_TAG,
            oid=tag.oid,
            group=group,
            ref_num=tag_index + 1,
        )
        for tag_index, tag in enumerate(snapshot.tags)
    ]


def member_rows(group: RefGroup, snapshot: RefSnapshot) -> list[RenderedRef]:
    """Dispatch to the member-row rule for ``group.kind``."""
    if group.kind == GROUP_BRANCHES:
        return _branch_rows(group, snapshot)
    if group.kind == GROUP_TAGS:
        return _tag_rows(group, snapshot)
    return []


def generate_rendered_refs(groups: list[RefGroup], snapshot: RefSnapshot) -> list[RenderedRef]:
    """Flatten ``groups`` into display rows.

    Each group contributes its header, then its members when expanded, then a
    blank spacer unless it is the last group.
    """
    rendered_refs: list[RenderedRef] = []
    last_index = len(groups) - 1
    for group_index, group in enumerate(groups):
        rendered_refs.append(RenderedRef(value=group.header_value(), kind=group.header_kind, group=group))
        if group.expanded:
            rendered_refs.extend(member_rows(group, snapshot))
        if group_index != last_index:
            rendered_refs.append(RenderedRef(value="", kind=RV_SPACE))
    return rendered_refs


def head_branch_row_index(rendered_refs: list[RenderedRef], snapshot: RefSnapshot) -> int | None:
    """Return the row of the checked-out branch (or detached HEAD row).

    The index is the Branches header index + 1 + the branch's position in the
    loaded list. ``None`` when branches are collapsed, loading, or the head
    branch is not listed.
    """
    if snapshot.head is None or snapshot.branches_loading:
        return None
    header_index = next(
        (idx for idx, row in enumerate(rendered_refs) if row.kind == RV_BRANCH_GROUP),
        None,
    )
    if header_index is None or not rendered_refs[header_index].group.expanded:
        return None

    position = 0
    if snapshot.head_branch is not None:
        for branch in snapshot.branches:
            if branch.name == snapshot.head_branch.name:
                break
            position += 1
        else:
            return None

    row_index = header_index + 1 + position
    if row_index >= len(rendered_refs) or rendered_refs[row_index].kind != RV_BRANCH:
        return None
    return row_index


__all__ = [
    "RV_BRANCH_GROUP",
    "RV_BRANCH",
    "RV_TAG_GROUP",
    "RV_TAG",
    "RV_SPACE",
    "RV_LOADING",
    "SELECTABLE_ROW_KINDS",
    "GROUP_ROW_KINDS",
    "LEAF_ROW_KINDS",
    "GROUP_BRANCHES",
    "GROUP_TAGS",
    "RefGroup",
    "RenderedRef",
    "RefSnapshot",
    "default_ref_groups",
    "detached_head_display_value",
    "member_rows",
    "generate_rendered_refs",
    "head_branch_row_index",
]

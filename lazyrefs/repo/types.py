"""Value types shared by the repository data source and the views."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

OID_SHORT_LENGTH = 7


@dataclass(frozen=True)
class Oid:
    """Git object id compared and hashed by its hex string."""

    id: str

    def short(self) -> str:
        """Return the abbreviated hex prefix used in display text."""
        return self.id[:OID_SHORT_LENGTH]

    def __str__(self) -> str:
        return self.id


@dataclass(frozen=True)
class Branch:
    name: str
    oid: Oid


@dataclass(frozen=True)
class Tag:
    name: str
    oid: Oid


@dataclass(frozen=True)
class Commit:
    """One entry of a branch history as shown by the commit view."""

    oid: Oid
    author_name: str
    author_when: datetime
    summary: str

"""Ordered fan-out of ref selections to dependent views."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..errors import RefListenerError
from ..repo.types import Oid

logger = logging.getLogger(__name__)

RefListener = Callable[[str, Oid], None]


class RefListenerRegistry:
    """Append-only list of listeners notified in registration order.

    Notification is not transactional: when a listener raises, the ones after
    it are skipped and the ones before it keep whatever they already did.
    """

    def __init__(self) -> None:
        self._listeners: list[RefListener] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def register(self, listener: RefListener) -> None:
        self._listeners.append(listener)

    def notify(self, ref_name: str, oid: Oid) -> None:
        """Call every listener with ``(ref_name, oid)``, stopping at the first failure."""
        logger.debug("Notifying ref listeners of selected oid %s", oid)
        for listener in list(self._listeners):
            try:
                listener(ref_name, oid)
            except Exception as exc:
                logger.debug("Ref listener %r failed for %s", listener, ref_name)
                raise RefListenerError(listener, ref_name) from exc


__all__ = ["RefListener", "RefListenerRegistry"]

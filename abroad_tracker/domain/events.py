from __future__ import annotations

import logging
from collections import defaultdict
from typing import Awaitable, Callable, Iterable

logger = logging.getLogger(__name__)

ChangeHandler = Callable[[str], Awaitable[None]]


class ChangeBus:
    """
    Per-collection change notifications.

    Repositories publish the store key they have just written; subscribers
    register for the keys they derive from and are awaited in subscription order.
    A failing handler is logged and does not stop the ones after it.
    """

    def __init__(self):
        self._handlers: dict[str, list[ChangeHandler]] = defaultdict(list)

    def subscribe(self, keys: Iterable[str], handler: ChangeHandler) -> Callable[[], None]:
        keys = tuple(keys)
        for key in keys:
            self._handlers[key].append(handler)

        def unsubscribe() -> None:
            for key in keys:
                handlers = self._handlers.get(key, [])
                if handler in handlers:
                    handlers.remove(handler)

        return unsubscribe

    async def publish(self, key: str) -> None:
        handlers = list(self._handlers.get(key, ()))
        if not handlers:
            return
        logger.debug("Publishing change for %s to %d handler(s)", key, len(handlers))
        for handler in handlers:
            try:
                await handler(key)
            except Exception:
                logger.exception("Change handler %r failed for %s", handler, key)

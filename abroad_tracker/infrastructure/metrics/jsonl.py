from __future__ import annotations

import functools
import json
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Callable, Optional


class MetricsClient:
    """
    Timing of store operations, one JSON object per line:

        {"ts": ..., "op": "store:get", "key": "dwg_unis", "ms": 0.412, "ok": true}

    Lines go to the ``metrics.actions`` logger; ``configure_metrics_logger``
    points that logger at a rotated file.
    """

    def __init__(self):
        self._logger = logging.getLogger("metrics.actions")

    def configure(self, logger: Optional[logging.Logger] = None) -> None:
        if logger:
            self._logger = logger

    def _emit(self, op: str, elapsed: float, ok: bool, *, source: Optional[str], key: Optional[str]) -> None:
        line = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "op": op,
            "ms": round(elapsed * 1000, 3),
            "ok": ok,
        }
        if key is not None:
            line["key"] = key
        if source:
            line["source"] = source
        self._logger.info(json.dumps(line, ensure_ascii=False))

    @asynccontextmanager
    async def span_async(self, op: str, *, source: Optional[str] = None, key: Optional[str] = None):
        start = time.perf_counter()
        ok = True
        try:
            yield
        except Exception:
            ok = False
            raise
        finally:
            self._emit(op, time.perf_counter() - start, ok, source=source, key=key)

    def wrap_async(self, op: str, *, source: Optional[str] = None, key_fn: Optional[Callable[..., str]] = None):
        """Time every call of an async function; ``key_fn`` picks the store key from its arguments."""

        def decorator(func):
            @functools.wraps(func)
            async def wrapper(*args, **kwargs):
                key = key_fn(*args, **kwargs) if key_fn else None
                async with self.span_async(op, source=source, key=key):
                    return await func(*args, **kwargs)

            return wrapper

        return decorator


metrics = MetricsClient()

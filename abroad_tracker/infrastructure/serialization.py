from __future__ import annotations

import json
from typing import Any

from ..domain.errors import StorageReadFailure


def dump_value(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def load_value(key: str, raw: str | bytes | None) -> Any:
    if raw is None:
        raise StorageReadFailure(key, "no value")
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise StorageReadFailure(key, str(exc)) from exc

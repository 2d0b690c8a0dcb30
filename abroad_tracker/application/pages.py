from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Page:
    text: str
    title: str = ""
    notices: List[str] = field(default_factory=list)

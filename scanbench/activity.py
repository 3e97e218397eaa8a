"""
Process-wide log of generated payloads, read by reporting views.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Deque, Dict, List, Optional


def _now_local() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


@dataclass(frozen=True)
class ActivityEntry:
    kind: str
    payload: str
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return {'kind': self.kind, 'payload': self.payload, 'timestamp': self.timestamp}


class ActivityLog:
    """
    Append-only record of every newly generated payload.

    Oldest entries are dropped once max_entries is reached; None keeps all.
    """

    def __init__(self, max_entries: Optional[int] = 500):
        self._entries: Deque[ActivityEntry] = deque(maxlen=max_entries or None)

    def add(self, kind: str, payload: str) -> ActivityEntry:
        entry = ActivityEntry(kind=str(getattr(kind, 'value', kind)), payload=payload, timestamp=_now_local())
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> List[ActivityEntry]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

"""
Playback session state for one tab's carousel.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set, Tuple, Union

from ..errors import InvalidInputError
from ..models import BarcodeFormat, Item


class RotationState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class DoubleScanMode(str, Enum):
    """Two-code pairing used to exercise multi-scan register logic."""
    SAME_DM = "sameDM"
    DM_EAN = "dmEan"
    SAME_EAN = "sameEan"
    DIFFERENT_DM = "differentDM"


def coerce_double_scan_mode(mode: Union[str, DoubleScanMode]) -> DoubleScanMode:
    try:
        return DoubleScanMode(mode)
    except ValueError:
        raise InvalidInputError(f"Unknown double-scan mode: {mode!r}") from None


class DoubleScanSelector:
    """At most one double-scan mode is active; selecting one clears the rest."""

    def __init__(self, mode: Optional[Union[str, DoubleScanMode]] = None):
        self._mode: Optional[DoubleScanMode] = coerce_double_scan_mode(mode) if mode else None

    @property
    def mode(self) -> Optional[DoubleScanMode]:
        return self._mode

    def select(self, mode: Optional[Union[str, DoubleScanMode]]) -> Optional[DoubleScanMode]:
        self._mode = coerce_double_scan_mode(mode) if mode else None
        return self._mode

    def set_enabled(self, mode: Union[str, DoubleScanMode], enabled: bool) -> Optional[DoubleScanMode]:
        """Checkbox semantics: checking selects, unchecking only clears itself."""
        mode = coerce_double_scan_mode(mode)
        if enabled:
            self._mode = mode
        elif self._mode is mode:
            self._mode = None
        return self._mode

    def clear(self) -> None:
        self._mode = None

    def is_active(self, mode: Union[str, DoubleScanMode]) -> bool:
        return self._mode is coerce_double_scan_mode(mode)


@dataclass(frozen=True)
class SecondaryCode:
    payload: str
    format: BarcodeFormat
    source_value: Optional[str] = None


@dataclass(frozen=True)
class HistoryEntry:
    """
    Everything needed to redisplay a generated payload without re-encoding.

    Attributes:
        source_index: Index into the session items (or demo counter)
        total: Size of the list the index refers to
        primary_display_as_ean: Primary is shown as its GTIN EAN-13
        secondary: Second code of a double-scan pairing
    """
    payload: str
    source_index: int
    total: int
    source_value: str
    format: BarcodeFormat
    kind: str
    template_name: Optional[str] = None
    double_scan: Optional[DoubleScanMode] = None
    primary_display_as_ean: bool = False
    primary_ean13: Optional[str] = None
    secondary: Optional[SecondaryCode] = None

    @property
    def display_payload(self) -> str:
        if self.primary_display_as_ean and self.primary_ean13:
            return self.primary_ean13
        return self.payload

    @property
    def display_format(self) -> BarcodeFormat:
        if self.primary_display_as_ean and self.primary_ean13:
            return BarcodeFormat.EAN13
        return self.format

    @property
    def counter_label(self) -> str:
        total = max(self.total, 1)
        return f"{(self.source_index % total) + 1}/{total}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'payload': self.payload,
            'display_payload': self.display_payload,
            'format': self.display_format.value,
            'source_value': self.source_value,
            'source_index': self.source_index,
            'counter': self.counter_label,
            'kind': self.kind,
            'template_name': self.template_name,
            'double_scan': self.double_scan.value if self.double_scan else None,
            'secondary': {
                'payload': self.secondary.payload,
                'format': self.secondary.format.value,
                'source_value': self.secondary.source_value,
            } if self.secondary else None,
        }


@dataclass
class RotationSession:
    """
    Live playback state, created by start and discarded by stop.

    `cursor` is the next item to generate; `history_cursor` is the entry on
    screen and never exceeds len(history) - 1.
    """
    items: Tuple[Item, ...]
    interval_seconds: float
    remaining_seconds: float
    cursor: int = 0
    is_running: bool = False
    history: List[HistoryEntry] = field(default_factory=list)
    history_cursor: int = -1
    failed_indices: Set[int] = field(default_factory=set)

    @property
    def size(self) -> int:
        return len(self.items)

    @property
    def current(self) -> Optional[HistoryEntry]:
        if 0 <= self.history_cursor < len(self.history):
            return self.history[self.history_cursor]
        return None

    @property
    def at_history_end(self) -> bool:
        return self.history_cursor >= len(self.history) - 1

    def seen_indices(self) -> Set[int]:
        return {entry.source_index for entry in self.history}

    @property
    def all_seen(self) -> bool:
        """Every item has been generated once (items that cannot be encoded count as seen)."""
        if not self.history:
            return False
        return len(self.seen_indices() | self.failed_indices) >= self.size

    def record(self, entry: HistoryEntry) -> None:
        self.history.append(entry)
        self.history_cursor = len(self.history) - 1
        self.cursor = (entry.source_index + 1) % self.size

    def move_to(self, index: int) -> HistoryEntry:
        self.history_cursor = index
        return self.history[index]

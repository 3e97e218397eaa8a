"""
Rotation engine: session state, payload production and the playback controller.
"""

from .session import (
    RotationState,
    RotationSession,
    DoubleScanMode,
    DoubleScanSelector,
    HistoryEntry,
    SecondaryCode,
)
from .producers import ItemProducer
from .controller import RotationController, parse_interval
from .timer import IntervalTimer, ManualTimer

__all__ = [
    "RotationState",
    "RotationSession",
    "DoubleScanMode",
    "DoubleScanSelector",
    "HistoryEntry",
    "SecondaryCode",
    "ItemProducer",
    "RotationController",
    "parse_interval",
    "IntervalTimer",
    "ManualTimer",
]

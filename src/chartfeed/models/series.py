"""Chart series point models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class VwapPoint:
    """One point of an anchored VWAP line.

    Attributes:
        time: Calendar date, ``YYYY-MM-DD``.
        value: Running VWAP, or None while cumulative volume is still zero.
    """

    time: str
    value: float | None

    @property
    def is_defined(self) -> bool:
        return self.value is not None

    def to_dict(self) -> dict[str, Any]:
        # A point without a value renders as a gap (whitespace point).
        if self.value is None:
            return {"time": self.time}
        return {"time": self.time, "value": self.value}


@dataclass(frozen=True)
class VolumePoint:
    """One histogram bar of the volume series.

    Attributes:
        time: Calendar date, ``YYYY-MM-DD``.
        value: Traded volume of the source bar.
        color: Display colour keyed by the direction of the source bar.
    """

    time: str
    value: float
    color: str

    def to_dict(self) -> dict[str, Any]:
        return {"time": self.time, "value": self.value, "color": self.color}


@dataclass(frozen=True)
class LogicalRange:
    """Inclusive pair of logical bar indices for the initial chart view."""

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start + 1

    def to_dict(self) -> dict[str, int]:
        return {"from": self.start, "to": self.end}

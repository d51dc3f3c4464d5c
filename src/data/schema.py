"""
Raw sample schema for the sensor pipeline.

A RawSample is one instantaneous reading delivered by the platform sensor
subsystem: three axes for the accelerometer, a single value for keystroke
latency. Samples are immutable and are discarded once the sliding buffer
evicts them.

Design rationale:
- Plain frozen dataclass rather than a pydantic model: samples arrive at
  sensor rate and are validated structurally by the buffer, not per field
- Values are stored as floats in fixed axis order (x, y, z)
- Timestamp is optional; the core never looks at it, the host may
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple


@dataclass(frozen=True)
class RawSample:
    """
    One multi-axis sensor reading.
    
    Attributes:
        values: Axis values in fixed order (x, y, z for the accelerometer)
        timestamp_ms: Sensor timestamp in milliseconds (optional)
    
    Notes:
        - Axis count is checked against the channel when buffered
        - Equality is value based, so identical readings compare equal
    """
    
    values: Tuple[float, ...]
    timestamp_ms: Optional[float] = None
    
    @classmethod
    def of(cls, values: Iterable[float], timestamp_ms: Optional[float] = None) -> "RawSample":
        """Build a sample from any iterable of numbers."""
        return cls(values=tuple(float(v) for v in values), timestamp_ms=timestamp_ms)
    
    @classmethod
    def xyz(cls, x: float, y: float, z: float, timestamp_ms: Optional[float] = None) -> "RawSample":
        """Build a 3-axis accelerometer sample."""
        return cls(values=(float(x), float(y), float(z)), timestamp_ms=timestamp_ms)
    
    @property
    def num_axes(self) -> int:
        return len(self.values)

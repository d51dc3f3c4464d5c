"""
Keystroke latency extraction.

Turns key-press timestamps captured by the UI into inter-key latencies
(milliseconds), the raw samples of the typing channel.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .schema import RawSample


@dataclass
class KeystrokeLatencyTracker:
    """
    Tracks the time between consecutive key presses.

    The first press only records its timestamp; every later press yields
    the latency since the previous one.
    """

    _last_press_ms: Optional[float] = None

    def record_key_press(self, timestamp_ms: float) -> Optional[RawSample]:
        previous = self._last_press_ms
        self._last_press_ms = float(timestamp_ms)
        if previous is None:
            return None
        return RawSample.of([self._last_press_ms - previous], timestamp_ms=self._last_press_ms)

    def on_text_changed(self, removed: int, added: int, timestamp_ms: float) -> Optional[RawSample]:
        """
        Text-change hook: only edits that grow the text count as key presses.

        Deletions and replacements of equal length are ignored.
        """
        if added <= removed:
            return None
        return self.record_key_press(timestamp_ms)

    def reset(self) -> None:
        self._last_press_ms = None

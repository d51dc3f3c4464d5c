"""
Replay recorded sensor data through the anomaly monitor.

Reads an accelerometer CSV (x, y, z columns, optional timestamp_ms) and an
optional keystroke CSV (timestamp_ms column), feeds every row to the
monitor, and prints one JSON line per prediction.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterator, Optional

import pandas as pd
from dotenv import load_dotenv

from src.core.config import ChannelAssets, config
from src.core.logging_config import setup_logging

from .monitor import SensorMonitor

load_dotenv()

logger = logging.getLogger("host")


def _channel_assets(
    base: ChannelAssets, config_path: Optional[Path], model_path: Optional[Path]
) -> ChannelAssets:
    return ChannelAssets(
        config_path=config_path or base.config_path,
        model_path=model_path or base.model_path,
    )


def _read_frame(path: Path, columns) -> pd.DataFrame:
    frame = pd.read_csv(path)
    missing = [c for c in columns if c not in frame.columns]
    if missing:
        raise SystemExit(f"{path}: missing columns {missing}")
    return frame


def replay(
    monitor: SensorMonitor, samples: pd.DataFrame, keystrokes: Optional[pd.DataFrame] = None
) -> Iterator[dict]:
    """Yield one record per prediction, accelerometer rows first, then keystrokes."""
    has_ts = "timestamp_ms" in samples.columns
    for index, row in enumerate(samples.itertuples(index=False)):
        timestamp = float(row.timestamp_ms) if has_ts else None
        for result in monitor.on_accelerometer(row.x, row.y, row.z, timestamp_ms=timestamp):
            yield {"row": index, **result.model_dump()}

    if keystrokes is None:
        return
    for index, ts in enumerate(keystrokes["timestamp_ms"]):
        result = monitor.on_key_press(float(ts))
        if result is not None:
            yield {"row": index, **result.model_dump()}


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Replay sensor recordings through the anomaly detectors")
    parser.add_argument("samples", type=Path, help="Accelerometer CSV with x,y,z columns")
    parser.add_argument("--keystrokes", type=Path, default=None, help="CSV with a timestamp_ms column")
    parser.add_argument("--accelerometer-config", type=Path, default=None)
    parser.add_argument("--accelerometer-model", type=Path, default=None)
    parser.add_argument("--movement-config", type=Path, default=None)
    parser.add_argument("--movement-model", type=Path, default=None)
    parser.add_argument("--typing-config", type=Path, default=None)
    parser.add_argument("--typing-model", type=Path, default=None)
    args = parser.parse_args(argv)

    for name in ("src", "inference", "host"):
        setup_logging(name)

    samples = _read_frame(args.samples, ["x", "y", "z"])
    keystrokes = _read_frame(args.keystrokes, ["timestamp_ms"]) if args.keystrokes else None

    monitor = SensorMonitor.from_assets(
        accelerometer=_channel_assets(config.accelerometer, args.accelerometer_config, args.accelerometer_model),
        movement=_channel_assets(config.movement, args.movement_config, args.movement_model),
        keystrokes=_channel_assets(config.keystrokes, args.typing_config, args.typing_model),
        engine=config.engine,
        latency_divisor=config.keystroke_latency_divisor,
    )
    if monitor.degraded:
        logger.warning("Running in degraded mode for: %s", ", ".join(monitor.degraded))

    try:
        count = 0
        for record in replay(monitor, samples, keystrokes):
            sys.stdout.write(json.dumps(record) + "\n")
            count += 1
        logger.info("Replay finished: %d predictions", count)
        logger.info("Final status: %s", monitor.status_text().replace("\n", " | "))
    finally:
        monitor.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())

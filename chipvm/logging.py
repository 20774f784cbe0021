"""Console logging utilities for chipvm runs.

This module provides a small logging system with callbacks and formatters
for visibility into the frame loop and emulator state, plus a tqdm progress
bar for headless runs.
"""

import sys
import time
from typing import Any, Dict, Iterator, List, Optional

from tqdm import tqdm


class ConsoleLogger:
    """Flexible console logger with callback system and formatters."""

    def __init__(
        self,
        name: str = "chipvm",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream=None,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.stream = stream if stream is not None else sys.stderr
        self.use_colors = (
            use_colors and hasattr(self.stream, "isatty") and self.stream.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {
                k: ""
                for k in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "RESET"]
            }
        )

        self.level_order = {
            "DEBUG": 0,
            "INFO": 1,
            "WARNING": 2,
            "ERROR": 3,
            "CRITICAL": 4,
        }
        if self.log_level not in self.level_order:
            raise ValueError(
                f"Unknown log level '{log_level}'. Available: {list(self.level_order.keys())}"
            )

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order.get(
            self.log_level, 1
        )

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self._should_log(level):
            formatted = self._format_message(level, message)
            print(formatted, file=self.stream, flush=True)

    def debug(self, message: str):
        """Log debug message."""
        self.log("DEBUG", message)

    def info(self, message: str):
        """Log info message."""
        self.log("INFO", message)

    def warning(self, message: str):
        """Log warning message."""
        self.log("WARNING", message)

    def error(self, message: str):
        """Log error message."""
        self.log("ERROR", message)

    def critical(self, message: str):
        """Log critical message."""
        self.log("CRITICAL", message)


def _format_metric(value: Any) -> str:
    if isinstance(value, float):
        if abs(value) < 0.01 and value != 0:
            return f"{value:.2e}"
        return f"{value:.2f}"
    return str(value)


class EmulatorLogger(ConsoleLogger):
    """Logger for the frame loop with periodic statistics."""

    def __init__(self, name: str = "chipvm", **kwargs):
        super().__init__(name, **kwargs)
        self.history = []

    def log_session_start(self, config: Dict[str, Any]):
        """Log run configuration and start message."""
        self.info("=" * 60)
        self.info("Starting emulator with configuration:")
        for key, value in config.items():
            self.info(f"  {key}: {value}")
        self.info("=" * 60)

    def log_frame(self, frame: int, metrics: Dict[str, Any], log_interval: int = 600):
        """Log frame statistics every ``log_interval`` frames."""
        if log_interval <= 0 or frame % log_interval != 0:
            return

        metric_strs = [f"{key}={_format_metric(value)}" for key, value in metrics.items()]
        self.info(f"Frame {frame:6d} | " + " | ".join(metric_strs))
        self.history.append({"frame": frame, "time": time.time(), "metrics": dict(metrics)})

    def log_session_end(self, final_metrics: Dict[str, Any]):
        """Log completion with final statistics."""
        elapsed = time.time() - self.start_time
        self.info("=" * 60)
        self.info(f"Emulation stopped after {elapsed:.1f}s")
        for key, value in final_metrics.items():
            self.info(f"  {key}: {_format_metric(value)}")
        self.info("=" * 60)


class RunnerCallback:
    """Base class for frame loop callbacks."""

    def on_start(self, config: Dict[str, Any]):
        """Called before the first frame."""
        pass

    def on_frame(self, frame: int, metrics: Dict[str, Any]):
        """Called after each frame has been drawn."""
        pass

    def on_fault(self, frame: int, fault: Exception):
        """Called when a cycle raises a machine fault."""
        pass

    def on_end(self, final_metrics: Dict[str, Any]):
        """Called once the loop has stopped."""
        pass


class ConsoleCallback(RunnerCallback):
    """Console logging callback."""

    def __init__(self, log_interval: int = 600, logger: Optional[EmulatorLogger] = None):
        self.log_interval = log_interval
        self.logger = logger or EmulatorLogger()

    def on_start(self, config: Dict[str, Any]):
        self.logger.log_session_start(config)

    def on_frame(self, frame: int, metrics: Dict[str, Any]):
        self.logger.log_frame(frame, metrics, self.log_interval)

    def on_fault(self, frame: int, fault: Exception):
        self.logger.error(f"Frame {frame}: {type(fault).__name__}: {fault}")

    def on_end(self, final_metrics: Dict[str, Any]):
        self.logger.log_session_end(final_metrics)


class MetricsCallback(RunnerCallback):
    """Callback keeping running statistics for tracked metrics.

    Only aggregates are stored, so memory stays flat however long the run.
    """

    def __init__(self, track_keys: List[str] = None):
        self.track_keys = track_keys or ["instructions_per_second", "lit_pixels"]
        self.aggregates = {key: None for key in self.track_keys}
        self.frame_count = 0
        self.fault_count = 0
        self.last_fault = None

    def on_frame(self, frame: int, metrics: Dict[str, Any]):
        self.frame_count += 1

        for key in self.track_keys:
            value = metrics.get(key)
            if not isinstance(value, (int, float)):
                continue
            value = float(value)
            current = self.aggregates[key]
            if current is None:
                self.aggregates[key] = {"sum": value, "min": value, "max": value, "last": value, "count": 1}
            else:
                current["sum"] += value
                current["min"] = min(current["min"], value)
                current["max"] = max(current["max"], value)
                current["last"] = value
                current["count"] += 1

    def on_fault(self, frame: int, fault: Exception):
        self.fault_count += 1
        self.last_fault = (frame, fault)

    def get_statistics(self) -> Dict[str, Dict[str, float]]:
        """Get running statistics for tracked metrics."""
        stats = {}
        for key, current in self.aggregates.items():
            if current is not None:
                stats[key] = {
                    "mean": current["sum"] / current["count"],
                    "min": current["min"],
                    "max": current["max"],
                    "last": current["last"],
                    "count": current["count"],
                }
        return stats


def frames_with_progress(n: int, desc: str = None, **tqdm_kwargs) -> Iterator[int]:
    """Iterate over ``range(n)`` frame numbers behind a tqdm progress bar."""
    if desc is None:
        desc = f"Emulating ({n:,} frames)"

    for kwarg in ("total", "iterable"):
        tqdm_kwargs.pop(kwarg, None)

    with tqdm(total=n, desc=desc, unit="frame", **tqdm_kwargs) as bar:
        for frame in range(n):
            yield frame
            bar.update(1)

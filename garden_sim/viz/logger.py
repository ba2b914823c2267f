"""Structured event logging for narrative and debugging."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Optional, TextIO


@dataclass
class LogEntry:
    """A single log entry."""

    time_ms: int
    category: str
    message: str
    plot_ids: list[int] = field(default_factory=list)
    data: dict = field(default_factory=dict)


class SimLogger:
    """Structured logging with categories and verbosity control."""

    # Category constants
    ACTION = "ACTION"
    GROWTH = "GROWTH"
    WEATHER = "WEATHER"
    BEES = "BEES"
    POLLINATION = "POLLINATION"
    GENETICS = "GENETICS"
    HARVEST = "HARVEST"
    NOTIFY = "NOTIFY"

    _VERBOSITY_MAP: dict[str, int] = {
        NOTIFY: 0,
        POLLINATION: 0,
        HARVEST: 0,
        WEATHER: 1,
        BEES: 1,
        GROWTH: 2,
        GENETICS: 2,
        ACTION: 3,
    }

    def __init__(
        self,
        verbosity: int = 1,
        log_file: Optional[str] = None,
        stdout: bool = False,
    ) -> None:
        """
        verbosity levels:
            0 = notifications, pollination and harvest
            1 = + weather and bee transitions
            2 = + growth and genetics detail
            3 = everything, including every user command
        """
        self.verbosity = verbosity
        self._buffer: list[LogEntry] = []
        self._all_entries: list[LogEntry] = []
        self._file: Optional[TextIO] = None
        self._stdout = stdout

        if log_file:
            os.makedirs(os.path.dirname(log_file) if os.path.dirname(log_file) else ".", exist_ok=True)
            self._file = open(log_file, "w", encoding="utf-8")

    @property
    def entries(self) -> list[LogEntry]:
        return self._all_entries + self._buffer

    def log(
        self,
        category: str,
        message: str,
        plot_ids: Optional[list[int]] = None,
        time_ms: int = 0,
        **data,
    ) -> None:
        """Log an event."""
        entry = LogEntry(
            time_ms=time_ms,
            category=category,
            message=message,
            plot_ids=plot_ids or [],
            data=data,
        )
        self._buffer.append(entry)

    def flush(self) -> None:
        """Write buffered entries that pass the verbosity filter."""
        for entry in self._buffer:
            required_verbosity = self._VERBOSITY_MAP.get(entry.category, 1)
            if required_verbosity <= self.verbosity:
                line = f"[{entry.time_ms / 1000:>8.1f}s] [{entry.category:<11}] {entry.message}"
                if self._stdout:
                    print(line)
                if self._file:
                    self._file.write(line + "\n")

        self._all_entries.extend(self._buffer)
        self._buffer.clear()

        if self._file:
            self._file.flush()

    def get_narrative(self, start_ms: int = 0, end_ms: Optional[int] = None) -> str:
        """Human-readable summary of a window of model time."""
        window = [
            e for e in self.entries
            if e.time_ms >= start_ms and (end_ms is None or e.time_ms <= end_ms)
        ]
        if not window:
            return "Nothing notable happened."

        lines = [f"=== {start_ms / 1000:.1f}s onward ==="]
        for entry in window:
            lines.append(f"  [{entry.time_ms / 1000:.1f}s] [{entry.category}] {entry.message}")
        return "\n".join(lines)

    def count(self, category: str) -> int:
        return sum(1 for e in self.entries if e.category == category)

    def export_json(self, filepath: str) -> None:
        """Export all log entries to JSON."""
        os.makedirs(os.path.dirname(filepath) if os.path.dirname(filepath) else ".", exist_ok=True)
        data = [
            {
                "time_ms": e.time_ms,
                "category": e.category,
                "message": e.message,
                "plot_ids": e.plot_ids,
                "data": e.data,
            }
            for e in self.entries
        ]
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

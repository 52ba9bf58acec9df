"""Thread-safe metrics collector for batch enrichment runs."""

from __future__ import annotations

import json
import logging
import threading
import time
from collections import Counter, deque
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

GRADES = ("A", "B", "C", "D", "F")


@dataclass
class ErrorEntry:
    """A record that failed to enrich."""

    timestamp: datetime
    package: str
    error_type: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "package": self.package,
            "error_type": self.error_type,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ErrorEntry:
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            package=data["package"],
            error_type=data["error_type"],
            message=data["message"],
        )


@dataclass
class BatchMetrics:
    """Current state of an enrichment batch."""

    # Progress
    total_records: int = 0
    completed_records: int = 0
    start_time: datetime | None = None

    # Results
    scored_count: int = 0
    error_count: int = 0
    grade_distribution: dict[str, int] = field(
        default_factory=lambda: {grade: 0 for grade in GRADES}
    )
    category_distribution: dict[str, int] = field(default_factory=dict)
    total_score: float = 0.0

    # Stage timings (running averages, seconds)
    stage_timings: dict[str, float] = field(default_factory=dict)
    stage_counts: dict[str, int] = field(default_factory=dict)

    recent_errors: deque[ErrorEntry] = field(default_factory=lambda: deque(maxlen=10))

    is_running: bool = False
    last_updated: datetime | None = None

    @property
    def progress_percent(self) -> float:
        if self.total_records == 0:
            return 0.0
        return (self.completed_records / self.total_records) * 100

    @property
    def average_score(self) -> float | None:
        if self.scored_count == 0:
            return None
        return self.total_score / self.scored_count

    def to_dict(self) -> dict[str, Any]:
        """Serialize metrics to a dictionary for JSON storage."""
        return {
            "total_records": self.total_records,
            "completed_records": self.completed_records,
            "start_time": self.start_time.isoformat() if self.start_time else None,
            "scored_count": self.scored_count,
            "error_count": self.error_count,
            "grade_distribution": self.grade_distribution,
            "category_distribution": self.category_distribution,
            "total_score": self.total_score,
            "stage_timings": self.stage_timings,
            "stage_counts": self.stage_counts,
            "recent_errors": [e.to_dict() for e in self.recent_errors],
            "is_running": self.is_running,
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BatchMetrics:
        """Deserialize metrics from a dictionary."""
        metrics = cls(
            total_records=data.get("total_records", 0),
            completed_records=data.get("completed_records", 0),
            start_time=(
                datetime.fromisoformat(data["start_time"]) if data.get("start_time") else None
            ),
            scored_count=data.get("scored_count", 0),
            error_count=data.get("error_count", 0),
            grade_distribution=data.get(
                "grade_distribution", {grade: 0 for grade in GRADES}
            ),
            category_distribution=data.get("category_distribution", {}),
            total_score=data.get("total_score", 0.0),
            stage_timings=data.get("stage_timings", {}),
            stage_counts=data.get("stage_counts", {}),
            is_running=data.get("is_running", False),
            last_updated=(
                datetime.fromisoformat(data["last_updated"]) if data.get("last_updated") else None
            ),
        )
        metrics.recent_errors = deque(
            [ErrorEntry.from_dict(e) for e in data.get("recent_errors", [])],
            maxlen=10,
        )
        return metrics


class MetricsCollector:
    """Thread-safe metrics collector for enrichment batches.

    Worker threads report each record; when ``metrics_file`` is set, a JSON
    snapshot is written at batch boundaries.
    """

    def __init__(self, metrics_file: Path | None = None):
        self._lock = threading.Lock()
        self._metrics_file = metrics_file
        self._metrics = BatchMetrics()

    def start_batch(self, total: int) -> None:
        """Reset counters for a new batch."""
        with self._lock:
            now = datetime.now()
            self._metrics = BatchMetrics(
                total_records=total,
                start_time=now,
                is_running=True,
                last_updated=now,
            )
            self._save()

    def complete_record(
        self,
        name: str,
        score: float,
        grade: str,
        categories: list[str] | None = None,
    ) -> None:
        """Record a successfully enriched record."""
        with self._lock:
            m = self._metrics
            m.completed_records += 1
            m.scored_count += 1
            m.total_score += score
            m.grade_distribution[grade] = m.grade_distribution.get(grade, 0) + 1
            counts = Counter(m.category_distribution)
            counts.update(categories or [])
            m.category_distribution = dict(counts)
            m.last_updated = datetime.now()

    def record_error(self, package: str, error_type: str, message: str) -> None:
        """Record a record that failed to enrich."""
        with self._lock:
            m = self._metrics
            m.completed_records += 1
            m.error_count += 1
            m.recent_errors.append(
                ErrorEntry(
                    timestamp=datetime.now(),
                    package=package,
                    error_type=error_type,
                    message=message,
                )
            )
            m.last_updated = datetime.now()

    def record_stage_timing(self, stage: str, duration: float) -> None:
        """Record the duration of a stage (updates running average)."""
        with self._lock:
            current_count = self._metrics.stage_counts.get(stage, 0)
            current_avg = self._metrics.stage_timings.get(stage, 0.0)

            new_count = current_count + 1
            new_avg = (current_avg * current_count + duration) / new_count

            self._metrics.stage_counts[stage] = new_count
            self._metrics.stage_timings[stage] = new_avg

    def finish_batch(self) -> None:
        """Mark the batch as complete."""
        with self._lock:
            self._metrics.is_running = False
            self._metrics.last_updated = datetime.now()
            self._save()

    def get_metrics(self) -> BatchMetrics:
        """Get a copy of current metrics."""
        with self._lock:
            return BatchMetrics.from_dict(self._metrics.to_dict())

    def load(self) -> BatchMetrics:
        """Load the last saved snapshot."""
        if self._metrics_file is None or not self._metrics_file.exists():
            return BatchMetrics()
        with open(self._metrics_file) as f:
            return BatchMetrics.from_dict(json.load(f))

    def _save(self) -> None:
        """Save metrics to file (must be called with lock held)."""
        if self._metrics_file is None:
            return
        try:
            self._metrics_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self._metrics_file, "w") as f:
                json.dump(self._metrics.to_dict(), f, indent=2)
        except OSError as e:
            # A metrics snapshot must never abort a batch
            logger.warning(f"Could not write metrics to {self._metrics_file}: {e}")


class StageTimer:
    """Context manager for timing pipeline stages."""

    def __init__(self, collector: MetricsCollector, stage: str):
        self.collector = collector
        self.stage = stage
        self.start_time: float | None = None

    def __enter__(self) -> StageTimer:
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self.start_time is not None:
            duration = time.perf_counter() - self.start_time
            self.collector.record_stage_timing(self.stage, duration)

"""Runtime settings read from the environment."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from pkgcompare.analyzers.classifier import ClassifierWeights

ENV_PREFIX = "PKGCOMPARE_"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


@dataclass
class Settings:
    """Settings for the CLI and batch pipeline.

    Environment variables:
        PKGCOMPARE_CATEGORY_THRESHOLD: minimum category score (default 20)
        PKGCOMPARE_WORKERS: batch worker threads (default 1)
        PKGCOMPARE_METRICS_FILE: where batch metrics are written (default unset)
        PKGCOMPARE_LOG_LEVEL: logging level name (default WARNING)
    """

    classifier_weights: ClassifierWeights = field(default_factory=ClassifierWeights)
    workers: int = 1
    metrics_file: Path | None = None
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        threshold = _env_int("CATEGORY_THRESHOLD", ClassifierWeights().threshold)
        if threshold < 1:
            raise ValueError(f"{ENV_PREFIX}CATEGORY_THRESHOLD must be positive, got {threshold}")

        workers = _env_int("WORKERS", 1)
        if workers < 1:
            raise ValueError(f"{ENV_PREFIX}WORKERS must be at least 1, got {workers}")

        metrics_file = os.environ.get(ENV_PREFIX + "METRICS_FILE")

        raw_level = os.environ.get(ENV_PREFIX + "LOG_LEVEL", "WARNING")
        log_level = raw_level.strip().upper()
        # getLevelName maps known names to their numeric level
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"{ENV_PREFIX}LOG_LEVEL must be a logging level, got {raw_level!r}")

        return cls(
            classifier_weights=ClassifierWeights(threshold=threshold),
            workers=workers,
            metrics_file=Path(metrics_file) if metrics_file else None,
            log_level=log_level,
        )

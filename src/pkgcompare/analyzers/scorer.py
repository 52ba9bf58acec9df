"""Score calculator for package comparison metrics."""

import calendar
import logging
import math
from datetime import date

from pydantic import BaseModel, Field

from pkgcompare.models.schemas import (
    ComparisonResult,
    Grade,
    PackageMetrics,
    PackageRecord,
    Severity,
)

logger = logging.getLogger(__name__)

# Logarithmic saturation points: this many of X earns the full 5 points
STAR_SATURATION = 100_000
DEPENDENT_SATURATION = 100_000
FORK_SATURATION = 10_000

ACTIVE_MAINTENANCE_MONTHS = 6


class ScoreWeights(BaseModel):
    """Weights of the sub-scores in the overall score (sum to 1.0)."""

    popularity: float = Field(default=0.25, ge=0)
    maintenance: float = Field(default=0.20, ge=0)
    security: float = Field(default=0.25, ge=0)
    community: float = Field(default=0.15, ge=0)
    quality: float = Field(default=0.15, ge=0)


def months_before(day: date, months: int) -> date:
    """Calendar month arithmetic, clamping to the end of shorter months."""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def is_actively_maintained(metrics: PackageMetrics, today: date) -> bool:
    """True if the last repository release is within the last six months."""
    released = metrics.last_repository_release
    if released is None:
        return False
    return released > months_before(today, ACTIVE_MAINTENANCE_MONTHS)


def parse_registry_date(value: str | None) -> date | None:
    """Parse a registry release date string; None when absent or malformed."""
    if not value:
        return None
    try:
        # Registries send either a bare date or a full ISO timestamp
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        logger.debug(f"Ignoring unparsable registry release date: {value!r}")
        return None


def _log_scaled(value: int | None, saturation: int) -> float | None:
    """0-5 points on a log scale, None when the factor is missing."""
    if value is None or value <= 0:
        return None
    return min(5.0, math.log10(value + 1) / math.log10(saturation) * 5)


def _clamp(value: float, low: float = 0.0, high: float = 10.0) -> float:
    return max(low, min(high, value))


class Scorer:
    """Calculates comparison scores from package metrics.

    Scoring weights (total 100%):
    - Popularity: 25%
    - Maintenance: 20%
    - Security: 25%
    - Community: 15%
    - Quality: 15%

    All sub-scores are on a 0-10 scale. Time-dependent scores are evaluated
    against ``today``; pass a fixed date for reproducible results.
    """

    # Security score deduction per vulnerability
    SECURITY_PENALTIES = {
        Severity.CRITICAL: 3.0,
        Severity.HIGH: 2.0,
        Severity.MEDIUM: 1.0,
        Severity.LOW: 0.5,
        Severity.UNKNOWN: 1.0,
    }
    SECURITY_FLOOR = 1.0
    DEPRECATED_SECURITY = 2.0
    DEPRECATED_MAINTENANCE_CAP = 2.0

    # Severity index contribution per vulnerability
    SEVERITY_INDEX = {
        Severity.CRITICAL: 10,
        Severity.HIGH: 7,
        Severity.MEDIUM: 4,
        Severity.LOW: 1,
        Severity.UNKNOWN: 2,
    }

    # (upper bound in days, points), checked in order
    REPOSITORY_RECENCY = ((7, 6.0), (30, 5.0), (90, 4.0), (180, 3.0), (365, 2.0))
    REGISTRY_RECENCY = ((90, 2.0), (180, 1.0))

    GRADE_THRESHOLDS = ((9.0, Grade.A), (7.0, Grade.B), (5.0, Grade.C), (3.0, Grade.D))

    def __init__(self, weights: ScoreWeights | None = None, today: date | None = None) -> None:
        """Initialize the scorer.

        Args:
            weights: Overall score weights. Defaults to ScoreWeights().
            today: Reference date. Defaults to the current date at call time.
        """
        self.weights = weights or ScoreWeights()
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    def score(self, record: PackageRecord) -> ComparisonResult:
        """Calculate all score components for a record.

        Args:
            record: Package record with metrics.

        Returns:
            ComparisonResult with sub-scores, overall score and grade.
        """
        metrics = record.metrics
        today = self.today
        active = is_actively_maintained(metrics, today)

        popularity = self._calculate_popularity_score(metrics)
        maintenance = self._calculate_maintenance_score(metrics, today)
        security = self._calculate_security_score(metrics)
        community = self._calculate_community_score(metrics)
        quality = self._calculate_quality_score(metrics, active)

        w = self.weights
        overall = (
            popularity * w.popularity
            + maintenance * w.maintenance
            + security * w.security
            + community * w.community
            + quality * w.quality
        )
        overall = round(_clamp(overall), 1)

        return ComparisonResult(
            popularity=popularity,
            maintenance=maintenance,
            security=security,
            community=community,
            quality=quality,
            overall=overall,
            grade=self.score_to_grade(overall),
            is_actively_maintained=active,
            vulnerability_severity=self.vulnerability_severity(metrics),
        )

    def score_to_grade(self, score: float) -> Grade:
        """Convert an overall score to a letter grade."""
        for threshold, grade in self.GRADE_THRESHOLDS:
            if score >= threshold:
                return grade
        return Grade.F

    def vulnerability_severity(self, metrics: PackageMetrics) -> int:
        """Additive severity index; 0 when not flagged or no vulnerabilities."""
        if not metrics.has_vulnerabilities or not metrics.vulnerabilities:
            return 0
        return sum(self.SEVERITY_INDEX[v.severity] for v in metrics.vulnerabilities)

    def _calculate_popularity_score(self, metrics: PackageMetrics) -> float:
        """Popularity (0-10) from stars and dependents.

        Each factor is log-scaled to at most 5 points. Deprecation (x0.1) and
        known vulnerabilities (x0.5) discount the sum multiplicatively.
        """
        factors = [
            f
            for f in (
                _log_scaled(metrics.stars, STAR_SATURATION),
                _log_scaled(metrics.dependents, DEPENDENT_SATURATION),
            )
            if f is not None
        ]
        if not factors:
            return 0.0

        score = sum(factors)
        if metrics.is_deprecated:
            score *= 0.1
        if metrics.has_vulnerabilities:
            score *= 0.5
        return _clamp(score)

    def _calculate_maintenance_score(self, metrics: PackageMetrics, today: date) -> float:
        """Maintenance (0-10) as the mean points per available factor.

        Factors:
        - Repository release recency (1-6 points)
        - Registry release recency (0-2 points)
        - Latest version present (2 points)
        """
        total = 0.0
        factors = 0

        if metrics.last_repository_release is not None:
            days = (today - metrics.last_repository_release).days
            total += self._bucket(days, self.REPOSITORY_RECENCY, default=1.0)
            factors += 1

        registry_date = parse_registry_date(metrics.last_registry_release)
        if registry_date is not None:
            days = (today - registry_date).days
            total += self._bucket(days, self.REGISTRY_RECENCY, default=0.0)
            factors += 1

        if metrics.latest_version:
            total += 2.0
            factors += 1

        if factors == 0:
            return 0.0

        score = _clamp(total / factors * 10)
        if metrics.is_deprecated:
            score = min(score, self.DEPRECATED_MAINTENANCE_CAP)
        return score

    def _calculate_security_score(self, metrics: PackageMetrics) -> float:
        """Security (0-10): 10 minus severity-weighted penalties, floored at 1."""
        if metrics.is_deprecated:
            return self.DEPRECATED_SECURITY

        if not metrics.has_vulnerabilities or not metrics.vulnerabilities:
            return 10.0

        penalty = sum(self.SECURITY_PENALTIES[v.severity] for v in metrics.vulnerabilities)
        return max(self.SECURITY_FLOOR, 10.0 - penalty)

    def _calculate_community_score(self, metrics: PackageMetrics) -> float:
        """Community (0-10) from forks and dependents, each log-scaled to 5."""
        factors = [
            f
            for f in (
                _log_scaled(metrics.forks, FORK_SATURATION),
                _log_scaled(metrics.dependents, DEPENDENT_SATURATION),
            )
            if f is not None
        ]
        if not factors:
            return 0.0
        return _clamp(sum(factors))

    def _calculate_quality_score(self, metrics: PackageMetrics, active: bool) -> float:
        """Quality (0-10) as the mean points per factor, each worth up to 2.5.

        Active maintenance and vulnerability status always count as factors;
        stars count when known, dependents when positive.
        """
        total = 0.0
        factors = 0

        if metrics.stars is not None:
            total += min(2.5, metrics.stars / 1000)
            factors += 1

        if active:
            total += 2.5
        factors += 1

        if not metrics.has_vulnerabilities:
            total += 2.5
        factors += 1

        if metrics.dependents:
            total += min(2.5, metrics.dependents / 100)
            factors += 1

        return _clamp(total / factors * 10)

    @staticmethod
    def _bucket(days: int, buckets: tuple[tuple[int, float], ...], default: float) -> float:
        for limit, points in buckets:
            if days <= limit:
                return points
        return default

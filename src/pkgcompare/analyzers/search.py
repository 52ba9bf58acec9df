"""Advanced search: predicate building, grade post-filter and sorting."""

import logging
import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date

from pkgcompare.analyzers.scorer import ACTIVE_MAINTENANCE_MONTHS, Scorer, months_before
from pkgcompare.models.schemas import Grade, PackageRecord, SearchCriteria, SortKey

logger = logging.getLogger(__name__)

Predicate = Callable[[PackageRecord], bool]


def build_predicates(criteria: SearchCriteria, today: date | None = None) -> list[Predicate]:
    """Translate criteria into one predicate per active filter.

    Args:
        criteria: Search criteria. Unset fields add no predicate.
        today: Reference date for the unmaintained filter.

    Returns:
        Predicates that must all hold for a record to match.
    """
    predicates: list[Predicate] = []

    # 1. Keyword search (name or description)
    if criteria.query:
        needle = criteria.query.lower()
        predicates.append(
            lambda r: needle in (r.name or "").lower() or needle in (r.description or "").lower()
        )

    # 2. Categories (OR)
    if criteria.categories:
        wanted = list(criteria.categories)
        predicates.append(lambda r: any(c in r.categories_text for c in wanted))

    # 3. Platforms (OR)
    if criteria.platforms:
        allowed = {p.upper() for p in criteria.platforms}
        predicates.append(lambda r: (r.platform or "").upper() in allowed)

    # 4. Star range
    if criteria.min_stars is not None:
        low_stars = criteria.min_stars
        predicates.append(lambda r: r.metrics.stars is not None and r.metrics.stars >= low_stars)
    if criteria.max_stars is not None:
        high_stars = criteria.max_stars
        predicates.append(lambda r: r.metrics.stars is not None and r.metrics.stars <= high_stars)

    # 5. Dependents range
    if criteria.min_dependents is not None:
        low_deps = criteria.min_dependents
        predicates.append(
            lambda r: r.metrics.dependents is not None and r.metrics.dependents >= low_deps
        )
    if criteria.max_dependents is not None:
        high_deps = criteria.max_dependents
        predicates.append(
            lambda r: r.metrics.dependents is not None and r.metrics.dependents <= high_deps
        )

    # 6. Last release on or after a date
    if criteria.last_commit_after is not None:
        after = criteria.last_commit_after
        predicates.append(
            lambda r: r.metrics.last_repository_release is not None
            and r.metrics.last_repository_release >= after
        )

    # 7. Grades are derived: see filter_by_grade

    # 8. Exclude deprecated (a missing flag is not excluded)
    if criteria.exclude_deprecated:
        predicates.append(lambda r: r.metrics.is_deprecated is not True)

    # 9. Exclude vulnerable
    if criteria.exclude_vulnerable:
        predicates.append(lambda r: r.metrics.has_vulnerabilities is not True)

    # 10. Exclude unmaintained (no release in the last six months)
    if criteria.exclude_unmaintained:
        cutoff = months_before(today or date.today(), ACTIVE_MAINTENANCE_MONTHS)
        predicates.append(
            lambda r: r.metrics.last_repository_release is not None
            and r.metrics.last_repository_release > cutoff
        )

    # 11. Exclude platforms
    if criteria.exclude_platforms:
        denied = {p.upper() for p in criteria.exclude_platforms}
        predicates.append(lambda r: (r.platform or "").upper() not in denied)

    # 12. Exclude categories
    if criteria.exclude_categories:
        unwanted = list(criteria.exclude_categories)
        predicates.append(lambda r: not any(c in r.categories_text for c in unwanted))

    return predicates


def build_filter(criteria: SearchCriteria, today: date | None = None) -> Predicate:
    """Combine all active criteria into a single AND predicate."""
    predicates = build_predicates(criteria, today)

    def matches(record: PackageRecord) -> bool:
        return all(p(record) for p in predicates)

    return matches


def filter_by_grade(
    records: Iterable[PackageRecord],
    grades: Iterable[Grade | str] | None,
    scorer: Scorer,
) -> list[PackageRecord]:
    """Keep records whose computed grade is in ``grades``.

    Grades only exist after scoring, so this runs in memory after the
    predicate stage. An empty or missing allow-list keeps everything.
    """
    records = list(records)
    if not grades:
        return records
    allowed = {Grade(g) for g in grades}
    return [r for r in records if scorer.score(r).grade in allowed]


def _nulls_last_desc(value):
    # Sort key for descending order with missing values at the end
    return (value is None, _negate(value))


def _negate(value):
    if value is None:
        return 0
    if isinstance(value, date):
        return -value.toordinal()
    return -value


SORT_KEYS: dict[SortKey, Callable[[PackageRecord], tuple]] = {
    SortKey.STARS: lambda r: _nulls_last_desc(r.metrics.stars),
    SortKey.DEPENDENTS: lambda r: _nulls_last_desc(r.metrics.dependents),
    SortKey.NAME: lambda r: (r.name is None, r.name or ""),
    SortKey.UPDATED: lambda r: _nulls_last_desc(r.metrics.last_repository_release),
}


def sort_records(
    records: Iterable[PackageRecord],
    sort_by: SortKey | str | None,
) -> list[PackageRecord]:
    """Stable sort by the given key; None keeps input order."""
    records = list(records)
    if sort_by is None:
        return records
    return sorted(records, key=SORT_KEYS[SortKey(sort_by)])


def search(
    records: Iterable[PackageRecord],
    criteria: SearchCriteria,
    scorer: Scorer | None = None,
) -> list[PackageRecord]:
    """Run the full search: predicates, grade post-filter, sort.

    Args:
        records: Already classified records.
        criteria: Search criteria.
        scorer: Scorer used for grades; also supplies the reference date.

    Returns:
        Matching records in the requested order.
    """
    scorer = scorer or Scorer()
    records = list(records)
    matches = build_filter(criteria, scorer.today)
    selected = [r for r in records if matches(r)]
    selected = filter_by_grade(selected, criteria.include_grades, scorer)
    result = sort_records(selected, criteria.sort_by)
    logger.debug(f"Search matched {len(result)} of {len(records)} records")
    return result


@dataclass
class Page:
    """One page of search results."""

    items: list[PackageRecord]
    page: int
    size: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.size) if self.size else 0


def paginate(records: Sequence[PackageRecord], page: int = 1, size: int = 20) -> Page:
    """Slice a result list into a 1-based page."""
    if page < 1 or size < 1:
        raise ValueError(f"Invalid page {page} / size {size}")
    start = (page - 1) * size
    return Page(items=list(records[start : start + size]), page=page, size=size, total=len(records))

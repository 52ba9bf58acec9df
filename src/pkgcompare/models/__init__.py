"""Data models and schemas."""

from pkgcompare.models.schemas import (
    Category,
    CategoryResult,
    ComparisonResult,
    Grade,
    PackageAnalysis,
    PackageMetrics,
    PackageRecord,
    Platform,
    SearchCriteria,
    Severity,
    SortKey,
    Vulnerability,
)

__all__ = [
    "Category",
    "CategoryResult",
    "ComparisonResult",
    "Grade",
    "PackageAnalysis",
    "PackageMetrics",
    "PackageRecord",
    "Platform",
    "SearchCriteria",
    "Severity",
    "SortKey",
    "Vulnerability",
]

"""Shared fixtures for pkgcompare tests."""

from datetime import date, timedelta

import pytest

from pkgcompare.analyzers.classifier import Classifier
from pkgcompare.analyzers.scorer import Scorer
from pkgcompare.models.schemas import PackageMetrics, PackageRecord

TODAY = date(2026, 10, 18)


def make_record(name="pkg", categories=None, platform=None, description=None, **metrics) -> PackageRecord:
    """Build a record with the given metrics fields."""
    return PackageRecord(
        name=name,
        description=description,
        platform=platform,
        categories=categories or [],
        metrics=PackageMetrics(**metrics),
    )


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def scorer():
    return Scorer(today=TODAY)


@pytest.fixture
def classifier():
    return Classifier()


@pytest.fixture
def healthy_record():
    """Popular, recently released, vulnerability free."""
    return PackageRecord(
        name="express",
        description="Fast, unopinionated, minimalist web framework for node.",
        keywords=["express", "framework", "web", "rest", "router"],
        language="JavaScript",
        platform="npm",
        repository_url="https://github.com/expressjs/express",
        metrics=PackageMetrics(
            stars=100_000,
            forks=10_000,
            dependents=100_000,
            last_repository_release=TODAY - timedelta(days=3),
            last_registry_release="2026-10-01",
            latest_version="5.1.0",
            is_deprecated=False,
            has_vulnerabilities=False,
            license="MIT",
        ),
    )


@pytest.fixture
def search_records():
    """Four records with pre-assigned categories."""
    return [
        make_record(
            "alpha",
            categories=["HTTP Client"],
            platform="npm",
            description="Tiny HTTP client",
            stars=500,
            dependents=50,
            last_repository_release=TODAY - timedelta(days=10),
        ),
        make_record(
            "beta",
            categories=["Testing"],
            platform="pypi",
            is_deprecated=True,
        ),
        make_record(
            "gamma",
            categories=["Logging", "Utilities"],
            platform="maven",
            stars=5000,
            last_repository_release=date(2025, 1, 1),
            has_vulnerabilities=True,
        ),
        make_record(
            "delta",
            categories=["UI Framework"],
            platform="NPM",
            stars=5000,
            dependents=900,
        ),
    ]


@pytest.fixture
def record_factory():
    return make_record

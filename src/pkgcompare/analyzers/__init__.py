"""Analyzers that derive categories, scores and search results from records."""

from pkgcompare.analyzers.classifier import Classifier, ClassifierWeights
from pkgcompare.analyzers.pipeline import EnrichmentPipeline
from pkgcompare.analyzers.scorer import Scorer, ScoreWeights
from pkgcompare.analyzers.search import build_filter, filter_by_grade, paginate, search, sort_records

__all__ = [
    "Classifier",
    "ClassifierWeights",
    "EnrichmentPipeline",
    "Scorer",
    "ScoreWeights",
    "build_filter",
    "filter_by_grade",
    "paginate",
    "search",
    "sort_records",
]

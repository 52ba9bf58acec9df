"""Tests for the enrichment pipeline."""

from pkgcompare.analyzers.classifier import Classifier
from pkgcompare.analyzers.pipeline import EnrichmentPipeline
from pkgcompare.monitoring import MetricsCollector
from pkgcompare.models.schemas import Category, Grade, SearchCriteria


class ExplodingClassifier(Classifier):
    """Fails on one package name."""

    def classify_record(self, record):
        if record.name == "boom":
            raise RuntimeError("classifier exploded")
        return super().classify_record(record)


class TestAnalyze:
    def test_analyze_record(self, scorer, healthy_record):
        pipeline = EnrichmentPipeline(scorer=scorer)
        analysis = pipeline.analyze(healthy_record)

        assert analysis.categories.primary == Category.WEB_FRAMEWORK
        assert analysis.record.categories == ["Web Framework"]
        assert analysis.comparison.grade == Grade.A
        assert analysis.framework == "express"
        assert analysis.runtime_environment == "nodejs"
        assert analysis.cost == "Free / Open Source"
        assert analysis.documentation_url == "https://expressjs.github.io/express"
        assert not analysis.deprecation_suspected
        assert analysis.use_case == "express helps you create web servers and REST APIs in JavaScript projects."
        assert analysis.analyzed_at.tzinfo is not None

    def test_input_record_untouched(self, scorer, healthy_record):
        EnrichmentPipeline(scorer=scorer).analyze(healthy_record)
        assert healthy_record.categories == []

    def test_stage_timings_recorded(self, scorer, healthy_record):
        metrics = MetricsCollector()
        EnrichmentPipeline(scorer=scorer, metrics=metrics).analyze(healthy_record)
        counts = metrics.get_metrics().stage_counts
        assert counts == {"classify": 1, "score": 1, "infer": 1}


class TestBatch:
    def test_parallel_keeps_order(self, scorer, record_factory):
        records = [record_factory(f"pkg-{i}", stars=i) for i in range(25)]
        pipeline = EnrichmentPipeline(scorer=scorer, workers=4)
        analyses = pipeline.analyze_batch(records)
        assert [a.record.name for a in analyses] == [r.name for r in records]

    def test_failures_are_skipped_and_recorded(self, scorer, record_factory):
        metrics = MetricsCollector()
        pipeline = EnrichmentPipeline(classifier=ExplodingClassifier(), scorer=scorer, metrics=metrics)
        records = [record_factory("ok-1"), record_factory("boom"), record_factory("ok-2")]

        analyses = pipeline.analyze_batch(records)

        assert [a.record.name for a in analyses] == ["ok-1", "ok-2"]
        snapshot = metrics.get_metrics()
        assert snapshot.error_count == 1
        assert snapshot.scored_count == 2
        assert snapshot.completed_records == 3
        assert snapshot.recent_errors[0].package == "boom"
        assert snapshot.recent_errors[0].error_type == "RuntimeError"
        assert not snapshot.is_running

    def test_search_over_analyses(self, scorer, healthy_record, record_factory):
        pipeline = EnrichmentPipeline(scorer=scorer)
        analyses = pipeline.analyze_batch([record_factory("left-pad"), healthy_record])
        matched = pipeline.search(analyses, SearchCriteria(categories=["Web Framework"]))
        assert [a.record.name for a in matched] == ["express"]

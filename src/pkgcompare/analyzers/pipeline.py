"""End-to-end enrichment pipeline for package records."""

import logging
from concurrent.futures import ThreadPoolExecutor

from pkgcompare.analyzers.classifier import Classifier
from pkgcompare.analyzers.platforms import (
    describe_use_case,
    determine_cost,
    infer_documentation_url,
    infer_framework,
    infer_runtime_environment,
    infer_supported_os,
    looks_deprecated,
)
from pkgcompare.analyzers.scorer import Scorer
from pkgcompare.analyzers.search import search
from pkgcompare.models.schemas import PackageAnalysis, PackageRecord, SearchCriteria
from pkgcompare.monitoring import MetricsCollector, StageTimer

logger = logging.getLogger(__name__)


class EnrichmentPipeline:
    """Attaches derived fields to package records.

    Pipeline stages:
    1. Classify into categories
    2. Score against the comparison model
    3. Infer platform facts (OS, runtime, framework, docs, cost, use case)
    """

    def __init__(
        self,
        classifier: Classifier | None = None,
        scorer: Scorer | None = None,
        metrics: MetricsCollector | None = None,
        workers: int = 1,
    ) -> None:
        """Initialize the pipeline.

        Args:
            classifier: Category classifier. Defaults to Classifier().
            scorer: Comparison scorer. Defaults to Scorer().
            metrics: Optional collector for batch metrics.
            workers: Thread count for batch runs; 1 runs inline.
        """
        self.classifier = classifier or Classifier()
        self.scorer = scorer or Scorer()
        self.metrics = metrics or MetricsCollector()
        self.workers = max(1, workers)

    def analyze(self, record: PackageRecord) -> PackageAnalysis:
        """Run all stages on one record.

        Args:
            record: Package record with metrics.

        Returns:
            PackageAnalysis; ``record.categories`` on it holds the inferred names.
        """
        with StageTimer(self.metrics, "classify"):
            categories = self.classifier.classify_record(record)

        with StageTimer(self.metrics, "score"):
            comparison = self.scorer.score(record)

        with StageTimer(self.metrics, "infer"):
            framework = infer_framework(record.name)
            facts = {
                "supported_os": infer_supported_os(record.language, record.platform, record.name),
                "runtime_environment": infer_runtime_environment(record.language, framework),
                "framework": framework,
                "documentation_url": infer_documentation_url(record),
                "cost": determine_cost(record.metrics.license),
                "deprecation_suspected": looks_deprecated(record.description, record.keywords),
                "use_case": describe_use_case(
                    record.name, record.description, categories.names, record.language
                ),
            }

        enriched = record.model_copy(update={"categories": categories.names})
        return PackageAnalysis(
            record=enriched,
            categories=categories,
            comparison=comparison,
            **facts,
        )

    def analyze_batch(self, records: list[PackageRecord]) -> list[PackageAnalysis]:
        """Analyze many records, in parallel when ``workers`` > 1.

        Records that fail are logged and recorded in the metrics collector;
        the rest of the batch continues. Output keeps input order.
        """
        self.metrics.start_batch(len(records))
        logger.info(f"Analyzing {len(records)} records with {self.workers} worker(s)")

        if self.workers == 1:
            outcomes = [self._analyze_safely(r) for r in records]
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                outcomes = list(executor.map(self._analyze_safely, records))

        self.metrics.finish_batch()
        results = [a for a in outcomes if a is not None]
        failed = len(records) - len(results)
        if failed:
            logger.warning(f"{failed} of {len(records)} records could not be analyzed")
        return results

    def search(
        self,
        analyses: list[PackageAnalysis],
        criteria: SearchCriteria,
    ) -> list[PackageAnalysis]:
        """Run a search over enriched records, returning their analyses."""
        by_id = {id(a.record): a for a in analyses}
        matched = search([a.record for a in analyses], criteria, self.scorer)
        return [by_id[id(r)] for r in matched]

    def _analyze_safely(self, record: PackageRecord) -> PackageAnalysis | None:
        name = record.name or "<unnamed>"
        try:
            analysis = self.analyze(record)
        except Exception as e:
            logger.error(f"Failed to analyze {name}: {e}")
            self.metrics.record_error(name, type(e).__name__, str(e))
            return None

        self.metrics.complete_record(
            name,
            score=analysis.comparison.overall,
            grade=analysis.comparison.grade.value,
            categories=analysis.categories.names,
        )
        return analysis

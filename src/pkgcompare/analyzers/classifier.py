"""Weighted category inference for packages."""

import logging
import re
import threading
from collections.abc import Iterable

from pydantic import BaseModel, Field

from pkgcompare.analyzers.category_rules import CATEGORY_RULES, PRIMARY_PRIORITY, CategoryRule
from pkgcompare.models.schemas import Category, CategoryResult, PackageRecord, Platform

logger = logging.getLogger(__name__)

_TOKEN_SPLIT = re.compile(r"[^a-z0-9]+")
_SEPARATORS = ("-", "_", ".", "/")
NAME_CACHE_SIZE = 10_000


class ClassifierWeights(BaseModel):
    """Signal weights and the inclusion threshold.

    The defaults are hand-tuned; a name-only match with a language bonus
    (10 + 5 + 2) deliberately stays below the threshold of 20.
    """

    name: int = Field(default=10, ge=0)
    description: int = Field(default=5, ge=0)
    max_description_groups: int = Field(default=2, ge=0)
    keyword: int = Field(default=3, ge=0)
    max_keywords: int = Field(default=2, ge=0)
    language: int = Field(default=2, ge=0)
    name_only_bonus: int = Field(default=5, ge=0)
    threshold: int = Field(default=20, ge=1)


def strip_namespace(name: str | None) -> str:
    """Return the artifact part of a package coordinate.

    ``org.slf4j:slf4j-api`` -> ``slf4j-api``, ``@angular/core`` -> ``core``.
    """
    if not name:
        return ""
    artifact = name.strip().lower()
    if ":" in artifact:
        artifact = artifact.rsplit(":", 1)[1]
    if artifact.startswith("@") and "/" in artifact:
        artifact = artifact.rsplit("/", 1)[1]
    return artifact


def _tokens(text: str) -> set[str]:
    return {t for t in _TOKEN_SPLIT.split(text) if t}


def _name_matches(artifact: str, tokens: set[str], pattern: str) -> bool:
    # Short bare words only match whole tokens ("gin" must not hit "plugin").
    if any(sep in pattern for sep in _SEPARATORS):
        return pattern in artifact
    if pattern in tokens:
        return True
    return len(pattern) >= 6 and pattern in artifact


def _phrase_regex(phrases: Iterable[str]) -> re.Pattern[str]:
    alternation = "|".join(re.escape(p) for p in sorted(phrases, key=len, reverse=True))
    return re.compile(rf"(?<![a-z0-9])(?:{alternation})(?![a-z0-9])")


class _CompiledRule:
    """Regexes built once per rule."""

    def __init__(self, rule: CategoryRule) -> None:
        self.rule = rule
        self.description_groups = [_phrase_regex(g) for g in rule.description_groups if g]
        self.negative = _phrase_regex(rule.negative_phrases) if rule.negative_phrases else None


class Classifier:
    """Assigns packages to categories of the fixed taxonomy.

    Every concrete category gets an integer score from five signals:

    - name: the artifact name hits one of the category's name patterns
    - description: up to two phrase groups, minus one weight for a
      negative phrase
    - keywords: per matching keyword, capped
    - language: only once the score is already positive
    - name-only bonus: name hit with no description and no keywords

    Categories scoring at least ``weights.threshold`` are kept. The primary
    category is the first kept one in ``PRIMARY_PRIORITY``.
    """

    def __init__(
        self,
        weights: ClassifierWeights | None = None,
        cache_names: bool = True,
        cache_size: int = NAME_CACHE_SIZE,
    ) -> None:
        """Initialize the classifier.

        Args:
            weights: Signal weights and threshold. Defaults to ClassifierWeights().
            cache_names: Memoize namespace stripping per raw name.
            cache_size: Maximum cached names. The cache is cleared when full.
        """
        self.weights = weights or ClassifierWeights()
        self.cache_names = cache_names
        self.cache_size = cache_size
        self._rules = {category: _CompiledRule(rule) for category, rule in CATEGORY_RULES.items()}
        self._name_cache: dict[str, str] = {}
        self._cache_lock = threading.Lock()

    def artifact_name(self, name: str | None) -> str:
        """Namespace-stripped, lowercased name, memoized per instance."""
        if not name or not self.cache_names:
            return strip_namespace(name)
        with self._cache_lock:
            cached = self._name_cache.get(name)
        if cached is not None:
            return cached
        artifact = strip_namespace(name)
        with self._cache_lock:
            if len(self._name_cache) >= self.cache_size:
                self._name_cache.clear()
            self._name_cache[name] = artifact
        return artifact

    def classify(
        self,
        name: str | None,
        description: str | None = None,
        keywords: Iterable[str] | None = None,
        language: str | None = None,
        platform: str | Platform | None = None,
    ) -> CategoryResult:
        """Infer the categories of a package.

        Args:
            name: Package name, possibly ``group:artifact`` or ``@scope/name``.
            description: Free text description.
            keywords: Registry keywords / tags.
            language: Primary programming language.
            platform: Package manager identifier.

        Returns:
            CategoryResult whose category set is never empty.
        """
        artifact = self.artifact_name(name)
        text = (description or "").strip().lower()
        keyword_list = [k.strip().lower() for k in (keywords or []) if k and k.strip()]
        lang = (language or "").strip().lower()
        parsed_platform = Platform.parse(platform)

        scores = {
            category: self.score_category(category, artifact, text, keyword_list, lang, parsed_platform)
            for category in self._rules
        }

        threshold = self.weights.threshold
        matched = frozenset(c for c, s in scores.items() if s >= threshold)
        if not matched:
            matched = frozenset({Category.OTHER})

        primary = self.primary_category(matched)
        logger.debug(
            f"Classified {name!r}: {sorted(c.value for c in matched)} (primary {primary.value})"
        )
        return CategoryResult(categories=matched, primary=primary, scores=scores)

    def classify_record(self, record: PackageRecord) -> CategoryResult:
        """Classify a PackageRecord."""
        return self.classify(
            record.name,
            record.description,
            record.keywords,
            record.language,
            record.platform,
        )

    def score_category(
        self,
        category: Category,
        artifact: str,
        description: str,
        keywords: list[str],
        language: str,
        platform: Platform | None = None,
    ) -> int:
        """Score one category from already-normalized inputs.

        Args:
            category: A concrete category (not OTHER).
            artifact: Lowercased, namespace-stripped name.
            description: Lowercased description, "" when missing.
            keywords: Lowercased keywords.
            language: Lowercased language, "" when missing.
            platform: Parsed platform.

        Returns:
            Non-negative integer score.
        """
        compiled = self._rules.get(category)
        if compiled is None:
            return 0
        rule = compiled.rule
        w = self.weights
        score = 0

        # Name signal (once, however many patterns hit)
        name_hit = False
        if artifact:
            tokens = _tokens(artifact)
            name_hit = any(_name_matches(artifact, tokens, p) for p in rule.names)
        platform_hit = category is Category.MOBILE and platform is not None and platform.is_apple
        if name_hit or platform_hit:
            score += w.name

        # Description signal
        if description:
            groups_hit = sum(1 for regex in compiled.description_groups if regex.search(description))
            score += min(groups_hit, w.max_description_groups) * w.description
            if compiled.negative is not None and compiled.negative.search(description):
                score -= w.description

        # Keyword signal
        keyword_hits = sum(1 for k in keywords if self._keyword_matches(k, rule.keywords))
        score += min(keyword_hits, w.max_keywords) * w.keyword

        # Language bonus
        if score > 0 and language and language in rule.languages:
            score += w.language

        # Name-only bonus for metadata-poor records
        if name_hit and not description and not keywords:
            score += w.name_only_bonus

        return max(0, score)

    def primary_category(self, categories: Iterable[Category]) -> Category:
        """Pick the single display category by fixed priority."""
        present = set(categories)
        for category in PRIMARY_PRIORITY:
            if category in present:
                return category
        return Category.OTHER

    @staticmethod
    def _keyword_matches(keyword: str, vocabulary: frozenset[str]) -> bool:
        if keyword in vocabulary:
            return True
        return any(token in vocabulary for token in _tokens(keyword))

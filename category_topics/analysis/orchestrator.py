"""
Category orchestrator for the text analytics pipeline.

Drives normalization, grouping by category and the per-category stages:

    Normalizer (corpus-global)
      -> group by category
      -> per category: DTMBuilder -> {TF-IDF -> KMeansClusterer}
                                  -> {TopicModeler}
      -> AnalysisReport

Architecture:
- Configuration is validated before any record is touched
- Each category runs inside its own CategoryContext (own builder,
  clusterer, topic modeler, matrices); contexts never alias
- Categories run on a bounded ThreadPoolExecutor and are joined before the
  report is assembled in sorted label order
- Insufficient data and unexpected errors are recorded per category and
  never abort the other categories
"""

import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from category_topics.analysis.schemas import AnalysisReport, CategoryReport
from category_topics.clustering.service import KMeansClusterer
from category_topics.config.analysis import AnalysisConfig, ConfigurationError
from category_topics.ingestion.schemas import Document
from category_topics.observability.logging import bind_context, clear_context, get_logger
from category_topics.observability.metrics import get_metrics
from category_topics.text.normalizer import Normalizer
from category_topics.topics.service import TopicModeler
from category_topics.vectorize.builder import DTMBuilder
from category_topics.vectorize.schemas import InsufficientData
from category_topics.vectorize.tfidf import transform

logger = get_logger(__name__)


@dataclass
class CategoryContext:
    """
    Everything one category's analysis owns.

    Created per category per run; the stage services are instantiated per
    context so no state is shared between concurrently running categories.
    """

    category: str
    documents: list[Document]
    n_empty: int
    config: AnalysisConfig
    builder: DTMBuilder = field(init=False)
    clusterer: KMeansClusterer = field(init=False)
    modeler: TopicModeler = field(init=False)

    def __post_init__(self) -> None:
        self.builder = DTMBuilder(self.config)
        self.clusterer = KMeansClusterer(self.config)
        self.modeler = TopicModeler(self.config)

    @property
    def n_documents(self) -> int:
        return len(self.documents) + self.n_empty


class CategoryOrchestrator:
    """
    Runs the per-category analysis over a corpus of labeled entries.

    Usage:
        >>> orchestrator = CategoryOrchestrator(build_config(top_n_terms=3))
        >>> report = orchestrator.run([
        ...     {"id": "1", "text": "I love my family and my dog", "category": "married"},
        ...     {"id": "2", "text": "Friends and parties make me happy", "category": "single"},
        ... ])
        >>> [t for t, _ in report.categories["married"].top_terms]
        ['dog', 'famili', 'love']
    """

    def __init__(self, config: AnalysisConfig | None = None):
        """
        Initialize the orchestrator.

        Args:
            config: Analysis configuration. If None, uses default config
                (environment variables with ANALYSIS_ prefix apply).

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        if config is None:
            try:
                config = AnalysisConfig()
            except ValidationError as e:
                raise ConfigurationError(f"Invalid analysis configuration: {e}") from e
        elif not isinstance(config, AnalysisConfig):
            raise ConfigurationError(
                f"config must be an AnalysisConfig, got {type(config).__name__}"
            )
        self.config = config
        self.normalizer = Normalizer(config)

    def run(
        self,
        documents: Iterable[Document | dict[str, Any]],
        categories_to_exclude: Iterable[str] | None = None,
    ) -> AnalysisReport:
        """
        Analyze every category of the corpus.

        Args:
            documents: Documents or ``{id, text, category}`` mappings.
            categories_to_exclude: Labels to drop in addition to
                ``config.excluded_categories``.

        Returns:
            AnalysisReport with one CategoryReport per admitted label.

        Raises:
            ConfigurationError: If ``categories_to_exclude`` is a bare string.
        """
        if isinstance(categories_to_exclude, str):
            raise ConfigurationError("categories_to_exclude must be a collection of labels")
        excluded = {
            label.strip()
            for label in (*self.config.excluded_categories, *(categories_to_exclude or ()))
            if label.strip()
        }

        start_time = time.monotonic()
        metrics = get_metrics()

        report = AnalysisReport(parameters=self._parameters())
        admitted = self._admit(documents, excluded, report)
        contexts = self._build_contexts(self.normalizer.normalize_documents(admitted))

        metrics.record_documents("malformed", report.n_malformed)
        metrics.record_documents("duplicate", report.n_duplicate)
        metrics.record_documents("excluded", report.n_excluded + report.n_missing_category)
        metrics.record_documents("accepted", len(admitted))
        metrics.record_documents("empty", sum(ctx.n_empty for ctx in contexts))

        logger.info(
            "Analysis started",
            records=report.n_records,
            admitted=len(admitted),
            malformed=report.n_malformed,
            duplicate=report.n_duplicate,
            missing_category=report.n_missing_category,
            excluded=report.n_excluded,
            categories=len(contexts),
        )

        results: dict[str, CategoryReport] = {}
        if contexts:
            workers = min(self.config.max_workers, len(contexts))
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="category") as pool:
                futures = {ctx.category: pool.submit(self._run_isolated, ctx) for ctx in contexts}
                for category, future in futures.items():
                    results[category] = future.result()

        for category in sorted(results):
            category_report = results[category]
            report.categories[category] = category_report
            metrics.record_category(category_report.status)

        elapsed = time.monotonic() - start_time
        metrics.record_run_latency(elapsed)
        logger.info(
            "Analysis complete",
            categories=len(report.categories),
            skipped=report.skipped_categories,
            elapsed_s=round(elapsed, 3),
        )
        return report

    def _parameters(self) -> dict[str, Any]:
        """Configuration values echoed into the report."""
        return {
            "k_clusters": self.config.k_clusters,
            "k_topics": self.config.k_topics,
            "min_term_length": self.config.min_term_length,
            "random_seed": self.config.random_seed,
            "sparsity_upper_bound": self.config.sparsity_upper_bound,
            "top_n_terms": self.config.top_n_terms,
        }

    def _admit(
        self,
        records: Iterable[Document | dict[str, Any]],
        excluded: set[str],
        report: AnalysisReport,
    ) -> list[Document]:
        """
        Validate records and drop missing or excluded categories, counting each.

        Document ids must be unique across the corpus: cluster and topic
        assignments are keyed by id. The first record with an id wins, later
        ones are counted as duplicates.
        """
        admitted: list[Document] = []
        seen_ids: set[str] = set()
        for record in records:
            report.n_records += 1
            try:
                doc = Document.from_record(record)
            except ValidationError:
                report.n_malformed += 1
                continue
            if doc.id in seen_ids:
                report.n_duplicate += 1
                continue
            seen_ids.add(doc.id)
            if doc.category is None:
                report.n_missing_category += 1
            elif doc.category in excluded:
                report.n_excluded += 1
            else:
                admitted.append(doc)
        return admitted

    def _build_contexts(self, documents: list[Document]) -> list[CategoryContext]:
        """Group normalized documents by label, preserving input order."""
        groups: dict[str, list[Document]] = {}
        empty: dict[str, int] = {}
        for doc in documents:
            groups.setdefault(doc.category, [])
            empty.setdefault(doc.category, 0)
            if doc.is_empty:
                empty[doc.category] += 1
            else:
                groups[doc.category].append(doc)

        return [
            CategoryContext(
                category=category,
                documents=groups[category],
                n_empty=empty[category],
                config=self.config,
            )
            for category in sorted(groups)
        ]

    def _run_isolated(self, ctx: CategoryContext) -> CategoryReport:
        """Run one category; unexpected errors become a failed report."""
        bind_context(category=ctx.category)
        try:
            return self._analyze_category(ctx)
        except Exception as e:
            logger.exception("Category analysis failed")
            return CategoryReport(
                category=ctx.category,
                status="failed",
                n_documents=ctx.n_documents,
                n_empty_documents=ctx.n_empty,
                error=f"{type(e).__name__}: {e}",
            )
        finally:
            clear_context()

    def _analyze_category(self, ctx: CategoryContext) -> CategoryReport:
        """Build matrices and fit clusterer and topic model for one category."""
        metrics = get_metrics()
        config = self.config

        report = CategoryReport(
            category=ctx.category,
            n_documents=ctx.n_documents,
            n_empty_documents=ctx.n_empty,
        )

        token_sequences = [doc.tokens for doc in ctx.documents]
        document_ids = [doc.id for doc in ctx.documents]

        profile = ctx.builder.build(token_sequences, document_ids, prune_common=False)
        if not isinstance(profile, InsufficientData):
            report.top_terms = profile.vocabulary.top_terms(profile.term_totals(), config.top_n_terms)

        stage_start = time.monotonic()
        dtm = ctx.builder.build(token_sequences, document_ids)
        metrics.record_stage_latency("vocabulary", time.monotonic() - stage_start)

        if isinstance(dtm, InsufficientData):
            report.skip(dtm)
            for stage in ("clustering", "topic_model"):
                report.skip(InsufficientData(stage=stage, reason="no vocabulary"))
        else:
            report.n_dropped_documents = dtm.n_dropped

            stage_start = time.monotonic()
            tfidf = transform(dtm)
            metrics.record_stage_latency("tfidf", time.monotonic() - stage_start)

            stage_start = time.monotonic()
            clustering = ctx.clusterer.cluster(tfidf, config.k_clusters, config.random_seed)
            metrics.record_stage_latency("clustering", time.monotonic() - stage_start)
            if isinstance(clustering, InsufficientData):
                report.skip(clustering)
            else:
                report.clustering = clustering

            stage_start = time.monotonic()
            topic_model = ctx.modeler.fit(dtm, config.k_topics, config.random_seed)
            metrics.record_stage_latency("topic_model", time.monotonic() - stage_start)
            if isinstance(topic_model, InsufficientData):
                report.skip(topic_model)
            else:
                report.topic_model = topic_model

        for stage in report.skipped:
            metrics.record_skip(stage)

        if report.clustering is None and report.topic_model is None:
            report.status = "skipped"
        elif report.skipped:
            report.status = "partial"

        logger.info(
            "Category analyzed",
            status=report.status,
            documents=report.n_documents,
            analyzed=report.n_analyzed_documents,
            skipped=report.skipped or None,
        )
        return report

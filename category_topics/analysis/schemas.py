"""Schema definitions for the per-category analysis report.

The report is the only structure handed to presentation layers (word
clouds, bar charts, narrative text). It carries top-term lists, cluster and
topic signatures, per-document dominant topics and explicit skip markers;
raw matrices stay inside the pipeline.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Literal

from category_topics.clustering.schemas import ClusteringResult
from category_topics.topics.schemas import TopicModel
from category_topics.vectorize.schemas import InsufficientData

CategoryStatus = Literal["complete", "partial", "skipped", "failed"]


@dataclass
class CategoryReport:
    """
    Analysis results for one category.

    Attributes:
        category: Category label.
        status: complete (all stages ran), partial (some stage skipped),
            skipped (no clustering and no topic model), failed (unexpected
            error, see ``error``).
        n_documents: Documents admitted with this label.
        n_empty_documents: Documents with no tokens after normalization.
        n_dropped_documents: Documents removed because pruning left them
            without vocabulary terms.
        top_terms: Ranked (term, count) frequency profile of the category.
        clustering: K-means result, or None when skipped.
        topic_model: LDA result, or None when skipped.
        skipped: Mapping stage -> reason for every stage that did not run.
        error: Error message when status is failed.

    Example:
        >>> report = CategoryReport(category="single", n_documents=1)
        >>> report.skip(InsufficientData("clustering", "1 document(s), need at least 2"))
        >>> report.insufficient_data
        True
    """

    category: str
    status: CategoryStatus = "complete"
    n_documents: int = 0
    n_empty_documents: int = 0
    n_dropped_documents: int = 0
    top_terms: list[tuple[str, float]] = field(default_factory=list)
    clustering: ClusteringResult | None = None
    topic_model: TopicModel | None = None
    skipped: dict[str, str] = field(default_factory=dict)
    error: str | None = None

    @property
    def n_analyzed_documents(self) -> int:
        """Documents that made it into the category's matrices."""
        return self.n_documents - self.n_empty_documents - self.n_dropped_documents

    @property
    def insufficient_data(self) -> bool:
        """True when at least one stage was skipped for lack of data."""
        return bool(self.skipped)

    def skip(self, signal: InsufficientData) -> None:
        """Record a stage that reported insufficient data."""
        self.skipped[signal.stage] = signal.reason

    def to_dict(self, precision: int = 6) -> dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            precision: Decimal places kept for weights.
        """
        return {
            "category": self.category,
            "status": self.status,
            "insufficient_data": self.insufficient_data,
            "skipped": dict(self.skipped),
            "error": self.error,
            "documents": {
                "total": self.n_documents,
                "empty": self.n_empty_documents,
                "dropped": self.n_dropped_documents,
                "analyzed": self.n_analyzed_documents,
            },
            "top_terms": [
                {"term": term, "weight": round(weight, precision)}
                for term, weight in self.top_terms
            ],
            "clustering": self.clustering.to_dict(precision) if self.clustering else None,
            "topic_model": self.topic_model.to_dict(precision) if self.topic_model else None,
        }


@dataclass
class AnalysisReport:
    """
    Results of one orchestrator run.

    Attributes:
        categories: CategoryReport per label, in sorted label order.
        n_records: Records received.
        n_malformed: Records rejected by schema validation.
        n_duplicate: Records whose id was already seen (first one wins).
        n_missing_category: Records without a category label.
        n_excluded: Records whose label is excluded by policy.
        parameters: Configuration values that shaped the numbers.
    """

    categories: dict[str, CategoryReport] = field(default_factory=dict)
    n_records: int = 0
    n_malformed: int = 0
    n_duplicate: int = 0
    n_missing_category: int = 0
    n_excluded: int = 0
    parameters: dict[str, Any] = field(default_factory=dict)

    @property
    def skipped_categories(self) -> list[str]:
        """Labels whose analysis was skipped or failed."""
        return [
            name
            for name, report in self.categories.items()
            if report.status in ("skipped", "failed")
        ]

    def to_dict(self, precision: int = 6) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "records": {
                "total": self.n_records,
                "malformed": self.n_malformed,
                "duplicate": self.n_duplicate,
                "missing_category": self.n_missing_category,
                "excluded": self.n_excluded,
            },
            "parameters": dict(self.parameters),
            "categories": {
                name: report.to_dict(precision) for name, report in self.categories.items()
            },
        }

    def to_json(self, indent: int | None = 2, precision: int = 6) -> str:
        """
        Serialize deterministically.

        Keys are sorted and weights rounded, so identical runs produce
        byte-identical output.
        """
        return json.dumps(
            self.to_dict(precision),
            indent=indent,
            sort_keys=True,
            ensure_ascii=False,
        )

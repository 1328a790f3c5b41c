"""Schema definitions for per-category topic models.

Provides the fitted topic model record (topic-term and document-topic
distributions) and the per-topic signature used in the analysis report.
"""

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from category_topics.vectorize.schemas import Vocabulary


@dataclass
class TopicSummary:
    """
    Descriptive signature of one topic.

    Attributes:
        topic_id: Topic index in [0, k).
        top_terms: Ranked (term, probability) pairs.
        document_count: Documents whose dominant topic is this one.
    """

    topic_id: int
    top_terms: list[tuple[str, float]] = field(default_factory=list)
    document_count: int = 0

    def to_dict(self, precision: int = 6) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "topic_id": self.topic_id,
            "document_count": self.document_count,
            "top_terms": [
                {"term": term, "weight": round(weight, precision)}
                for term, weight in self.top_terms
            ],
        }


@dataclass
class TopicModel:
    """
    Fitted LDA model of one category.

    Each category owns its own instance; nothing is shared across categories.

    Attributes:
        k: Number of topics (min(requested, n_documents)).
        vocabulary: Column vocabulary of the fitted matrix.
        document_ids: Document id per row of ``doc_topic``.
        topic_term: Array (k, n_terms); each row is a distribution summing to 1.
        doc_topic: Array (n_documents, k); each row sums to 1.
        topics: One TopicSummary per topic, ordered by topic_id.
        n_iter: Inference passes performed.
    """

    k: int
    vocabulary: Vocabulary
    document_ids: tuple[str, ...]
    topic_term: np.ndarray
    doc_topic: np.ndarray
    topics: list[TopicSummary]
    n_iter: int

    @property
    def dominant_topics(self) -> np.ndarray:
        """
        Dominant topic per document.

        argmax of each document-topic row; ties resolve to the lowest topic
        index.
        """
        return np.argmax(self.doc_topic, axis=1)

    @property
    def document_topics(self) -> dict[str, int]:
        """Mapping from document id to dominant topic."""
        return {
            doc_id: int(topic) for doc_id, topic in zip(self.document_ids, self.dominant_topics)
        }

    def to_dict(self, precision: int = 6) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization (no raw matrices)."""
        return {
            "k": self.k,
            "n_iter": self.n_iter,
            "topics": [t.to_dict(precision) for t in self.topics],
            "document_topics": self.document_topics,
        }

"""Schema definitions for vocabularies and document-term matrices.

Provides immutable records for the matrices flowing between the builder,
the TF-IDF transformer, the clusterer and the topic modeler, plus the
InsufficientData signal every stage returns instead of a result when a
category is too small to analyze.
"""

from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

import numpy as np
from scipy import sparse


@dataclass(frozen=True)
class InsufficientData:
    """
    Signal that a stage could not run for a group.

    Not an error: the orchestrator records it per category and continues.

    Attributes:
        stage: Pipeline stage that declined to run (vocabulary, clustering, topic_model).
        reason: Human-readable reason, e.g. "1 document(s), need at least 2".
    """

    stage: str
    reason: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"stage": self.stage, "reason": self.reason}


@dataclass(frozen=True)
class Vocabulary:
    """
    Ordered term list with contiguous column indices.

    Column ``i`` holds ``terms[i]``; terms are sorted lexicographically so the
    mapping is identical across runs for the same input.

    Example:
        >>> vocab = Vocabulary(terms=("dog", "famili", "love"))
        >>> vocab.index_of("famili")
        1
    """

    terms: tuple[str, ...]

    @cached_property
    def index(self) -> dict[str, int]:
        """Mapping from term to column index."""
        return {term: i for i, term in enumerate(self.terms)}

    def __len__(self) -> int:
        return len(self.terms)

    def __contains__(self, term: object) -> bool:
        return term in self.index

    def index_of(self, term: str) -> int:
        """Column index of ``term``. Raises KeyError for unknown terms."""
        return self.index[term]

    def top_terms(self, weights: np.ndarray, n: int) -> list[tuple[str, float]]:
        """
        Rank terms by weight.

        Only strictly positive weights are listed. Ties are broken by column
        index, i.e. alphabetically.

        Args:
            weights: One weight per vocabulary term.
            n: Maximum number of terms to return.

        Returns:
            List of (term, weight) tuples in descending weight order.
        """
        weights = np.asarray(weights, dtype=np.float64).ravel()
        if weights.shape[0] != len(self.terms):
            raise ValueError(
                f"weights ({weights.shape[0]}) and vocabulary ({len(self.terms)}) "
                f"must have the same length"
            )
        order = np.argsort(-weights, kind="stable")
        ranked: list[tuple[str, float]] = []
        for idx in order[:n]:
            if weights[idx] <= 0.0:
                break
            ranked.append((self.terms[idx], float(weights[idx])))
        return ranked


@dataclass(frozen=True)
class DocumentTermMatrix:
    """
    Sparse raw-count matrix for one analysis group.

    Rows are the retained documents in input order, columns follow the
    vocabulary. Every row has a strictly positive total: documents whose
    counts were all pruned are listed in ``dropped_document_ids`` instead.

    Attributes:
        counts: CSR matrix of shape (n_documents, n_terms), integer counts.
        vocabulary: Column vocabulary.
        document_ids: Ids of the retained documents, aligned with rows.
        dropped_document_ids: Ids of documents removed for having no
            vocabulary terms.
    """

    counts: sparse.csr_matrix
    vocabulary: Vocabulary
    document_ids: tuple[str, ...]
    dropped_document_ids: tuple[str, ...] = field(default_factory=tuple)

    @property
    def n_documents(self) -> int:
        return self.counts.shape[0]

    @property
    def n_terms(self) -> int:
        return self.counts.shape[1]

    @property
    def n_dropped(self) -> int:
        return len(self.dropped_document_ids)

    def document_frequencies(self) -> np.ndarray:
        """Number of retained documents containing each term."""
        return np.asarray((self.counts > 0).sum(axis=0)).ravel()

    def row_totals(self) -> np.ndarray:
        """Total term count per retained document."""
        return np.asarray(self.counts.sum(axis=1)).ravel()

    def term_totals(self) -> np.ndarray:
        """Total count of each term across retained documents."""
        return np.asarray(self.counts.sum(axis=0)).ravel()


@dataclass(frozen=True)
class TfidfMatrix:
    """
    TF-IDF weights for one analysis group.

    Same shape, vocabulary and row order as the DocumentTermMatrix it was
    computed from.
    """

    weights: sparse.csr_matrix
    vocabulary: Vocabulary
    document_ids: tuple[str, ...]

    @property
    def n_documents(self) -> int:
        return self.weights.shape[0]

    @property
    def n_terms(self) -> int:
        return self.weights.shape[1]

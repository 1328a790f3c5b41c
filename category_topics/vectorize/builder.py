"""
Vocabulary and document-term matrix construction.

Builds a per-group vocabulary with frequency-based pruning and the sparse
raw-count matrix over it. Documents left without any vocabulary term are
dropped from the matrix and reported, never silently lost.

Pruning rules (all must hold for a term to enter the vocabulary):
- len(term) >= min_term_length
- document frequency >= min_document_frequency
- document frequency <= sparsity_upper_bound * n_documents
  (only for groups of at least min_documents_for_pruning documents; in a
  one-document group every term trivially reaches 100%)

The df bounds follow scikit-learn CountVectorizer's min_df (absolute count)
and max_df (proportion) semantics. The input is already stemmed token
sequences, and the upper bound is conditional on group size, so the
vocabulary and CSR matrix are assembled here rather than by CountVectorizer.
"""

import logging
from collections import Counter
from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np
from scipy import sparse

from category_topics.vectorize.schemas import DocumentTermMatrix, InsufficientData, Vocabulary

if TYPE_CHECKING:
    from category_topics.config.analysis import AnalysisConfig

logger = logging.getLogger(__name__)


class DTMBuilder:
    """
    Builds a Vocabulary and DocumentTermMatrix from token sequences.

    Usage:
        >>> builder = DTMBuilder(config)
        >>> result = builder.build([["love", "famili"], ["famili", "dog"]])
        >>> result.vocabulary.terms
        ('dog', 'famili', 'love')
    """

    def __init__(self, config: "AnalysisConfig | None" = None):
        """
        Initialize the builder.

        Args:
            config: Analysis configuration. If None, uses default config.
        """
        if config is None:
            from category_topics.config.analysis import AnalysisConfig

            config = AnalysisConfig()
        self.config = config

    def build(
        self,
        token_sequences: Sequence[Sequence[str]],
        document_ids: Sequence[str] | None = None,
        prune_common: bool = True,
    ) -> DocumentTermMatrix | InsufficientData:
        """
        Build the vocabulary and count matrix for one group.

        Args:
            token_sequences: One token sequence per document.
            document_ids: Ids aligned with ``token_sequences``. Defaults to
                the positional index as a string.
            prune_common: Apply the upper document-frequency bound. Disabled
                for raw frequency profiles.

        Returns:
            DocumentTermMatrix, or InsufficientData when there are no
            documents or the vocabulary is empty after pruning.

        Raises:
            ValueError: If ``document_ids`` does not match the number of sequences.
        """
        n_docs = len(token_sequences)
        if document_ids is None:
            document_ids = [str(i) for i in range(n_docs)]
        elif len(document_ids) != n_docs:
            raise ValueError(
                f"token_sequences ({n_docs}) and document_ids ({len(document_ids)}) "
                f"must have the same length"
            )

        if n_docs == 0:
            return InsufficientData(stage="vocabulary", reason="no documents")

        vocabulary = self._build_vocabulary(token_sequences, prune_common)
        if len(vocabulary) == 0:
            return InsufficientData(
                stage="vocabulary",
                reason=f"empty vocabulary after pruning ({n_docs} document(s))",
            )

        return self._build_matrix(token_sequences, document_ids, vocabulary)

    def _build_vocabulary(
        self,
        token_sequences: Sequence[Sequence[str]],
        prune_common: bool,
    ) -> Vocabulary:
        """Select vocabulary terms by length and document frequency."""
        n_docs = len(token_sequences)
        doc_freq: Counter[str] = Counter()
        for tokens in token_sequences:
            doc_freq.update(set(tokens))

        max_doc_count: float | None = None
        if prune_common and n_docs >= self.config.min_documents_for_pruning:
            max_doc_count = self.config.sparsity_upper_bound * n_docs

        min_len = self.config.min_term_length
        min_df = self.config.min_document_frequency
        terms = sorted(
            term
            for term, df in doc_freq.items()
            if len(term) >= min_len
            and df >= min_df
            and (max_doc_count is None or df <= max_doc_count)
        )

        logger.debug(
            f"Vocabulary: {len(terms)} of {len(doc_freq)} candidate terms kept "
            f"(max_doc_count={max_doc_count})"
        )
        return Vocabulary(terms=tuple(terms))

    def _build_matrix(
        self,
        token_sequences: Sequence[Sequence[str]],
        document_ids: Sequence[str],
        vocabulary: Vocabulary,
    ) -> DocumentTermMatrix:
        """Count vocabulary terms per document, dropping empty rows."""
        index = vocabulary.index
        indptr = [0]
        indices: list[int] = []
        data: list[int] = []
        kept_ids: list[str] = []
        dropped_ids: list[str] = []

        for doc_id, tokens in zip(document_ids, token_sequences):
            row = Counter(index[t] for t in tokens if t in index)
            if not row:
                dropped_ids.append(doc_id)
                continue
            for col in sorted(row):
                indices.append(col)
                data.append(row[col])
            indptr.append(len(indices))
            kept_ids.append(doc_id)

        counts = sparse.csr_matrix(
            (
                np.asarray(data, dtype=np.int64),
                np.asarray(indices, dtype=np.int64),
                np.asarray(indptr, dtype=np.int64),
            ),
            shape=(len(kept_ids), len(vocabulary)),
        )

        if dropped_ids:
            logger.debug(f"Dropped {len(dropped_ids)} document(s) with no vocabulary terms")

        return DocumentTermMatrix(
            counts=counts,
            vocabulary=vocabulary,
            document_ids=tuple(kept_ids),
            dropped_document_ids=tuple(dropped_ids),
        )

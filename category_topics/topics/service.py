"""
Latent Dirichlet Allocation topic modeling for one category.

Architecture:
- scikit-learn LatentDirichletAllocation, batch variational Bayes over the
  raw count matrix, seeded through random_state
- Deferred import of scikit-learn, model created per fit() call
- k_topics = min(k_requested, n_documents); categories with fewer than
  config.min_documents documents return InsufficientData
- Distributions are renormalized so every topic row and every document row
  sums to 1
"""

import logging
import time
from typing import TYPE_CHECKING, Any

import numpy as np

from category_topics.topics.schemas import TopicModel, TopicSummary
from category_topics.vectorize.schemas import DocumentTermMatrix, InsufficientData

if TYPE_CHECKING:
    from category_topics.config.analysis import AnalysisConfig

logger = logging.getLogger(__name__)


def _normalize_rows(matrix: np.ndarray) -> np.ndarray:
    """Scale each row to sum to 1; all-zero rows become uniform."""
    matrix = np.asarray(matrix, dtype=np.float64)
    totals = matrix.sum(axis=1, keepdims=True)
    uniform = np.full_like(matrix, 1.0 / matrix.shape[1])
    return np.where(totals > 0, matrix / np.where(totals > 0, totals, 1.0), uniform)


class TopicModeler:
    """
    Per-category LDA topic modeler.

    Usage:
        >>> modeler = TopicModeler(config)
        >>> model = modeler.fit(dtm, k_topics_requested=3, seed=42)
        >>> for topic in model.topics:
        ...     print(topic.topic_id, [t for t, _ in topic.top_terms[:3]])
        0 ['wife', 'dinner', 'anniversari']
        1 ['son', 'school', 'game']

    Note:
        Small vocabularies can yield near-uniform or repeated top-term lists.
        That is accepted output, reproducible for a fixed seed.
    """

    def __init__(self, config: "AnalysisConfig | None" = None):
        """
        Initialize topic modeler.

        Args:
            config: Analysis configuration. If None, uses default config.
        """
        if config is None:
            from category_topics.config.analysis import AnalysisConfig

            config = AnalysisConfig()
        self.config = config

    def fit(
        self,
        dtm: DocumentTermMatrix,
        k_topics_requested: int | None = None,
        seed: int | None = None,
    ) -> TopicModel | InsufficientData:
        """
        Fit a topic model on one category's count matrix.

        Args:
            dtm: Raw-count matrix of the category.
            k_topics_requested: Requested topics. Defaults to config.k_topics.
            seed: Random seed. Defaults to config.random_seed.

        Returns:
            TopicModel, or InsufficientData for categories with too few
            documents or an empty vocabulary.

        Raises:
            ValueError: If k_topics_requested < 1.
        """
        k_requested = self.config.k_topics if k_topics_requested is None else k_topics_requested
        seed = self.config.random_seed if seed is None else seed
        if k_requested < 1:
            raise ValueError(f"k_topics_requested must be >= 1, got {k_requested}")

        n_docs = dtm.n_documents
        min_docs = max(1, self.config.min_documents)
        if n_docs < min_docs:
            return InsufficientData(
                stage="topic_model",
                reason=f"{n_docs} document(s), need at least {min_docs}",
            )
        if dtm.n_terms == 0:
            return InsufficientData(stage="topic_model", reason="empty vocabulary")

        k = min(k_requested, n_docs)
        start_time = time.monotonic()

        model = self._create_model(k, seed)
        doc_topic = _normalize_rows(model.fit_transform(dtm.counts))
        topic_term = _normalize_rows(model.components_)
        n_iter = int(model.n_iter_)

        dominant = np.argmax(doc_topic, axis=1)
        topics = [
            TopicSummary(
                topic_id=topic_id,
                top_terms=dtm.vocabulary.top_terms(topic_term[topic_id], self.config.top_n_terms),
                document_count=int(np.sum(dominant == topic_id)),
            )
            for topic_id in range(k)
        ]

        elapsed = time.monotonic() - start_time
        logger.debug(
            f"Topic model complete: k={k}, n_docs={n_docs}, n_terms={dtm.n_terms}, "
            f"n_iter={n_iter}, {elapsed:.3f}s elapsed"
        )

        return TopicModel(
            k=k,
            vocabulary=dtm.vocabulary,
            document_ids=dtm.document_ids,
            topic_term=topic_term,
            doc_topic=doc_topic,
            topics=topics,
            n_iter=n_iter,
        )

    def _create_model(self, k: int, seed: int) -> Any:
        """
        Create a scikit-learn LatentDirichletAllocation model.

        Imports are deferred to keep module import cheap.

        Returns:
            Configured LatentDirichletAllocation instance ready for fit_transform.
        """
        from sklearn.decomposition import LatentDirichletAllocation

        return LatentDirichletAllocation(
            n_components=k,
            learning_method="batch",
            max_iter=self.config.lda_max_iter,
            doc_topic_prior=self.config.lda_doc_topic_prior,
            topic_word_prior=self.config.lda_topic_word_prior,
            evaluate_every=-1,
            random_state=seed,
        )

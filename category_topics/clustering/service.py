"""
K-means clustering of a category's TF-IDF rows.

Architecture:
- Lloyd's algorithm via scikit-learn KMeans on the sparse TF-IDF rows
  (Euclidean distance)
- Deferred import of scikit-learn, model created per cluster() call
- effective_k = min(k_requested, n_rows); one or zero rows is reported as
  InsufficientData instead of producing a meaningless partition
- Seeded initialization: identical input + seed gives identical labels
- Cluster signatures are the top centroid TF-IDF terms
"""

import logging
import time
from typing import TYPE_CHECKING, Any

import numpy as np

from category_topics.clustering.schemas import ClusteringResult, ClusterSummary
from category_topics.vectorize.schemas import InsufficientData, TfidfMatrix

if TYPE_CHECKING:
    from category_topics.config.analysis import AnalysisConfig

logger = logging.getLogger(__name__)


class KMeansClusterer:
    """
    Centroid clustering of TF-IDF document vectors.

    Usage:
        >>> clusterer = KMeansClusterer(config)
        >>> result = clusterer.cluster(tfidf, k_requested=3, seed=42)
        >>> for c in result.clusters:
        ...     print(c.cluster_id, c.size, [t for t, _ in c.top_terms[:3]])
        0 4 ['wife', 'dinner', 'anniversari']
        1 3 ['son', 'school', 'game']
    """

    def __init__(self, config: "AnalysisConfig | None" = None):
        """
        Initialize clusterer.

        Args:
            config: Analysis configuration. If None, uses default config.
        """
        if config is None:
            from category_topics.config.analysis import AnalysisConfig

            config = AnalysisConfig()
        self.config = config

    def cluster(
        self,
        matrix: TfidfMatrix,
        k_requested: int | None = None,
        seed: int | None = None,
    ) -> ClusteringResult | InsufficientData:
        """
        Partition the matrix rows into k clusters.

        Args:
            matrix: TF-IDF matrix of one category.
            k_requested: Requested clusters. Defaults to config.k_clusters.
            seed: Random seed. Defaults to config.random_seed.

        Returns:
            ClusteringResult, or InsufficientData when the matrix has fewer
            than ``config.min_documents`` rows (and always for <= 1 row).

        Raises:
            ValueError: If k_requested < 1.
        """
        k_requested = self.config.k_clusters if k_requested is None else k_requested
        seed = self.config.random_seed if seed is None else seed
        if k_requested < 1:
            raise ValueError(f"k_requested must be >= 1, got {k_requested}")

        n_rows = matrix.n_documents
        min_rows = max(2, self.config.min_documents)
        if n_rows < min_rows:
            return InsufficientData(
                stage="clustering",
                reason=f"{n_rows} document(s), need at least {min_rows}",
            )

        k = min(k_requested, n_rows)
        start_time = time.monotonic()

        model = self._create_model(k, seed)
        labels = model.fit_predict(matrix.weights)

        centroids = np.asarray(model.cluster_centers_, dtype=np.float64)
        clusters = self._build_clusters(matrix, labels, centroids)
        n_iter = int(model.n_iter_)

        elapsed = time.monotonic() - start_time
        logger.debug(
            f"Clustering complete: k={k}, n_rows={n_rows}, n_iter={n_iter}, "
            f"{elapsed:.3f}s elapsed"
        )

        return ClusteringResult(
            k=k,
            labels=np.asarray(labels, dtype=np.int64),
            document_ids=matrix.document_ids,
            centroids=centroids,
            clusters=clusters,
            inertia=float(model.inertia_),
            n_iter=n_iter,
            converged=n_iter < self.config.kmeans_max_iter,
        )

    def _create_model(self, k: int, seed: int) -> Any:
        """
        Create a scikit-learn KMeans model.

        Imports are deferred to keep module import cheap.

        Returns:
            Configured KMeans instance ready for fit_predict.
        """
        from sklearn.cluster import KMeans

        return KMeans(
            n_clusters=k,
            init="k-means++",
            n_init=self.config.kmeans_n_init,
            max_iter=self.config.kmeans_max_iter,
            algorithm="lloyd",
            random_state=seed,
        )

    def _build_clusters(
        self,
        matrix: TfidfMatrix,
        labels: np.ndarray,
        centroids: np.ndarray,
    ) -> list[ClusterSummary]:
        """Build one ClusterSummary per label from the fitted centroids."""
        clusters: list[ClusterSummary] = []
        for cluster_id in range(centroids.shape[0]):
            indices = [i for i, label in enumerate(labels) if label == cluster_id]
            clusters.append(
                ClusterSummary(
                    cluster_id=cluster_id,
                    size=len(indices),
                    document_ids=[matrix.document_ids[i] for i in indices],
                    top_terms=matrix.vocabulary.top_terms(
                        centroids[cluster_id], self.config.top_n_terms
                    ),
                )
            )
        return clusters

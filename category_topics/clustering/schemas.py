"""Schema definitions for k-means document clusters.

Provides dataclasses for the per-cluster signature (size, member documents,
top centroid terms) and for the full assignment of one category, with
serialization methods for the analysis report.
"""

from dataclasses import dataclass, field
from typing import Any

import numpy as np


@dataclass
class ClusterSummary:
    """
    Descriptive signature of one cluster.

    Attributes:
        cluster_id: Label in [0, k).
        size: Number of documents assigned to the cluster.
        document_ids: Ids of the assigned documents, in matrix row order.
        top_terms: Ranked (term, centroid TF-IDF weight) pairs.

    Example:
        >>> summary = ClusterSummary(
        ...     cluster_id=0,
        ...     size=2,
        ...     document_ids=["d1", "d4"],
        ...     top_terms=[("wife", 0.21), ("dinner", 0.12)],
        ... )
        >>> summary.to_dict()["top_terms"][0]
        {'term': 'wife', 'weight': 0.21}
    """

    cluster_id: int
    size: int
    document_ids: list[str] = field(default_factory=list)
    top_terms: list[tuple[str, float]] = field(default_factory=list)

    def to_dict(self, precision: int = 6) -> dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            precision: Decimal places kept for weights.
        """
        return {
            "cluster_id": self.cluster_id,
            "size": self.size,
            "document_ids": list(self.document_ids),
            "top_terms": [
                {"term": term, "weight": round(weight, precision)}
                for term, weight in self.top_terms
            ],
        }


@dataclass
class ClusteringResult:
    """
    K-means partition of one category's TF-IDF rows.

    Attributes:
        k: Effective number of clusters (min(requested, n_rows)).
        labels: Cluster label per matrix row.
        document_ids: Document id per matrix row.
        centroids: Dense centroid matrix of shape (k, n_terms).
        clusters: One ClusterSummary per label, ordered by cluster_id.
        inertia: Within-cluster sum of squared distances.
        n_iter: Lloyd iterations of the winning run.
        converged: False when the winning run stopped at the iteration cap.
    """

    k: int
    labels: np.ndarray
    document_ids: tuple[str, ...]
    centroids: np.ndarray
    clusters: list[ClusterSummary]
    inertia: float
    n_iter: int
    converged: bool

    @property
    def assignments(self) -> dict[str, int]:
        """Mapping from document id to cluster label."""
        return {doc_id: int(label) for doc_id, label in zip(self.document_ids, self.labels)}

    def to_dict(self, precision: int = 6) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "k": self.k,
            "inertia": round(self.inertia, precision),
            "n_iter": self.n_iter,
            "converged": self.converged,
            "clusters": [c.to_dict(precision) for c in self.clusters],
        }

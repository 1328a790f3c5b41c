"""
K-means clustering of per-category TF-IDF vectors.

Components:
- KMeansClusterer: seeded Lloyd clustering with insufficient-data handling
- ClusteringResult: labels, centroids and per-cluster signatures
- ClusterSummary: size, members and top centroid terms of one cluster
"""

from category_topics.clustering.schemas import ClusteringResult, ClusterSummary
from category_topics.clustering.service import KMeansClusterer

__all__ = [
    "ClusteringResult",
    "ClusterSummary",
    "KMeansClusterer",
]

"""Tests for KMeansClusterer."""

from unittest.mock import patch

import numpy as np
import pytest

from category_topics.clustering import ClusteringResult, KMeansClusterer
from category_topics.config.analysis import AnalysisConfig, build_config
from category_topics.vectorize import InsufficientData


class TestClustererInit:
    """Tests for KMeansClusterer initialization."""

    def test_default_config(self):
        """Should use default config when none provided."""
        clusterer = KMeansClusterer()
        assert isinstance(clusterer.config, AnalysisConfig)
        assert clusterer.config.k_clusters == 5

    def test_custom_config(self, clustering_config):
        clusterer = KMeansClusterer(config=clustering_config)
        assert clusterer.config.k_clusters == 2


class TestClusterWithMockedModel:
    """Tests for result assembly with a mocked KMeans model."""

    def test_result_fields(self, clustering_config, two_group_tfidf, mock_kmeans_model):
        clusterer = KMeansClusterer(config=clustering_config)

        with patch.object(clusterer, "_create_model", return_value=mock_kmeans_model):
            result = clusterer.cluster(two_group_tfidf)

        assert isinstance(result, ClusteringResult)
        assert result.k == 2
        assert result.inertia == pytest.approx(0.05)
        assert result.n_iter == 2
        assert result.converged

    def test_cluster_members(self, clustering_config, two_group_tfidf, mock_kmeans_model):
        clusterer = KMeansClusterer(config=clustering_config)

        with patch.object(clusterer, "_create_model", return_value=mock_kmeans_model):
            result = clusterer.cluster(two_group_tfidf)

        assert [c.size for c in result.clusters] == [2, 2]
        assert result.clusters[0].document_ids == ["a1", "a2"]
        assert result.clusters[1].document_ids == ["b1", "b2"]
        assert result.assignments == {"a1": 0, "a2": 0, "b1": 1, "b2": 1}

    def test_top_terms_from_centroids(self, clustering_config, two_group_tfidf, mock_kmeans_model):
        """Signatures rank centroid weights, ties alphabetically."""
        clusterer = KMeansClusterer(config=clustering_config)

        with patch.object(clusterer, "_create_model", return_value=mock_kmeans_model):
            result = clusterer.cluster(two_group_tfidf)

        assert [t for t, _ in result.clusters[0].top_terms] == ["dinner", "wife"]
        assert [t for t, _ in result.clusters[1].top_terms] == ["kid", "soccer", "game"]

    def test_model_receives_effective_k_and_seed(self, clustering_config, two_group_tfidf, mock_kmeans_model):
        clusterer = KMeansClusterer(config=clustering_config)

        with patch.object(clusterer, "_create_model", return_value=mock_kmeans_model) as create:
            clusterer.cluster(two_group_tfidf, k_requested=2, seed=99)

        create.assert_called_once_with(2, 99)

    def test_not_converged_at_iteration_cap(self, two_group_tfidf, mock_kmeans_model):
        config = build_config(kmeans_max_iter=2)
        clusterer = KMeansClusterer(config=config)

        with patch.object(clusterer, "_create_model", return_value=mock_kmeans_model):
            result = clusterer.cluster(two_group_tfidf, k_requested=2)

        assert not result.converged


class TestClusterWithKMeans:
    """Tests running the real scikit-learn KMeans."""

    def test_separates_groups(self, clustering_config, two_group_tfidf):
        """Documents sharing vocabulary land in the same cluster."""
        result = KMeansClusterer(config=clustering_config).cluster(two_group_tfidf)
        a = result.assignments

        assert a["a1"] == a["a2"]
        assert a["b1"] == a["b2"]
        assert a["a1"] != a["b1"]

    def test_deterministic(self, clustering_config, two_group_tfidf):
        """Same input and seed give identical labels."""
        clusterer = KMeansClusterer(config=clustering_config)
        first = clusterer.cluster(two_group_tfidf, seed=5)
        second = clusterer.cluster(two_group_tfidf, seed=5)

        np.testing.assert_array_equal(first.labels, second.labels)
        np.testing.assert_array_equal(first.centroids, second.centroids)

    def test_k_capped_at_row_count(self, clustering_config, two_group_tfidf):
        """Requesting more clusters than rows uses one cluster per row."""
        result = KMeansClusterer(config=clustering_config).cluster(two_group_tfidf, k_requested=10)

        assert result.k == 4
        assert len(result.clusters) == 4

    def test_labels_in_range_and_sizes_sum(self, clustering_config, two_group_tfidf):
        result = KMeansClusterer(config=clustering_config).cluster(two_group_tfidf, k_requested=3)

        assert set(result.labels.tolist()) <= set(range(result.k))
        assert sum(c.size for c in result.clusters) == 4

    def test_centroid_shape(self, clustering_config, two_group_tfidf):
        result = KMeansClusterer(config=clustering_config).cluster(two_group_tfidf)
        assert result.centroids.shape == (2, two_group_tfidf.n_terms)


class TestInsufficientData:
    """Tests for groups too small to cluster."""

    def test_single_row(self, clustering_config, single_row_tfidf):
        result = KMeansClusterer(config=clustering_config).cluster(single_row_tfidf)

        assert isinstance(result, InsufficientData)
        assert result.stage == "clustering"
        assert result.reason == "1 document(s), need at least 2"

    def test_min_documents_threshold(self, two_group_tfidf):
        """Groups below config.min_documents are not clustered."""
        clusterer = KMeansClusterer(config=build_config(min_documents=5))
        result = clusterer.cluster(two_group_tfidf)

        assert isinstance(result, InsufficientData)
        assert "need at least 5" in result.reason

    def test_invalid_k(self, clustering_config, two_group_tfidf):
        with pytest.raises(ValueError, match="k_requested must be >= 1"):
            KMeansClusterer(config=clustering_config).cluster(two_group_tfidf, k_requested=0)

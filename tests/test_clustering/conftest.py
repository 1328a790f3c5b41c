"""Fixtures for clustering tests."""

from unittest.mock import MagicMock

import numpy as np
import pytest

from category_topics.config.analysis import build_config
from category_topics.vectorize import DTMBuilder, transform


@pytest.fixture
def clustering_config():
    return build_config(k_clusters=2, kmeans_n_init=5, top_n_terms=3, random_seed=11)


@pytest.fixture
def two_group_tfidf():
    """Four documents in two clearly separated vocabulary groups."""
    dtm = DTMBuilder().build(
        [
            ["wife", "dinner"],
            ["wife", "dinner", "anniversari"],
            ["soccer", "kid"],
            ["soccer", "kid", "game"],
        ],
        ["a1", "a2", "b1", "b2"],
    )
    return transform(dtm)


@pytest.fixture
def single_row_tfidf():
    dtm = DTMBuilder().build([["love", "famili", "dog"]], ["only"])
    return transform(dtm)


@pytest.fixture
def mock_kmeans_model():
    """KMeans stand-in labelling the rows [0, 0, 1, 1]."""
    model = MagicMock()
    model.fit_predict.return_value = np.array([0, 0, 1, 1])
    model.cluster_centers_ = np.array(
        [
            [0.0, 0.3, 0.0, 0.0, 0.0, 0.3],
            [0.0, 0.0, 0.1, 0.3, 0.3, 0.0],
        ]
    )
    model.inertia_ = 0.05
    model.n_iter_ = 2
    return model

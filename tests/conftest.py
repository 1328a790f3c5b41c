"""Pytest fixtures for category-topics tests."""

import pytest

from category_topics.config.analysis import AnalysisConfig, build_config
from category_topics.ingestion.schemas import Document


@pytest.fixture
def analysis_config() -> AnalysisConfig:
    """Small, fast configuration for tests."""
    return build_config(
        k_clusters=2,
        k_topics=2,
        top_n_terms=5,
        kmeans_n_init=3,
        lda_max_iter=20,
        max_workers=2,
        random_seed=7,
    )


@pytest.fixture
def scenario_records() -> list[dict]:
    """One entry per marital status."""
    return [
        {"id": "1", "text": "I love my family and my dog", "category": "married"},
        {"id": "2", "text": "Friends and parties make me happy", "category": "single"},
        {"id": "3", "text": "My new job is going well", "category": "divorced"},
    ]


@pytest.fixture
def corpus_records() -> list[dict]:
    """Three categories with several themed entries each, plus noise records."""
    return [
        # married (6)
        {"id": "m1", "text": "My wife cooked a wonderful dinner for our anniversary", "category": "married"},
        {"id": "m2", "text": "Our kids played soccer in the garden with my husband", "category": "married"},
        {"id": "m3", "text": "Anniversary dinner with my wife at our favorite restaurant", "category": "married"},
        {"id": "m4", "text": "The kids won their soccer game and we celebrated", "category": "married"},
        {"id": "m5", "text": "My husband surprised me with flowers and dinner", "category": "married"},
        {"id": "m6", "text": "Watching the kids learn to swim in the pool", "category": "married"},
        # single (5)
        {"id": "s1", "text": "Friends threw a surprise party for my birthday", "category": "single"},
        {"id": "s2", "text": "Went hiking with friends in the mountains", "category": "single"},
        {"id": "s3", "text": "Birthday party with friends and cake", "category": "single"},
        {"id": "s4", "text": "Hiking trip to the mountains with my roommate", "category": "single"},
        {"id": "s5", "text": "I beat my personal record at the gym", "category": "single"},
        # divorced (4)
        {"id": "d1", "text": "I got promoted at my job", "category": "divorced"},
        {"id": "d2", "text": "My daughter visited me in my new apartment", "category": "divorced"},
        {"id": "d3", "text": "Promotion at work after a long project", "category": "divorced"},
        {"id": "d4", "text": "My daughter called to tell me about school", "category": "divorced"},
        # widowed (1) - too small to cluster
        {"id": "w1", "text": "My grandson painted a picture of the garden", "category": "widowed"},
    ]


@pytest.fixture
def sample_document() -> Document:
    """A single labeled document."""
    return Document(id="42", text="I love my family and my dog", category="married")

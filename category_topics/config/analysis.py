"""
Analysis configuration for the category topic pipeline.

Provides one immutable Pydantic settings object that is passed explicitly
to every stage (normalizer, builder, clusterer, topic modeler and the
orchestrator). There is no process-wide mutable analysis state.

Parameter Tuning Guide:
    - sparsity_upper_bound: 0.98 drops only near-ubiquitous terms. Lower it
      (0.8-0.9) for long documents with repeated boilerplate.
    - min_term_length: 3 removes most stemming remnants ("us", "im").
    - k_clusters / k_topics: capped per category at the number of usable
      documents, so large values are safe on small categories.
    - lda_max_iter / kmeans_max_iter: iteration caps; a fit that reaches the
      cap returns its current (best-effort) state.
"""

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from category_topics.text.stopwords import DEFAULT_DOMAIN_STOPWORDS


class ConfigurationError(ValueError):
    """Raised before any computation when the analysis configuration is invalid."""


class AnalysisConfig(BaseSettings):
    """
    Configuration for one analysis run.

    All settings can be overridden via environment variables prefixed with ANALYSIS_.
    Set-valued settings are read as JSON.

    Example:
        ANALYSIS_K_TOPICS=8
        ANALYSIS_TOP_N_TERMS=15
        ANALYSIS_EXCLUDED_CATEGORIES='["unknown"]'
    """

    model_config = SettingsConfigDict(
        env_prefix="ANALYSIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Normalization
    custom_stopwords: frozenset[str] = Field(
        default=DEFAULT_DOMAIN_STOPWORDS,
        description="Stop words added to the English list (domain filler words).",
    )

    # Vocabulary / DTM
    min_term_length: int = Field(
        default=3,
        ge=1,
        le=50,
        description="Minimum stem length for vocabulary membership.",
    )
    min_document_frequency: int = Field(
        default=1,
        ge=1,
        description="Minimum number of documents a term must appear in.",
    )
    sparsity_upper_bound: float = Field(
        default=0.98,
        gt=0.0,
        le=1.0,
        description="Terms appearing in more than this fraction of documents are pruned.",
    )
    min_documents_for_pruning: int = Field(
        default=2,
        ge=1,
        description="Groups smaller than this skip the upper document-frequency bound.",
    )

    # Clustering
    k_clusters: int = Field(
        default=5,
        ge=1,
        le=500,
        description="Requested clusters per category (capped at document count).",
    )
    kmeans_n_init: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Number of seeded k-means restarts; the lowest-inertia run wins.",
    )
    kmeans_max_iter: int = Field(
        default=300,
        ge=1,
        le=10_000,
        description="Iteration cap for one Lloyd run.",
    )

    # Topic modeling
    k_topics: int = Field(
        default=5,
        ge=1,
        le=500,
        description="Requested topics per category (capped at document count).",
    )
    lda_max_iter: int = Field(
        default=50,
        ge=1,
        le=10_000,
        description="Iteration cap for batch variational inference.",
    )
    lda_doc_topic_prior: float | None = Field(
        default=None,
        gt=0.0,
        description="Dirichlet alpha. None = 1 / k_topics.",
    )
    lda_topic_word_prior: float | None = Field(
        default=None,
        gt=0.0,
        description="Dirichlet eta. None = 1 / k_topics.",
    )
    min_documents: int = Field(
        default=2,
        ge=1,
        description="Minimum usable documents for clustering and topic modeling.",
    )

    # Reporting
    top_n_terms: int = Field(
        default=10,
        ge=1,
        le=200,
        description="Terms listed per cluster, topic and category frequency profile.",
    )

    # Run control
    random_seed: int = Field(
        default=42,
        ge=0,
        le=2**32 - 1,
        description="Seed for k-means initialization and topic model inference.",
    )
    max_workers: int = Field(
        default=4,
        ge=1,
        le=64,
        description="Worker threads processing categories concurrently.",
    )
    excluded_categories: frozenset[str] = Field(
        default=frozenset(),
        description="Category labels dropped before grouping (placeholder values).",
    )


def build_config(**overrides) -> AnalysisConfig:
    """
    Build an AnalysisConfig, converting validation failures to ConfigurationError.

    Args:
        **overrides: Field values that take precedence over env and defaults.

    Returns:
        Validated, immutable AnalysisConfig.

    Raises:
        ConfigurationError: If any value violates its constraints.
    """
    try:
        return AnalysisConfig(**overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid analysis configuration: {e}") from e

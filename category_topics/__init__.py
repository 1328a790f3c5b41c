"""
category-topics

Category-conditioned vocabulary, clustering and topic analysis of short
free-text entries.

High-level API
--------------
- CategoryOrchestrator → run the full pipeline, one analysis per category
- build_config         → validated, immutable AnalysisConfig
- normalize            → raw text to Porter stems
- DTMBuilder / transform / KMeansClusterer / TopicModeler → individual stages
"""

from importlib.metadata import PackageNotFoundError, version

from category_topics.analysis import AnalysisReport, CategoryOrchestrator, CategoryReport
from category_topics.clustering import KMeansClusterer
from category_topics.config.analysis import AnalysisConfig, ConfigurationError, build_config
from category_topics.ingestion import Document
from category_topics.text import Normalizer, normalize
from category_topics.topics import TopicModeler
from category_topics.vectorize import DTMBuilder, InsufficientData, transform

try:
    __version__ = version("category-topics")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "AnalysisConfig",
    "AnalysisReport",
    "CategoryOrchestrator",
    "CategoryReport",
    "ConfigurationError",
    "DTMBuilder",
    "Document",
    "InsufficientData",
    "KMeansClusterer",
    "Normalizer",
    "TopicModeler",
    "build_config",
    "normalize",
    "transform",
    "__version__",
]

"""
Text normalization for entry text.

Components:
- normalize: pure function turning raw text into Porter stems
- Normalizer: normalize bound to the stop words of an AnalysisConfig
- LANGUAGE_STOPWORDS / DEFAULT_DOMAIN_STOPWORDS: stop-word sets
"""

from category_topics.text.normalizer import Normalizer, normalize
from category_topics.text.stopwords import (
    DEFAULT_DOMAIN_STOPWORDS,
    LANGUAGE_STOPWORDS,
    combined_stopwords,
)

__all__ = [
    "Normalizer",
    "normalize",
    "DEFAULT_DOMAIN_STOPWORDS",
    "LANGUAGE_STOPWORDS",
    "combined_stopwords",
]

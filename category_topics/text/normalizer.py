"""
Text normalization into stemmed, stop-word-filtered tokens.

Turns raw entry text into the ordered token sequence every downstream stage
works on. Normalization is a pure function of the text and the stop-word
sets; the Normalizer class only binds those sets from an AnalysisConfig.

Steps (in order):
- split on non-word characters
- lower-case
- drop stop words (language list plus custom/domain list)
- drop tokens that are not purely alphabetic
- Porter-stem
- drop stems that collapse onto a stop word ("ones" -> "one")
"""

import logging
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

from nltk.stem import PorterStemmer

from category_topics.ingestion.schemas import Document
from category_topics.text.stopwords import LANGUAGE_STOPWORDS, combined_stopwords

if TYPE_CHECKING:
    from category_topics.config.analysis import AnalysisConfig

logger = logging.getLogger(__name__)

_SPLIT_PATTERN = re.compile(r"\W+")

_stemmer = PorterStemmer()


def normalize(
    text: str,
    stopword_set: frozenset[str] | set[str] = LANGUAGE_STOPWORDS,
    custom_stopwords: frozenset[str] | set[str] | None = None,
) -> list[str]:
    """
    Normalize raw text into an ordered list of stems.

    Args:
        text: Raw document text.
        stopword_set: Language stop words (lower-case).
        custom_stopwords: Additional exclusions, matched case-insensitively.

    Returns:
        Stems in document order. An empty list means the document has no
        analyzable content and should be excluded downstream.
    """
    if not text:
        return []

    stopwords = frozenset(stopword_set)
    if custom_stopwords:
        stopwords = stopwords | frozenset(w.lower() for w in custom_stopwords)

    stems: list[str] = []
    for raw in _SPLIT_PATTERN.split(text):
        if not raw:
            continue
        token = raw.lower()
        if token in stopwords or not token.isalpha():
            continue
        stem = _stemmer.stem(token)
        if stem in stopwords:
            continue
        stems.append(stem)
    return stems


class Normalizer:
    """
    Normalizer bound to the stop words of one AnalysisConfig.

    Usage:
        >>> normalizer = Normalizer()
        >>> normalizer.normalize("I love my family and my dog")
        ['love', 'famili', 'dog']
    """

    def __init__(self, config: "AnalysisConfig | None" = None):
        """
        Initialize the normalizer.

        Args:
            config: Analysis configuration. If None, uses default config.
        """
        if config is None:
            from category_topics.config.analysis import AnalysisConfig

            config = AnalysisConfig()
        self.config = config
        self._stopwords = combined_stopwords(self.config.custom_stopwords)

    @property
    def stopwords(self) -> frozenset[str]:
        """The combined stop-word set in effect."""
        return self._stopwords

    def normalize(self, text: str) -> list[str]:
        """Normalize one text with the bound stop words."""
        return normalize(text, self._stopwords)

    def normalize_documents(self, documents: Iterable[Document]) -> list[Document]:
        """
        Attach tokens to each document.

        Returns new Document instances; the inputs are not modified. Documents
        that normalize to nothing are kept (with an empty token tuple) so that
        callers can count them.
        """
        normalized = [doc.with_tokens(self.normalize(doc.text)) for doc in documents]
        n_empty = sum(1 for doc in normalized if doc.is_empty)
        if n_empty:
            logger.debug(f"{n_empty} of {len(normalized)} documents normalized to no tokens")
        return normalized

"""Stop-word sets used by the normalizer.

The language list is scikit-learn's built-in English list so that no corpus
download is needed at runtime. The domain list removes the temporal and
affective filler that dominates short "what made you happy" style entries
and carries no topical signal.
"""

from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

LANGUAGE_STOPWORDS: frozenset[str] = frozenset(ENGLISH_STOP_WORDS)

DEFAULT_DOMAIN_STOPWORDS: frozenset[str] = frozenset(
    {
        # affective filler
        "happy", "happier", "happiest", "happiness", "happily",
        "glad", "enjoy", "enjoyed", "great", "good", "nice", "really",
        "feel", "felt", "feeling", "moment", "moments", "lot", "able",
        # temporal filler
        "day", "days", "today", "yesterday", "tonight", "week", "weeks",
        "month", "months", "year", "years", "ago", "hour", "hours",
        "time", "times", "morning", "evening", "night", "weekend",
        "recently", "finally", "past", "last",
        # generic verbs
        "got", "get", "getting", "went", "go", "going", "made", "make",
        "making", "took", "take", "came", "come", "saw", "see", "did",
        "just", "want", "wanted",
    }
)


def combined_stopwords(custom_stopwords: frozenset[str] | set[str] | None = None) -> frozenset[str]:
    """Return the language list extended with lower-cased custom stop words."""
    if not custom_stopwords:
        return LANGUAGE_STOPWORDS
    return LANGUAGE_STOPWORDS | frozenset(w.lower() for w in custom_stopwords)

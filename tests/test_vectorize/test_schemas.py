"""Tests for vectorize schemas."""

import numpy as np
import pytest

from category_topics.vectorize import InsufficientData, Vocabulary


class TestVocabularyTopTerms:
    """Tests for Vocabulary.top_terms."""

    def test_descending_order(self):
        vocab = Vocabulary(terms=("cat", "dog", "fish"))
        ranked = vocab.top_terms(np.array([0.1, 0.5, 0.3]), 3)
        assert [term for term, _ in ranked] == ["dog", "fish", "cat"]

    def test_ties_break_alphabetically(self):
        """Equal weights keep vocabulary (alphabetical) order."""
        vocab = Vocabulary(terms=("apple", "banana", "cherry"))
        ranked = vocab.top_terms(np.array([0.2, 0.2, 0.2]), 3)
        assert [term for term, _ in ranked] == ["apple", "banana", "cherry"]

    def test_limit(self):
        vocab = Vocabulary(terms=("cat", "dog", "fish"))
        assert len(vocab.top_terms(np.array([0.1, 0.5, 0.3]), 2)) == 2

    def test_zero_weights_omitted(self):
        """Only terms with positive weight are listed."""
        vocab = Vocabulary(terms=("cat", "dog", "fish"))
        ranked = vocab.top_terms(np.array([0.0, 0.5, 0.0]), 3)
        assert ranked == [("dog", 0.5)]

    def test_length_mismatch(self):
        vocab = Vocabulary(terms=("cat", "dog"))
        with pytest.raises(ValueError, match="must have the same length"):
            vocab.top_terms(np.array([0.1, 0.2, 0.3]), 2)


class TestVocabulary:
    """Tests for Vocabulary indexing."""

    def test_index_and_contains(self):
        vocab = Vocabulary(terms=("dog", "famili", "love"))
        assert vocab.index_of("famili") == 1
        assert "love" in vocab
        assert "cat" not in vocab
        assert len(vocab) == 3

    def test_unknown_term(self):
        with pytest.raises(KeyError):
            Vocabulary(terms=("dog",)).index_of("cat")


class TestInsufficientData:
    """Tests for the InsufficientData signal."""

    def test_to_dict(self):
        signal = InsufficientData(stage="clustering", reason="1 document(s), need at least 2")
        assert signal.to_dict() == {
            "stage": "clustering",
            "reason": "1 document(s), need at least 2",
        }

    def test_immutable(self):
        signal = InsufficientData(stage="clustering", reason="x")
        with pytest.raises(AttributeError):
            signal.stage = "topic_model"

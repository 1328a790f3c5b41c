"""Tests for TF-IDF weighting."""

import math

import numpy as np
import pytest

from category_topics.config.analysis import build_config
from category_topics.vectorize import DTMBuilder, inverse_document_frequency, transform


@pytest.fixture
def unpruned_builder():
    """Builder that keeps terms present in every document."""
    return DTMBuilder(build_config(sparsity_upper_bound=1.0))


class TestTransform:
    """Tests for transform()."""

    def test_weights_non_negative(self):
        """TF-IDF weights are never negative."""
        dtm = DTMBuilder().build(
            [["wife", "dinner", "wife"], ["kid", "soccer"], ["dinner", "kid", "pool"]]
        )
        tfidf = transform(dtm)
        assert tfidf.weights.toarray().min() >= 0.0

    def test_ubiquitous_term_weighs_zero(self, unpruned_builder):
        """A term in every document of the group has weight zero."""
        dtm = unpruned_builder.build([["famili", "dog"], ["famili", "cat"]])
        tfidf = transform(dtm)
        col = dtm.vocabulary.index_of("famili")

        np.testing.assert_array_equal(tfidf.weights.toarray()[:, col], [0.0, 0.0])

    def test_formula(self, unpruned_builder):
        """weight = count/total * ln(n/df)."""
        dtm = unpruned_builder.build([["famili", "dog"], ["famili", "cat"]])
        dense = transform(dtm).weights.toarray()

        expected = 0.5 * math.log(2)
        assert dense[0, dtm.vocabulary.index_of("dog")] == pytest.approx(expected)
        assert dense[1, dtm.vocabulary.index_of("cat")] == pytest.approx(expected)
        assert dense[0, dtm.vocabulary.index_of("cat")] == 0.0

    def test_term_frequency_uses_row_total(self, unpruned_builder):
        """Repeated terms raise term frequency within their row."""
        dtm = unpruned_builder.build([["dog", "dog", "cat"], ["bird"]])
        dense = transform(dtm).weights.toarray()

        assert dense[0, dtm.vocabulary.index_of("dog")] == pytest.approx(2 / 3 * math.log(2))
        assert dense[0, dtm.vocabulary.index_of("cat")] == pytest.approx(1 / 3 * math.log(2))

    def test_shape_and_alignment(self):
        """Output keeps the input's shape, vocabulary and row ids."""
        dtm = DTMBuilder().build([["dog", "cat"], ["bird", "cat"], ["fish"]], ["a", "b", "c"])
        tfidf = transform(dtm)

        assert tfidf.weights.shape == dtm.counts.shape
        assert tfidf.vocabulary is dtm.vocabulary
        assert tfidf.document_ids == ("a", "b", "c")

    def test_input_not_modified(self):
        """The count matrix is unchanged after weighting."""
        dtm = DTMBuilder().build([["dog", "dog", "cat"], ["bird", "cat"], ["fish"]])
        before = dtm.counts.toarray().copy()

        transform(dtm)

        np.testing.assert_array_equal(dtm.counts.toarray(), before)


class TestInverseDocumentFrequency:
    """Tests for inverse_document_frequency()."""

    def test_natural_log(self):
        """IDF uses the natural logarithm of the group's own document count."""
        dtm = DTMBuilder().build([["dog"], ["cat"], ["dog", "bird"], ["fish"]])
        idf = inverse_document_frequency(dtm)

        assert dtm.vocabulary.terms == ("bird", "cat", "dog", "fish")
        np.testing.assert_allclose(
            idf, [math.log(4), math.log(4), math.log(2), math.log(4)]
        )

"""
TF-IDF weighting of a document-term matrix.

    weight(d, t) = count(d, t) / total(d) * ln(n_documents / df(t))

Natural logarithm. The document count is the group's own, so every category
is its own weighting universe. df(t) >= 1 because a term is only in the
vocabulary if it occurs somewhere, and total(d) >= 1 because empty rows were
dropped by the builder.
"""

import numpy as np
from scipy import sparse

from category_topics.vectorize.schemas import DocumentTermMatrix, TfidfMatrix


def inverse_document_frequency(dtm: DocumentTermMatrix) -> np.ndarray:
    """Per-term ln(n_documents / df) for the matrix's own documents."""
    df = dtm.document_frequencies().astype(np.float64)
    return np.log(dtm.n_documents / df)


def transform(dtm: DocumentTermMatrix) -> TfidfMatrix:
    """
    Compute TF-IDF weights. The input matrix is not modified.

    Args:
        dtm: Raw-count matrix with no zero rows.

    Returns:
        TfidfMatrix with the same shape, vocabulary and row order.
    """
    counts = dtm.counts.astype(np.float64)
    totals = dtm.row_totals().astype(np.float64)

    tf = sparse.diags(1.0 / totals) @ counts
    idf = inverse_document_frequency(dtm)
    weights = sparse.csr_matrix(tf @ sparse.diags(idf))
    weights.eliminate_zeros()

    return TfidfMatrix(
        weights=weights,
        vocabulary=dtm.vocabulary,
        document_ids=dtm.document_ids,
    )

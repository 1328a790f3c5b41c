"""
Vocabulary, document-term matrix and TF-IDF construction.

Components:
- DTMBuilder: per-group vocabulary with frequency pruning + sparse counts
- transform: TF-IDF reweighting of a DocumentTermMatrix
- Vocabulary / DocumentTermMatrix / TfidfMatrix: immutable matrix records
- InsufficientData: signal returned when a group is too small to analyze
"""

from category_topics.vectorize.builder import DTMBuilder
from category_topics.vectorize.schemas import (
    DocumentTermMatrix,
    InsufficientData,
    TfidfMatrix,
    Vocabulary,
)
from category_topics.vectorize.tfidf import inverse_document_frequency, transform

__all__ = [
    "DTMBuilder",
    "DocumentTermMatrix",
    "InsufficientData",
    "TfidfMatrix",
    "Vocabulary",
    "inverse_document_frequency",
    "transform",
]

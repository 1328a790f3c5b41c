"""
Per-category LDA topic modeling.

Components:
- TopicModeler: seeded LatentDirichletAllocation with insufficient-data handling
- TopicModel: topic-term and document-topic distributions of one category
- TopicSummary: top terms and dominant-document count of one topic
"""

from category_topics.topics.schemas import TopicModel, TopicSummary
from category_topics.topics.service import TopicModeler

__all__ = [
    "TopicModel",
    "TopicSummary",
    "TopicModeler",
]

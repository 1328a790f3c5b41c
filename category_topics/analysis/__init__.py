"""
Category-conditioned text analysis.

Groups labeled entries by category and runs vocabulary construction,
TF-IDF weighting, k-means clustering and LDA topic modeling independently
per category.

Components:
- CategoryOrchestrator: runs the pipeline over all categories concurrently
- CategoryContext: per-category state owned by one worker
- AnalysisReport / CategoryReport: the structured output
"""

from category_topics.analysis.orchestrator import CategoryContext, CategoryOrchestrator
from category_topics.analysis.schemas import AnalysisReport, CategoryReport

__all__ = [
    "AnalysisReport",
    "CategoryContext",
    "CategoryOrchestrator",
    "CategoryReport",
]

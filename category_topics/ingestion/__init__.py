"""
Record ingestion at the edge of the analysis core.

Components:
- Document: canonical entry schema (id, text, category, tokens)
- load_records: read JSON-lines, JSON or CSV entry files
- merge_records: join entry records with a demographic table on a shared id
"""

from category_topics.ingestion.loader import load_records, merge_records
from category_topics.ingestion.schemas import Document

__all__ = [
    "Document",
    "load_records",
    "merge_records",
]

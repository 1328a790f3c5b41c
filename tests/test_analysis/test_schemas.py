"""Tests for analysis report schemas."""

import json

from category_topics.analysis import AnalysisReport, CategoryReport
from category_topics.vectorize import InsufficientData


class TestCategoryReport:
    """Tests for CategoryReport."""

    def test_defaults(self):
        report = CategoryReport(category="married")

        assert report.status == "complete"
        assert not report.insufficient_data
        assert report.skipped == {}

    def test_skip(self):
        report = CategoryReport(category="single", n_documents=1)
        report.skip(InsufficientData("clustering", "1 document(s), need at least 2"))

        assert report.insufficient_data
        assert report.skipped == {"clustering": "1 document(s), need at least 2"}

    def test_analyzed_documents(self):
        report = CategoryReport(
            category="married", n_documents=10, n_empty_documents=2, n_dropped_documents=1
        )
        assert report.n_analyzed_documents == 7

    def test_to_dict(self):
        report = CategoryReport(
            category="married",
            status="skipped",
            n_documents=1,
            top_terms=[("dog", 1.0), ("famili", 1.0)],
            skipped={"clustering": "x", "topic_model": "y"},
        )
        data = report.to_dict()

        assert data["category"] == "married"
        assert data["insufficient_data"] is True
        assert data["documents"] == {"total": 1, "empty": 0, "dropped": 0, "analyzed": 1}
        assert data["top_terms"] == [{"term": "dog", "weight": 1.0}, {"term": "famili", "weight": 1.0}]
        assert data["clustering"] is None
        assert data["topic_model"] is None


class TestAnalysisReport:
    """Tests for AnalysisReport."""

    def test_skipped_categories(self):
        report = AnalysisReport(
            categories={
                "a": CategoryReport(category="a", status="complete"),
                "b": CategoryReport(category="b", status="skipped"),
                "c": CategoryReport(category="c", status="failed", error="RuntimeError: x"),
                "d": CategoryReport(category="d", status="partial"),
            }
        )
        assert report.skipped_categories == ["b", "c"]

    def test_to_json_sorted_and_rounded(self):
        report = AnalysisReport(
            categories={
                "single": CategoryReport(category="single", top_terms=[("friend", 0.1234567891)]),
            },
            n_records=1,
            parameters={"top_n_terms": 10, "k_topics": 5},
        )
        payload = report.to_json()
        data = json.loads(payload)

        assert data["records"] == {
            "total": 1, "malformed": 0, "duplicate": 0, "missing_category": 0, "excluded": 0,
        }
        assert data["categories"]["single"]["top_terms"][0]["weight"] == 0.123457
        assert payload.index('"k_topics"') < payload.index('"top_n_terms"')

    def test_to_json_compact(self):
        assert "\n" not in AnalysisReport().to_json(indent=None)

"""
Loading and joining raw entry records.

The analysis core only consumes in-memory ``{id, text, category}`` records.
These helpers cover the two boundary steps that produce them: reading a file
of entries and attaching a category label from a second table that shares an
identifier with the entries (e.g. a respondent id linking entries to a
demographic survey).
"""

import csv
import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def load_records(path: str | Path) -> list[dict[str, Any]]:
    """
    Read records from a JSON-lines, JSON array or CSV file.

    The format is chosen by file suffix (.jsonl/.ndjson, .json, .csv).
    Blank JSON-lines are ignored.

    Args:
        path: File to read.

    Returns:
        List of record dictionaries, in file order.

    Raises:
        ValueError: If the suffix is not supported or a JSON file is not an array.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in (".jsonl", ".ndjson"):
        with path.open(encoding="utf-8") as f:
            records = [json.loads(line) for line in f if line.strip()]
    elif suffix == ".json":
        with path.open(encoding="utf-8") as f:
            records = json.load(f)
        if not isinstance(records, list):
            raise ValueError(f"{path} must contain a JSON array of records")
    elif suffix == ".csv":
        with path.open(encoding="utf-8", newline="") as f:
            records = list(csv.DictReader(f))
    else:
        raise ValueError(f"Unsupported record file type: {path.suffix or path.name}")

    logger.info(f"Loaded {len(records)} records from {path}")
    return records


def merge_records(
    entries: Iterable[Mapping[str, Any]],
    attributes: Iterable[Mapping[str, Any]],
    key: str,
    category_field: str,
    id_field: str = "id",
    text_field: str = "text",
) -> list[dict[str, Any]]:
    """
    Attach a category label to entries from a table sharing ``key``.

    Left join: every entry is kept, entries whose key has no match get
    ``category=None`` and are later counted as missing-category by the
    orchestrator. When the attribute table repeats a key, the first row wins.

    Args:
        entries: Entry records carrying ``key``, ``id_field`` and ``text_field``.
        attributes: Attribute records carrying ``key`` and ``category_field``.
        key: Shared identifier column.
        category_field: Column in ``attributes`` holding the category label.
        id_field: Column in ``entries`` used as the document id.
        text_field: Column in ``entries`` holding the raw text.

    Returns:
        Records in the ``{id, text, category}`` shape, in entry order.
    """
    labels: dict[str, Any] = {}
    for row in attributes:
        if key not in row:
            continue
        labels.setdefault(str(row[key]), row.get(category_field))

    merged: list[dict[str, Any]] = []
    unmatched = 0
    for entry in entries:
        join_value = entry.get(key)
        category = labels.get(str(join_value)) if join_value is not None else None
        if category is None:
            unmatched += 1
        merged.append(
            {
                "id": entry.get(id_field),
                "text": entry.get(text_field),
                "category": category,
            }
        )

    if unmatched:
        logger.info(f"{unmatched} of {len(merged)} entries have no {category_field} label")
    return merged

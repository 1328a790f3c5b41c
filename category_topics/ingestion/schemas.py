"""
Canonical document schema for the category analysis pipeline.

Every record entering the orchestrator is coerced into a Document. Records
that fail validation are counted as malformed and never reach grouping.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Document(BaseModel):
    """
    One free-text entry tagged with a category label.

    Documents are immutable. Normalization returns a new instance with
    ``tokens`` populated via :meth:`with_tokens`.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique entry identifier")
    text: str = Field(..., description="Raw entry text")
    category: str | None = Field(
        default=None,
        description="Category label (e.g. marital status); None when missing",
    )
    tokens: tuple[str, ...] = Field(
        default=(),
        description="Normalized stems (set by the normalizer)",
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Accept integer identifiers from tabular sources."""
        if isinstance(v, bool):
            return v
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v: Any) -> Any:
        """Strip labels; blank labels count as missing."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @property
    def is_empty(self) -> bool:
        """True when normalization left no tokens."""
        return not self.tokens

    def with_tokens(self, tokens: list[str] | tuple[str, ...]) -> "Document":
        """Return a copy of this document carrying the given tokens."""
        return self.model_copy(update={"tokens": tuple(tokens)})

    @classmethod
    def from_record(cls, record: "Document | dict[str, Any]") -> "Document":
        """
        Coerce a raw record into a Document.

        Args:
            record: A Document or a mapping with ``id``, ``text`` and ``category``.

        Returns:
            Document instance.

        Raises:
            pydantic.ValidationError: If required fields are missing or invalid.
        """
        if isinstance(record, cls):
            return record
        return cls.model_validate(record)

"""Parsed form submission models."""

from pydantic import BaseModel, Field


class QAPair(BaseModel):
    """One question/answer cell pair from an intake form."""

    model_config = {"frozen": True}

    question: str
    answer: str = ""


class StructuredSubmission(BaseModel):
    """Ordered Q/A pairs parsed out of one intake email (document order preserved)."""

    model_config = {"frozen": True, "populate_by_name": True}

    raw_text: str = Field("", alias="rawText")
    form_data: tuple[QAPair, ...] = Field(default=(), alias="formData")

    @classmethod
    def from_pairs(cls, pairs: list[tuple[str, str]] | list[QAPair], raw_text: str = "") -> "StructuredSubmission":
        """Build a submission from (question, answer) tuples or QAPair objects."""
        form_data = tuple(
            p if isinstance(p, QAPair) else QAPair(question=p[0], answer=p[1])
            for p in pairs
        )
        return cls(raw_text=raw_text, form_data=form_data)

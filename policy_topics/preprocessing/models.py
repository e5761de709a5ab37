"""
Document record consumed by the tokenizer and matrix builder.

Text acquisition (HTTP, PDF/HTML extraction) happens before a Document is
created; the core only ever sees already-extracted text.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Document(BaseModel):
    """
    A single ingested statement.

    Attributes:
        doc_id: Identity (filename, URL-derived key, ...)
        text: Raw extracted text
        published: Publication date, when known
    """
    model_config = ConfigDict(frozen=True)

    doc_id: str = Field(..., description="Document identifier")
    text: str = Field(default="", description="Raw document text")
    published: Optional[date] = Field(default=None, description="Publication date")

    @field_validator('doc_id')
    @classmethod
    def doc_id_must_not_be_empty(cls, v: str) -> str:
        """Ensure identifier is not blank."""
        if not v.strip():
            raise ValueError('doc_id cannot be empty')
        return v.strip()

    def __len__(self) -> int:
        return len(self.text)

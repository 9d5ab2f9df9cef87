"""
Peppa - Advisory Response Models

Pydantic models for the parts of a ``generateContent`` response we read.
"""

from pydantic import BaseModel, Field


class Part(BaseModel):
    text: str | None = None


class Content(BaseModel):
    parts: list[Part] = Field(default_factory=list)
    role: str | None = None


class Candidate(BaseModel):
    content: Content | None = None
    finish_reason: str | None = Field(default=None, alias="finishReason")

    model_config = {"populate_by_name": True}


class GenerateContentResponse(BaseModel):
    """Mirrors the ``generateContent`` response body."""

    candidates: list[Candidate] = Field(default_factory=list)

    @property
    def text(self) -> str:
        """Concatenated text of the first candidate, or an empty string."""
        if not self.candidates or self.candidates[0].content is None:
            return ""
        return "".join(part.text or "" for part in self.candidates[0].content.parts)

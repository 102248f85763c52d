from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class Part(BaseModel):
    text: str


class ConversationTurn(BaseModel):
    role: Literal["user", "model"] = Field(..., description="'user' or 'model'")
    parts: List[Part] = Field(..., min_length=1)

    @property
    def text(self) -> str:
        return "".join(part.text for part in self.parts)


class GenerationRequest(BaseModel):
    history: List[ConversationTurn] = Field(
        default_factory=list,
        description="Prior turns in chronological order (frontend-managed)",
    )
    user_message: str = Field(..., alias="userMessage", description="User's latest message")

    @field_validator("history", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        return [] if value is None else value

    @field_validator("user_message")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value:
            raise ValueError("userMessage must not be empty")
        return value


class SystemInstruction(BaseModel):
    parts: List[Part]


class GenerationResponse(BaseModel):
    text: str


class ErrorResponse(BaseModel):
    error: str


class CandidateContent(BaseModel):
    parts: List[Part] = Field(default_factory=list)


class Candidate(BaseModel):
    content: Optional[CandidateContent] = None
    finish_reason: Optional[str] = None


class GenerationResult(BaseModel):
    """Envelope returned by a GenerationService call."""

    candidates: List[Candidate] = Field(default_factory=list)

    def first_text(self) -> Optional[str]:
        if not self.candidates:
            return None
        content = self.candidates[0].content
        if content is None or not content.parts:
            return None
        return content.parts[0].text or None

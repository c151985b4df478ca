"""Pydantic models for literary analysis results and tutor chat.

JSON field names are camelCase (textType, originalText, generatedQuestions,
standardAnswer, chatHistory) so stored history stays readable by any client
of the key-value store. Python attributes are snake_case.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class TextType(str, Enum):
    PROSE = "PROSE"
    POETRY = "POETRY"
    NOVEL = "NOVEL"

    @property
    def label(self) -> str:
        return _TEXT_TYPE_LABELS[self]


_TEXT_TYPE_LABELS = {
    TextType.PROSE: "散文",
    TextType.POETRY: "诗歌",
    TextType.NOVEL: "小说",
}


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Technique(_CamelModel):
    name: str
    example: str
    effect: str


class Question(_CamelModel):
    id: str
    question: str = Field(..., description="An exam-style question based on the text")
    type: str = Field(..., description="Category: Language, Theme, Plot, Character, etc.")
    standard_answer: str = Field(
        ...,
        alias="standardAnswer",
        description="The standard model answer using the formulas",
    )
    analysis: str = Field(..., description="Explanation of why this is the answer")


class AnalysisPayload(_CamelModel):
    """
    Structured output requested from the LLM.
    Its JSON schema is sent as the response format; the reply is validated
    against it exactly once, when it is parsed.
    """
    title: str = Field(..., description="A suitable title for the analysis")
    summary: str = Field(..., description="A brief summary of the text content")
    structure: List[str] = Field(..., description="Step-by-step outline of the text structure")
    themes: List[str] = Field(..., description="Key themes or emotions (e.g., Patriotism, Nostalgia)")
    techniques: List[Technique] = Field(
        ..., description="Literary techniques found with specific examples and their effects"
    )
    generated_questions: List[Question] = Field(..., alias="generatedQuestions")


class ChatMessage(_CamelModel):
    role: Literal["user", "model"]
    text: str
    timestamp: int  # ms since epoch


class AnalysisResult(AnalysisPayload):
    id: str
    text_type: TextType = Field(..., alias="textType")
    timestamp: int  # ms since epoch
    original_text: str = Field(..., alias="originalText")
    chat_history: Optional[List[ChatMessage]] = Field(None, alias="chatHistory")

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

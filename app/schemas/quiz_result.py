# app/schemas/quiz_result.py

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResponseIn(BaseModel):
    """One answered question inside an attempt."""
    model_config = ConfigDict(populate_by_name=True)

    question_id: UUID = Field(..., alias="questionId")
    selected_options: List[UUID] = Field(default_factory=list, alias="selectedOptions")
    written_answer: Optional[str] = Field(None, alias="writtenAnswer")

    @field_validator("written_answer", mode="before")
    @classmethod
    def numeric_answer_as_text(cls, value):
        # numeric questions may post a bare number
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class QuizResultCreate(BaseModel):
    # totalScores is derived on save, anything the client sends is ignored
    model_config = ConfigDict(extra="ignore")

    responses: List[ResponseIn] = Field(default_factory=list)


class QuizResultUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    responses: Optional[List[ResponseIn]] = None

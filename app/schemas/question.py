# app/schemas/question.py

from enum import Enum
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, confloat


class QuestionType(str, Enum):
    """Supported question types."""
    TEXT = "text"
    MULTIPLE_CHOICE = "multiple-choice"
    TRUE_FALSE = "true-false"
    NUMERIC = "numeric"


class OptionIn(BaseModel):
    # Omit id for a new option; send it back to keep an existing one
    id: Optional[UUID] = None
    text: Optional[str] = None
    score: Dict[str, confloat(allow_inf_nan=False)] = Field(default_factory=dict)


# =========================
# Requests
# =========================
class QuestionCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., min_length=1)
    question_type: QuestionType = Field(..., alias="type")
    options: List[OptionIn] = Field(default_factory=list)

    allow_multiple_selections: bool = Field(False, alias="allowMultipleSelections")
    is_required: bool = Field(True, alias="isRequired")
    category: str = Field(..., min_length=1)


class QuestionUpdate(BaseModel):
    """Partial update: only the fields sent are changed."""
    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = Field(None, min_length=1)
    question_type: Optional[QuestionType] = Field(None, alias="type")
    options: Optional[List[OptionIn]] = None

    allow_multiple_selections: Optional[bool] = Field(None, alias="allowMultipleSelections")
    is_required: Optional[bool] = Field(None, alias="isRequired")
    category: Optional[str] = Field(None, min_length=1)

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, String, Text, JSON, Uuid

from app.db.base import Base


class Question(Base):
    __tablename__ = "questions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    text = Column(Text, nullable=False)
    question_type = Column(String(20), nullable=False)  # text | multiple-choice | true-false | numeric

    # [{"id": "<uuid>", "text": "True", "score": {"TRT": 5, "Build": 2}}, ...]
    options = Column(JSON, nullable=False, default=list)

    allow_multiple_selections = Column(Boolean, default=False, nullable=False)
    is_required = Column(Boolean, default=True, nullable=False)
    category = Column(String(100), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, JSON, Uuid

from app.db.base import Base


class QuizResult(Base):
    __tablename__ = "quiz_results"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # [{"question_id": "<uuid>", "selected_options": ["<uuid>", ...], "written_answer": None}, ...]
    # No foreign key on question_id: responses outlive deleted questions
    responses = Column(JSON, nullable=False, default=list)

    # Derived on every save, never taken from the client
    total_scores = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

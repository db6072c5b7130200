import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.question import Question
from app.schemas.question import OptionIn, QuestionCreate, QuestionType, QuestionUpdate

logger = logging.getLogger(__name__)

# Columns that may not be cleared through an update
NON_NULLABLE_FIELDS = ("text", "question_type", "allow_multiple_selections", "is_required", "category")


class QuestionValidationError(ValueError):
    pass


def parse_id(raw_id: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(raw_id))
    except ValueError:
        return None


def build_options(options: List[OptionIn]) -> List[Dict[str, Any]]:
    """
    Turn submitted options into stored option dicts.

    Options without an id get a fresh one; ids must be unique per question.
    """
    built: List[Dict[str, Any]] = []
    seen = set()

    for opt in options:
        option_id = str(opt.id) if opt.id else str(uuid.uuid4())
        if option_id in seen:
            raise QuestionValidationError(f"Duplicate option id {option_id}")
        seen.add(option_id)

        built.append({
            "id": option_id,
            "text": opt.text,
            "score": {category: float(weight) for category, weight in opt.score.items()},
        })

    return built


def check_options(question_type: str, options: List[Dict[str, Any]]) -> None:
    if question_type == QuestionType.TEXT.value:
        return

    if not options:
        raise QuestionValidationError(
            f"Options are required for '{question_type}' questions"
        )

    for index, opt in enumerate(options):
        if not (opt.get("text") or "").strip():
            raise QuestionValidationError(f"Option {index + 1} text is required")


def question_to_dict(q: Question) -> Dict[str, Any]:
    return {
        "id": str(q.id),
        "text": q.text,
        "type": q.question_type,
        "options": [
            {"id": opt.get("id"), "text": opt.get("text"), "score": opt.get("score") or {}}
            for opt in (q.options or [])
        ],
        "allowMultipleSelections": q.allow_multiple_selections,
        "isRequired": q.is_required,
        "category": q.category,
        "createdAt": q.created_at,
        "updatedAt": q.updated_at,
    }


class QuestionService:
    @staticmethod
    def list_questions(
        db: Session,
        search: Optional[str] = None,
        category: Optional[str] = None,
        question_type: Optional[QuestionType] = None,
    ) -> List[Question]:
        query = db.query(Question)

        if search:
            query = query.filter(
                func.lower(Question.text).contains(search.lower(), autoescape=True)
            )
        if category:
            query = query.filter(Question.category == category)
        if question_type:
            query = query.filter(Question.question_type == question_type.value)

        return query.order_by(Question.created_at, Question.id).all()

    @staticmethod
    def get_question(db: Session, question_id: str) -> Optional[Question]:
        question_uuid = parse_id(question_id)
        if question_uuid is None:
            return None
        return db.query(Question).filter(Question.id == question_uuid).first()

    @staticmethod
    def create_question(db: Session, payload: QuestionCreate) -> Question:
        options = build_options(payload.options)
        check_options(payload.question_type.value, options)

        question = Question(
            text=payload.text,
            question_type=payload.question_type.value,
            options=options,
            allow_multiple_selections=payload.allow_multiple_selections,
            is_required=payload.is_required,
            category=payload.category,
        )

        db.add(question)
        db.commit()
        db.refresh(question)

        logger.info(f"Created question {question.id}")
        return question

    @staticmethod
    def update_question(
        db: Session,
        question_id: str,
        payload: QuestionUpdate,
    ) -> Optional[Question]:
        question = QuestionService.get_question(db, question_id)
        if not question:
            return None

        changes = payload.model_dump(exclude_unset=True)

        for field in NON_NULLABLE_FIELDS:
            if field in changes and changes[field] is None:
                raise QuestionValidationError(f"{field} cannot be null")

        if "options" in changes:
            options = build_options(payload.options or [])
        else:
            options = list(question.options or [])

        question_type = changes.get("question_type") or question.question_type
        if isinstance(question_type, QuestionType):
            question_type = question_type.value

        # validate the merged record, not just the patch
        check_options(question_type, options)

        for field in ("text", "allow_multiple_selections", "is_required", "category"):
            if field in changes:
                setattr(question, field, changes[field])

        question.question_type = question_type
        question.options = options

        db.commit()
        db.refresh(question)

        logger.info(f"Updated question {question.id}")
        return question

    @staticmethod
    def delete_question(db: Session, question_id: str) -> bool:
        # Quiz results keep referencing the id; scoring skips it from now on
        question = QuestionService.get_question(db, question_id)
        if not question:
            return False

        db.delete(question)
        db.commit()

        logger.info(f"Deleted question {question_id}")
        return True

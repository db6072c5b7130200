import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.question import QuestionCreate, QuestionType, QuestionUpdate
from app.services.questions import QuestionService, QuestionValidationError, question_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/questions", tags=["Questions"])


@router.get("")
def list_questions(
    search: Optional[str] = Query(None, description="Case-insensitive match on question text"),
    category: Optional[str] = Query(None),
    question_type: Optional[QuestionType] = Query(None, alias="type"),
    db: Session = Depends(get_db),
):
    questions = QuestionService.list_questions(
        db, search=search, category=category, question_type=question_type
    )
    logger.info(f"Fetched {len(questions)} questions")
    return {"success": True, "data": [question_to_dict(q) for q in questions]}


@router.get("/{question_id}")
def get_question(question_id: str, db: Session = Depends(get_db)):
    question = QuestionService.get_question(db, question_id)
    if not question:
        logger.warning(f"Question with ID {question_id} not found")
        raise HTTPException(status_code=404, detail="Question not found")

    return {"success": True, "data": question_to_dict(question)}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_question(payload: QuestionCreate, db: Session = Depends(get_db)):
    try:
        question = QuestionService.create_question(db, payload)
    except QuestionValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    return {"success": True, "data": question_to_dict(question)}


@router.put("/{question_id}")
def update_question(
    question_id: str,
    payload: QuestionUpdate,
    db: Session = Depends(get_db),
):
    try:
        question = QuestionService.update_question(db, question_id, payload)
    except QuestionValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    if not question:
        logger.warning(f"Question with ID {question_id} not found for update")
        raise HTTPException(status_code=404, detail="Question not found")

    return {"success": True, "data": question_to_dict(question)}


@router.delete("/{question_id}")
def delete_question(question_id: str, db: Session = Depends(get_db)):
    if not QuestionService.delete_question(db, question_id):
        logger.warning(f"Question with ID {question_id} not found for deletion")
        raise HTTPException(status_code=404, detail="Question not found")

    return {"success": True, "message": "Question deleted successfully"}

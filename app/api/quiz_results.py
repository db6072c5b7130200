import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.engine.scorer import ScoreOverflowError
from app.schemas.quiz_result import QuizResultCreate, QuizResultUpdate
from app.services.quiz_results import QuizResultService, quiz_result_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quiz-results", tags=["Quiz Results"])


# -------------------------------------------------
# GET: all attempts, selected options expanded
# -------------------------------------------------

@router.get("")
def list_quiz_results(db: Session = Depends(get_db)):
    items = QuizResultService.list_results(db)
    logger.info(f"Fetched {len(items)} quiz results")
    return {"success": True, "data": items}


@router.get("/{result_id}")
def get_quiz_result(result_id: str, db: Session = Depends(get_db)):
    result = QuizResultService.get_result(db, result_id)
    if not result:
        logger.warning(f"Quiz Result with ID {result_id} not found")
        raise HTTPException(status_code=404, detail="Quiz Result not found")

    return {"success": True, "data": quiz_result_to_dict(result)}


# -------------------------------------------------
# POST / PUT: totals recomputed on every save
# -------------------------------------------------

@router.post("", status_code=status.HTTP_201_CREATED)
def create_quiz_result(payload: QuizResultCreate, db: Session = Depends(get_db)):
    try:
        result = QuizResultService.create_result(db, payload)
    except ScoreOverflowError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    return {"success": True, "data": quiz_result_to_dict(result)}


@router.put("/{result_id}")
def update_quiz_result(
    result_id: str,
    payload: QuizResultUpdate,
    db: Session = Depends(get_db),
):
    try:
        result = QuizResultService.update_result(db, result_id, payload)
    except ScoreOverflowError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    if not result:
        logger.warning(f"Quiz Result with ID {result_id} not found for update")
        raise HTTPException(status_code=404, detail="Quiz Result not found")

    return {"success": True, "data": quiz_result_to_dict(result)}


@router.delete("/{result_id}")
def delete_quiz_result(result_id: str, db: Session = Depends(get_db)):
    if not QuizResultService.delete_result(db, result_id):
        logger.warning(f"Quiz Result with ID {result_id} not found for deletion")
        raise HTTPException(status_code=404, detail="Quiz Result not found")

    return {"success": True, "message": "Quiz Result deleted successfully"}

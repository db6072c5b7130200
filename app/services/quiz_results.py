import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.engine.expansion import expand_selected_options
from app.engine.scorer import create_score_aggregator
from app.models.question import Question
from app.models.quiz_result import QuizResult
from app.schemas.quiz_result import QuizResultCreate, QuizResultUpdate, ResponseIn
from app.services.questions import parse_id

logger = logging.getLogger(__name__)

aggregator = create_score_aggregator()


def responses_to_storage(responses: List[ResponseIn]) -> List[Dict[str, Any]]:
    return [
        {
            "question_id": str(r.question_id),
            "selected_options": [str(option_id) for option_id in r.selected_options],
            "written_answer": r.written_answer,
        }
        for r in responses
    ]


def load_questions(db: Session, responses: List[Dict[str, Any]]) -> Dict[str, Question]:
    """
    Fetch every question referenced by the responses in one query.

    Ids that resolve to nothing are simply absent from the result.
    """
    ids = {parse_id(r.get("question_id")) for r in responses}
    ids.discard(None)
    if not ids:
        return {}

    questions = db.query(Question).filter(Question.id.in_(list(ids))).all()
    return {str(q.id): q for q in questions}


def quiz_result_to_dict(result: QuizResult) -> Dict[str, Any]:
    return {
        "id": str(result.id),
        "responses": [
            {
                "questionId": r.get("question_id"),
                "selectedOptions": list(r.get("selected_options") or []),
                "writtenAnswer": r.get("written_answer"),
            }
            for r in (result.responses or [])
        ],
        "totalScores": dict(result.total_scores or {}),
        "createdAt": result.created_at,
        "updatedAt": result.updated_at,
    }


class QuizResultService:
    @staticmethod
    def compute_total_scores(db: Session, responses: List[Dict[str, Any]]) -> Dict[str, float]:
        # Store read errors propagate and abort the save
        questions = load_questions(db, responses)
        return aggregator.aggregate(responses, questions)

    @staticmethod
    def list_results(db: Session) -> List[Dict[str, Any]]:
        results = db.query(QuizResult).order_by(QuizResult.created_at, QuizResult.id).all()

        all_responses = [r for result in results for r in (result.responses or [])]
        questions = load_questions(db, all_responses)

        items = []
        for result in results:
            item = quiz_result_to_dict(result)
            item["responses"] = expand_selected_options(result.responses or [], questions)
            items.append(item)
        return items

    @staticmethod
    def get_result(db: Session, result_id: str) -> Optional[QuizResult]:
        result_uuid = parse_id(result_id)
        if result_uuid is None:
            return None
        return db.query(QuizResult).filter(QuizResult.id == result_uuid).first()

    @staticmethod
    def create_result(db: Session, payload: QuizResultCreate) -> QuizResult:
        responses = responses_to_storage(payload.responses)

        result = QuizResult(
            responses=responses,
            total_scores=QuizResultService.compute_total_scores(db, responses),
        )

        db.add(result)
        db.commit()
        db.refresh(result)

        logger.info(f"Created quiz result {result.id}")
        return result

    @staticmethod
    def update_result(
        db: Session,
        result_id: str,
        payload: QuizResultUpdate,
    ) -> Optional[QuizResult]:
        result = QuizResultService.get_result(db, result_id)
        if not result:
            return None

        if payload.responses is not None:
            responses = responses_to_storage(payload.responses)
        else:
            responses = [dict(r) for r in (result.responses or [])]

        # Totals always follow the current question state, even when
        # the responses themselves did not change
        total_scores = QuizResultService.compute_total_scores(db, responses)

        result.responses = responses
        result.total_scores = total_scores
        # a re-save counts as an update even when nothing changed
        result.updated_at = datetime.utcnow()

        db.commit()
        db.refresh(result)

        logger.info(f"Updated quiz result {result.id}")
        return result

    @staticmethod
    def delete_result(db: Session, result_id: str) -> bool:
        result = QuizResultService.get_result(db, result_id)
        if not result:
            return False

        db.delete(result)
        db.commit()

        logger.info(f"Deleted quiz result {result_id}")
        return True

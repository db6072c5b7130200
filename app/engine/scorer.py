# app/engine/scorer.py

from typing import Dict, Any, List, Mapping
import logging
import math

logger = logging.getLogger(__name__)


class ScoreOverflowError(ValueError):
    """Raised when a category total is not a finite number."""


class ScoreAggregator:
    """
    CATEGORY SCORE AGGREGATOR.

    Sums the per-category score vectors of every selected option across
    one attempt's responses.

    Dangling references never fail a save:
    - a response whose question no longer exists is skipped and counted
    - a response to a question without options (e.g. a text question)
      is skipped without counting
    - a selected option id that is not on the question is skipped and counted
    Counted skips are logged server-side only.
    """

    def __init__(self):
        self.stats = {
            "runs": 0,
            "responses_scored": 0,
            "unscored_questions": 0,
            "skipped_questions": 0,
            "skipped_options": 0,
        }

    def aggregate(
        self,
        responses: List[Dict[str, Any]],
        questions: Mapping[str, Any],
    ) -> Dict[str, float]:
        """
        Compute total scores for one attempt.

        Args:
            responses: stored responses, each with "question_id" and
                "selected_options" (option ids as strings)
            questions: question id -> question object exposing ``options``
                (list of {"id", "text", "score"} dicts)

        Returns:
            Sparse mapping category -> summed weight. Categories never
            touched by a contributing option are absent.

        Raises:
            ScoreOverflowError: a total is not finite (overflowed weights)
        """
        totals: Dict[str, float] = {}
        skipped_questions = 0
        skipped_options = 0

        for response in responses:
            question_id = str(response.get("question_id"))
            question = questions.get(question_id)
            if question is None:
                skipped_questions += 1
                logger.debug(f"Skipping response for unknown question {question_id}")
                continue

            options = getattr(question, "options", None) or []
            if not options:
                self.stats["unscored_questions"] += 1
                continue

            by_id = {str(opt.get("id")): opt for opt in options}
            matched = 0

            for option_id in response.get("selected_options") or []:
                option = by_id.get(str(option_id))
                if option is None:
                    skipped_options += 1
                    continue

                matched += 1
                for category, weight in (option.get("score") or {}).items():
                    totals[category] = totals.get(category, 0.0) + float(weight)

            if matched:
                self.stats["responses_scored"] += 1

        self.stats["runs"] += 1
        self.stats["skipped_questions"] += skipped_questions
        self.stats["skipped_options"] += skipped_options

        if skipped_questions or skipped_options:
            logger.warning(
                f"Score aggregation skipped {skipped_questions} question reference(s) "
                f"and {skipped_options} option reference(s)"
            )

        for category, total in totals.items():
            if not math.isfinite(total):
                raise ScoreOverflowError(f"Total score for '{category}' is out of range")

        return totals


def create_score_aggregator() -> ScoreAggregator:
    return ScoreAggregator()

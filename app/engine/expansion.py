# app/engine/expansion.py

from typing import Dict, Any, List, Mapping


def expand_selected_options(
    responses: List[Dict[str, Any]],
    questions: Mapping[str, Any],
) -> List[Dict[str, Any]]:
    """
    Read-time join of selected option ids to option snapshots.

    Each response with selected options gets them replaced by
    {"id", "text", "score"} taken from the question's current options,
    in the question's option order. Ids whose question or option no longer
    exists are dropped. Stored responses are not modified.
    """
    expanded: List[Dict[str, Any]] = []

    for response in responses:
        question_id = str(response.get("question_id"))
        selected = [str(option_id) for option_id in response.get("selected_options") or []]
        question = questions.get(question_id)

        item = {
            "questionId": question_id,
            "questionText": getattr(question, "text", None),
            "selectedOptions": [],
            "writtenAnswer": response.get("written_answer"),
        }

        if selected and question is not None:
            wanted = set(selected)
            item["selectedOptions"] = [
                {
                    "id": opt.get("id"),
                    "text": opt.get("text"),
                    "score": opt.get("score") or {},
                }
                for opt in (getattr(question, "options", None) or [])
                if str(opt.get("id")) in wanted
            ]

        expanded.append(item)

    return expanded

import logging
from types import SimpleNamespace

import pytest

from app.engine.scorer import ScoreAggregator, ScoreOverflowError

Q1 = "11111111-1111-1111-1111-111111111111"
Q2 = "22222222-2222-2222-2222-222222222222"

TRUE_ID = "aaaaaaaa-0000-0000-0000-000000000001"
FALSE_ID = "aaaaaaaa-0000-0000-0000-000000000002"
OPT_A3 = "bbbbbbbb-0000-0000-0000-000000000001"
OPT_A2B1 = "bbbbbbbb-0000-0000-0000-000000000002"


def question(*options):
    return SimpleNamespace(options=list(options))


QUESTIONS = {
    Q1: question(
        {"id": TRUE_ID, "text": "True", "score": {"A": 5, "B": 2}},
        {"id": FALSE_ID, "text": "False", "score": {"A": 0, "B": 0}},
    ),
    Q2: question(
        {"id": OPT_A3, "text": "Often", "score": {"A": 3}},
        {"id": OPT_A2B1, "text": "Rarely", "score": {"A": 2, "B": 1}},
    ),
}


def response(question_id, *selected):
    return {"question_id": question_id, "selected_options": list(selected), "written_answer": None}


def test_no_responses_gives_empty_totals():
    assert ScoreAggregator().aggregate([], QUESTIONS) == {}


def test_true_false_example():
    totals = ScoreAggregator().aggregate([response(Q1, TRUE_ID)], QUESTIONS)
    assert totals == {"A": 5.0, "B": 2.0}


def test_sums_across_responses():
    responses = [response(Q2, OPT_A3), response(Q2, OPT_A2B1)]
    assert ScoreAggregator().aggregate(responses, QUESTIONS) == {"A": 5.0, "B": 1.0}


def test_multiple_selections_on_one_question():
    totals = ScoreAggregator().aggregate([response(Q2, OPT_A3, OPT_A2B1)], QUESTIONS)
    assert totals == {"A": 5.0, "B": 1.0}


def test_unknown_question_contributes_nothing():
    aggregator = ScoreAggregator()
    responses = [response("99999999-9999-9999-9999-999999999999", TRUE_ID), response(Q2, OPT_A3)]

    assert aggregator.aggregate(responses, QUESTIONS) == {"A": 3.0}
    assert aggregator.stats["skipped_questions"] == 1


def test_question_without_options_is_skipped():
    aggregator = ScoreAggregator()
    questions = {Q1: question()}

    assert aggregator.aggregate([response(Q1, TRUE_ID)], questions) == {}
    assert aggregator.stats["unscored_questions"] == 1
    assert aggregator.stats["skipped_questions"] == 0


def test_text_answer_logs_no_warning(caplog):
    caplog.set_level(logging.WARNING, logger="app.engine.scorer")
    questions = {Q1: question()}

    ScoreAggregator().aggregate([{"question_id": Q1, "selected_options": [], "written_answer": "30"}], questions)

    assert not [r for r in caplog.records if r.name == "app.engine.scorer"]


def test_dangling_question_logs_warning(caplog):
    caplog.set_level(logging.WARNING, logger="app.engine.scorer")

    ScoreAggregator().aggregate([response("99999999-9999-9999-9999-999999999999", TRUE_ID)], QUESTIONS)

    warnings = [r for r in caplog.records if r.name == "app.engine.scorer"]
    assert len(warnings) == 1
    assert warnings[0].levelno == logging.WARNING
    assert "1 question reference" in warnings[0].getMessage()


def test_response_with_only_unknown_options_is_not_counted_as_scored():
    aggregator = ScoreAggregator()

    aggregator.aggregate([response(Q1, OPT_A3)], QUESTIONS)

    assert aggregator.stats["responses_scored"] == 0
    assert aggregator.stats["skipped_options"] == 1


def test_overflowing_total_is_rejected():
    questions = {Q1: question({"id": TRUE_ID, "text": "Yes", "score": {"A": 1e308}})}

    with pytest.raises(ScoreOverflowError):
        ScoreAggregator().aggregate([response(Q1, TRUE_ID), response(Q1, TRUE_ID)], questions)


def test_unknown_option_contributes_nothing():
    aggregator = ScoreAggregator()
    totals = aggregator.aggregate([response(Q1, OPT_A3, TRUE_ID)], QUESTIONS)

    assert totals == {"A": 5.0, "B": 2.0}
    assert aggregator.stats["skipped_options"] == 1


def test_totals_are_sparse():
    questions = {Q1: question({"id": TRUE_ID, "text": "Yes", "score": {"TRT": 4}})}
    totals = ScoreAggregator().aggregate([response(Q1, TRUE_ID)], questions)
    assert totals == {"TRT": 4.0}
    assert "Build" not in totals


def test_zero_weights_are_kept():
    totals = ScoreAggregator().aggregate([response(Q1, FALSE_ID)], QUESTIONS)
    assert totals == {"A": 0.0, "B": 0.0}


def test_fractional_weights_are_not_rounded():
    questions = {Q1: question({"id": TRUE_ID, "text": "Yes", "score": {"Lean": 0.25}})}
    responses = [response(Q1, TRUE_ID), response(Q1, TRUE_ID)]
    assert ScoreAggregator().aggregate(responses, questions) == {"Lean": 0.5}


def test_recompute_is_idempotent():
    aggregator = ScoreAggregator()
    responses = [response(Q1, TRUE_ID), response(Q2, OPT_A2B1)]

    first = aggregator.aggregate(responses, QUESTIONS)
    second = aggregator.aggregate(responses, QUESTIONS)
    assert first == second


def test_response_order_does_not_change_totals():
    aggregator = ScoreAggregator()
    responses = [response(Q1, TRUE_ID), response(Q2, OPT_A3), response(Q2, OPT_A2B1)]

    assert aggregator.aggregate(responses, QUESTIONS) == aggregator.aggregate(
        list(reversed(responses)), QUESTIONS
    )


def test_stats_accumulate_across_runs():
    aggregator = ScoreAggregator()
    aggregator.aggregate([response(Q1, TRUE_ID)], QUESTIONS)
    aggregator.aggregate([response(Q2, OPT_A3)], QUESTIONS)

    assert aggregator.stats["runs"] == 2
    assert aggregator.stats["responses_scored"] == 2

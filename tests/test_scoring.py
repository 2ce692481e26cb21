from types import SimpleNamespace

import pytest

from classes.attempt_manager import score_answers
from utils.helpers import normalize_answers


def question(correct, marks=1):
    return SimpleNamespace(correct_answer=correct, marks=marks)


QUESTIONS = [question(0, marks=1), question(1, marks=2)]


def test_all_correct_scores_full_marks():
    assert score_answers(QUESTIONS, {"0": 0, "1": 1}) == (3, 3, 100)


def test_partial_answers_score_the_matching_marks():
    score, total, percentage = score_answers(QUESTIONS, {"0": 1, "1": 1})
    assert (score, total) == (2, 3)
    assert percentage == pytest.approx(66.6666667)


def test_no_answers_scores_zero():
    assert score_answers(QUESTIONS, {}) == (0, 3, 0)


def test_quiz_without_questions_has_zero_percentage():
    score, total, percentage = score_answers([], {"0": 0})
    assert (score, total, percentage) == (0, 0, 0)


def test_unknown_and_out_of_range_answers_are_ignored():
    answers = {"0": 7, "1": -1, "5": 0, "99": 1}
    assert score_answers(QUESTIONS, answers) == (0, 3, 0)


def test_score_never_exceeds_total():
    answers = {str(i): 0 for i in range(10)}
    score, total, percentage = score_answers([question(0), question(0)], answers)
    assert score <= total
    assert 0 <= percentage <= 100


def test_normalize_answers_accepts_integer_and_digit_string_keys():
    assert normalize_answers({0: 1, "1": 2}) == {"0": 1, "1": 2}


def test_string_choice_never_matches():
    answers = normalize_answers({"0": "0", "1": "1"})
    assert answers == {}
    assert score_answers(QUESTIONS, answers) == (0, 3, 0)


def test_normalize_answers_drops_unusable_entries():
    answers = {"a": 1, "0": None, "1": True, "2": "x", "3": [1], "4": 3}
    assert normalize_answers(answers) == {"4": 3}
    assert normalize_answers(None) == {}
    assert normalize_answers(["0", 1]) == {}

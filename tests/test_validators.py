import pytest

from classes.errors import ValidationError
from classes.validators import (
    normalize_attempts_allowed,
    normalize_allow_previous,
    normalize_is_published,
    validate_questions,
    validate_quiz_payload,
)


@pytest.mark.parametrize("value, expected", [
    (3, 3), ("2", 2), (0, 1), (-4, 1), ("abc", 1), (None, 1), (1.9, 1),
])
def test_normalize_attempts_allowed(value, expected):
    assert normalize_attempts_allowed(value) == expected


@pytest.mark.parametrize("value, expected", [
    (None, True), (True, True), (False, False), (0, False), ("yes", True),
])
def test_normalize_allow_previous(value, expected):
    assert normalize_allow_previous(value) is expected


def test_create_payload_gets_defaults():
    fields = validate_quiz_payload({"title": "  Algebra "})
    assert fields["title"] == "Algebra"
    assert fields["time_limit"] == 30
    assert fields["attempts_allowed"] == 1
    assert fields["allow_previous"] is True
    assert fields["questions"] == []
    assert "password" not in fields


def test_partial_payload_only_touches_supplied_fields():
    fields = validate_quiz_payload({"description": "new"}, partial=True)
    assert fields == {"description": "new"}


def test_missing_title_is_rejected():
    with pytest.raises(ValidationError):
        validate_quiz_payload({"description": "no title"})


@pytest.mark.parametrize("bad_question", [
    {"options": ["a"], "correctAnswer": 0},
    {"questionText": "q", "options": [], "correctAnswer": 0},
    {"questionText": "q", "options": ["a", "b"], "correctAnswer": 2},
    {"questionText": "q", "options": ["a", "b"], "correctAnswer": True},
    {"questionText": "q", "options": ["a"], "correctAnswer": 0, "marks": 0},
    "not a question",
])
def test_malformed_questions_are_rejected(bad_question):
    with pytest.raises(ValidationError):
        validate_questions([bad_question])


def test_valid_questions_are_converted_to_columns():
    cleaned = validate_questions([{"questionText": " q ", "options": ["a", "b"], "correctAnswer": 1}])
    assert cleaned == [{"question_text": "q", "options": ["a", "b"], "correct_answer": 1, "marks": 1}]


@pytest.mark.parametrize("value, expected", [
    (True, True), (False, False), (None, False), (1, True), (0, False),
    ("true", True), ("True", True), ("false", False), ("FALSE", False), ("0", False), ("", False),
])
def test_normalize_is_published(value, expected):
    assert normalize_is_published(value) is expected


@pytest.mark.parametrize("value", ["maybe", 2, [True], {"a": 1}])
def test_unrecognised_published_flag_is_rejected(value):
    with pytest.raises(ValidationError):
        normalize_is_published(value)


def test_string_false_keeps_quiz_unpublished():
    fields = validate_quiz_payload({"title": "Hidden", "isPublished": "false"})
    assert fields["is_published"] is False


@pytest.mark.parametrize("description", [{"a": 1}, ["x"], 42])
def test_non_string_description_is_rejected(description):
    with pytest.raises(ValidationError):
        validate_quiz_payload({"title": "t", "description": description})


def test_description_may_be_null_or_text():
    assert validate_quiz_payload({"title": "t", "description": None})["description"] is None
    assert validate_quiz_payload({"title": "t", "description": "notes"})["description"] == "notes"

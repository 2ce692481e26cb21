# validators.py

from classes.errors import ValidationError

QUIZ_FIELDS = {
    "title": "title",
    "description": "description",
    "category": "category",
    "timeLimit": "time_limit",
    "isPublished": "is_published",
}


def validate_length(field_name, value, max_length):
    if len(value) > max_length:
        raise ValidationError(f"{field_name} must be {max_length} characters or fewer.")


def normalize_attempts_allowed(value, default=1):
    """Coerce to an int >= 1, falling back to the default on anything unusable."""
    try:
        attempts = int(value)
    except (TypeError, ValueError):
        return default
    return attempts if attempts >= 1 else default


def normalize_allow_previous(value):
    # Only an explicit false disables navigation
    if value is None:
        return True
    return value is not False and bool(value)


def normalize_is_published(value):
    """Cast the published flag the way a JSON client means it; "false" stays false."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no", ""):
            return False
    raise ValidationError("isPublished must be a boolean.")


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def validate_questions(questions):
    if not isinstance(questions, list):
        raise ValidationError("Questions must be a list.")
    cleaned = []
    for index, question in enumerate(questions):
        if not isinstance(question, dict):
            raise ValidationError(f"Question {index} must be an object.")
        text = question.get("questionText")
        options = question.get("options")
        correct = question.get("correctAnswer")
        marks = question.get("marks", 1)

        if not isinstance(text, str) or not text.strip():
            raise ValidationError(f"Question {index} must have 'questionText'.")
        if not isinstance(options, list) or not options:
            raise ValidationError(f"Question {index} must have at least one option.")
        if not all(isinstance(o, str) and o.strip() for o in options):
            raise ValidationError(f"Question {index} options must be non-empty strings.")
        if not _is_int(correct) or not 0 <= correct < len(options):
            raise ValidationError(f"Question {index} 'correctAnswer' must index one of its options.")
        if not _is_int(marks) or marks < 1:
            raise ValidationError(f"Question {index} 'marks' must be an integer of at least 1.")

        cleaned.append({
            "question_text": text.strip(),
            "options": list(options),
            "correct_answer": correct,
            "marks": marks,
        })
    return cleaned


def validate_quiz_payload(data, partial=False, default_time_limit=30, default_attempts=1):
    """
    Check and normalise a quiz create/update body.

    Returns a dict of model attribute names. With ``partial`` (updates) only
    supplied keys are returned.
    """
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")

    fields = {}
    for key, attr in QUIZ_FIELDS.items():
        if key in data:
            fields[attr] = data[key]

    if not partial or "title" in fields:
        title = fields.get("title")
        if not isinstance(title, str) or not title.strip():
            raise ValidationError("Title is required.")
        validate_length("Title", title, 255)
        fields["title"] = title.strip()

    if "description" in fields and fields["description"] is not None:
        if not isinstance(fields["description"], str):
            raise ValidationError("Description must be a string.")

    if "category" in fields and fields["category"] is not None:
        validate_length("Category", str(fields["category"]), 100)
        fields["category"] = str(fields["category"])

    if "time_limit" in fields:
        time_limit = fields["time_limit"]
        try:
            time_limit = int(time_limit)
        except (TypeError, ValueError):
            raise ValidationError("Time limit must be a whole number of minutes.")
        if time_limit < 1:
            raise ValidationError("Time limit must be at least one minute.")
        fields["time_limit"] = time_limit
    elif not partial:
        fields["time_limit"] = default_time_limit

    if "is_published" in fields:
        fields["is_published"] = normalize_is_published(fields["is_published"])

    if not partial or "attemptsAllowed" in data:
        fields["attempts_allowed"] = normalize_attempts_allowed(data.get("attemptsAllowed"), default_attempts)
    if not partial or "allowPrevious" in data:
        fields["allow_previous"] = normalize_allow_previous(data.get("allowPrevious"))

    if "questions" in data:
        fields["questions"] = validate_questions(data["questions"])
    elif not partial:
        fields["questions"] = []

    password = data.get("quizPassword")
    if password:
        if not isinstance(password, str):
            raise ValidationError("Quiz password must be a string.")
        fields["password"] = password

    return fields

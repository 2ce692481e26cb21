import logging

from sqlalchemy.exc import SQLAlchemyError

from models import db
from classes.errors import InternalError

logger = logging.getLogger(__name__)


def format_datetime(datetime_obj):
    """Format datetime to ISO 8601, or None."""
    if not datetime_obj:
        return None
    return datetime_obj.isoformat()


def commit_session():
    """Commit the current session; storage failures roll back and surface as InternalError."""
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Database commit failed: %s", e)
        raise InternalError() from e


def normalize_answers(answers):
    """
    Turn a submitted answer mapping into ``{"<question index>": <choice index>}``.

    Keys may be integers or digit strings. Choices must be JSON integers: a
    string such as "1" is dropped and never matches a correct answer.
    """
    if not isinstance(answers, dict):
        return {}
    normalized = {}
    for key, value in answers.items():
        try:
            index = int(key)
        except (TypeError, ValueError):
            continue
        if isinstance(value, bool) or not isinstance(value, int):
            continue
        normalized[str(index)] = value
    return normalized

import logging

from models import db
from models.quizzes import Quiz
from models.attempts import Attempt
from classes.errors import NotFound, Forbidden, Unauthorized, AttemptLimitReached, ValidationError

logger = logging.getLogger(__name__)


def _coerce_id(value):
    # true and 1.9 are not ids
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class AccessGate:
    """Visibility and permission rules for quizzes. Never performs the action itself."""

    @staticmethod
    def visible_query(identity):
        """Students see published quizzes, admins see the ones they created."""
        if identity.get("role") == "admin":
            return Quiz.query.filter_by(created_by=_coerce_id(identity.get("user_id")))
        return Quiz.query.filter_by(is_published=True)

    @staticmethod
    def can_view(quiz, identity):
        if quiz is None:
            return False
        if identity.get("role") == "admin":
            return quiz.is_owned_by(identity.get("user_id"))
        return bool(quiz.is_published)

    @staticmethod
    def get_visible_quiz(quiz_id, identity):
        quiz_id = _coerce_id(quiz_id)
        quiz = db.session.get(Quiz, quiz_id) if quiz_id is not None else None
        if not AccessGate.can_view(quiz, identity):
            raise NotFound()
        return quiz

    @staticmethod
    def require_admin(identity):
        if identity.get("role") != "admin":
            raise Forbidden("Admin access required")

    @staticmethod
    def get_owned_quiz(quiz_id, identity, conceal=False):
        """
        Resolve a quiz the caller may modify.

        Mutations answer a foreign quiz with ``Forbidden``; read-side owner
        views (analytics) pass ``conceal=True`` to answer ``NotFound`` instead.
        """
        AccessGate.require_admin(identity)
        quiz_id = _coerce_id(quiz_id)
        quiz = db.session.get(Quiz, quiz_id) if quiz_id is not None else None
        if quiz is None:
            raise NotFound("Quiz not found")
        if not quiz.is_owned_by(identity.get("user_id")):
            if conceal:
                raise NotFound("Quiz not found")
            logger.warning("User %s tried to modify quiz %s owned by %s",
                           identity.get("user_id"), quiz.id, quiz.created_by)
            raise Forbidden()
        return quiz

    @staticmethod
    def attempts_made(quiz_id, user_id):
        return Attempt.query.filter_by(quiz_id=quiz_id, user_id=_coerce_id(user_id)).count()

    @staticmethod
    def check_attempt_allowed(quiz, identity):
        """Return the caller's attempt count, raising once the limit is reached."""
        if not quiz.is_published:
            raise NotFound()
        made = AccessGate.attempts_made(quiz.id, identity.get("user_id"))
        if made >= (quiz.attempts_allowed or 1):
            raise AttemptLimitReached()
        return made

    @staticmethod
    def check_password(quiz, password):
        """Verify a plaintext quiz password; a quiz without one always passes."""
        if password is not None and not isinstance(password, str):
            raise ValidationError("Password must be a string.")
        if not quiz.requires_password:
            return
        if not password:
            raise Unauthorized("Quiz password required")
        if not quiz.check_password(password):
            raise Forbidden("Incorrect quiz password")

import logging

from flask import current_app

from models import db
from models.quizzes import Quiz
from models.questions import Question
from classes.access_gate import AccessGate
from classes.validators import validate_quiz_payload
from utils.helpers import commit_session

logger = logging.getLogger(__name__)


class QuizManager:
    @staticmethod
    def annotate(quiz, identity):
        """Public projection plus the caller's attempt bookkeeping."""
        quiz_dict = quiz.to_dict()
        attempts_made = AccessGate.attempts_made(quiz.id, identity.get("user_id"))
        attempts_allowed = quiz.attempts_allowed or 1
        quiz_dict["attemptsMade"] = attempts_made
        quiz_dict["attemptsAllowed"] = attempts_allowed
        quiz_dict["canAttempt"] = attempts_made < attempts_allowed
        return quiz_dict

    @staticmethod
    def list_quizzes(identity, limit=None):
        query = AccessGate.visible_query(identity).order_by(Quiz.created_at.desc(), Quiz.id.desc())
        if limit:
            query = query.limit(limit)
        return [QuizManager.annotate(quiz, identity) for quiz in query.all()]

    @staticmethod
    def recent_quizzes(identity):
        return QuizManager.list_quizzes(identity, limit=current_app.config["RECENT_QUIZZES_LIMIT"])

    @staticmethod
    def get_quiz(quiz_id, identity):
        quiz = AccessGate.get_visible_quiz(quiz_id, identity)
        return QuizManager.annotate(quiz, identity)

    @staticmethod
    def _apply(quiz, fields):
        questions = fields.pop("questions", None)
        password = fields.pop("password", None)
        for attr, value in fields.items():
            setattr(quiz, attr, value)
        if password:
            quiz.set_password(password)
        if questions is not None:
            quiz.questions = [Question(position=i, **q) for i, q in enumerate(questions)]

    @staticmethod
    def create_quiz(data, identity):
        AccessGate.require_admin(identity)
        fields = validate_quiz_payload(
            data,
            default_time_limit=current_app.config["DEFAULT_TIME_LIMIT"],
            default_attempts=current_app.config["DEFAULT_ATTEMPTS_ALLOWED"],
        )
        quiz = Quiz(created_by=int(identity.get("user_id")))
        QuizManager._apply(quiz, fields)
        db.session.add(quiz)
        commit_session()
        logger.info("Quiz %s created by user %s", quiz.id, quiz.created_by)
        return quiz.to_dict()

    @staticmethod
    def update_quiz(quiz_id, data, identity):
        quiz = AccessGate.get_owned_quiz(quiz_id, identity)
        fields = validate_quiz_payload(
            data,
            partial=True,
            default_attempts=current_app.config["DEFAULT_ATTEMPTS_ALLOWED"],
        )
        QuizManager._apply(quiz, fields)
        commit_session()
        logger.info("Quiz %s updated", quiz.id)
        return quiz.to_dict()

    @staticmethod
    def delete_quiz(quiz_id, identity):
        quiz = AccessGate.get_owned_quiz(quiz_id, identity)
        attempt_count = len(quiz.attempts)
        # Attempts go with the quiz through the relationship cascade, in one commit
        db.session.delete(quiz)
        commit_session()
        logger.info("Quiz %s deleted along with %d attempts", quiz_id, attempt_count)

    @staticmethod
    def verify_password(quiz_id, password, identity):
        quiz = AccessGate.get_visible_quiz(quiz_id, identity)
        AccessGate.check_password(quiz, password)
        return True

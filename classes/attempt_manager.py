import logging

from sqlalchemy.exc import IntegrityError

from models import db
from models.attempts import Attempt
from classes.access_gate import AccessGate
from classes.errors import AttemptLimitReached, ValidationError
from utils.helpers import commit_session, normalize_answers

logger = logging.getLogger(__name__)


def score_answers(questions, answers):
    """
    Grade an answer mapping against an ordered list of questions.

    ``answers`` maps the stringified question index to the chosen option
    index. Missing or wrong answers contribute nothing and keys beyond the
    last question are ignored. Returns ``(score, total_marks, percentage)``;
    percentage is 0 when the quiz is worth nothing.
    """
    score = 0
    total_marks = 0
    for index, question in enumerate(questions):
        total_marks += question.marks
        if answers.get(str(index)) == question.correct_answer:
            score += question.marks

    percentage = (score / total_marks) * 100 if total_marks > 0 else 0
    return score, total_marks, percentage


class AttemptManager:
    @staticmethod
    def submit_attempt(identity, quiz_id, answers, password=None):
        """Check the gate, grade the answers and store exactly one Attempt."""
        if answers is not None and not isinstance(answers, dict):
            raise ValidationError("Answers must be an object keyed by question index.")

        quiz = AccessGate.get_visible_quiz(quiz_id, identity)
        attempts_made = AccessGate.check_attempt_allowed(quiz, identity)
        AccessGate.check_password(quiz, password)

        answers = normalize_answers(answers or {})
        score, total_marks, percentage = score_answers(quiz.questions, answers)
        # Full configured duration; the server does not measure elapsed time
        time_taken = quiz.time_limit * 60

        attempt = Attempt(
            user_id=int(identity.get("user_id")),
            quiz_id=quiz.id,
            attempt_number=attempts_made + 1,
            answers=answers,
            score=score,
            total_marks=total_marks,
            percentage=percentage,
            time_taken=time_taken,
        )
        db.session.add(attempt)
        try:
            db.session.flush()
        except IntegrityError:
            # A concurrent submission already took this attempt number
            db.session.rollback()
            logger.warning("Concurrent submission for quiz %s by user %s rejected",
                           quiz.id, identity.get("user_id"))
            raise AttemptLimitReached()
        commit_session()

        logger.info("User %s scored %s/%s on quiz %s (attempt %s)",
                    attempt.user_id, score, total_marks, quiz.id, attempt.attempt_number)

        return {
            "attemptId": attempt.id,
            "quiz": quiz.to_dict(),
            "score": score,
            "totalMarks": total_marks,
            "percentage": percentage,
            "answers": dict(answers),
            "timeTaken": time_taken,
        }

    @staticmethod
    def user_attempts(identity, quiz_id):
        """The caller's own attempts on a quiz, newest first."""
        try:
            quiz_id = int(quiz_id)
        except (TypeError, ValueError):
            return []
        attempts = (
            Attempt.query
            .filter_by(user_id=int(identity.get("user_id")), quiz_id=quiz_id)
            .order_by(Attempt.created_at.desc(), Attempt.id.desc())
            .all()
        )
        return [attempt.to_dict() for attempt in attempts]

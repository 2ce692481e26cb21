import math

from flask import current_app
from sqlalchemy import func, select

from models import db
from models.quizzes import Quiz
from models.attempts import Attempt
from classes.access_gate import AccessGate
from utils.helpers import format_datetime


def _mean(values):
    return sum(values) / len(values) if values else 0


def _round_half_up(value):
    # Halves round up
    return int(math.floor(value + 0.5))


def empty_quiz_analytics():
    return {
        "totalAttempts": 0,
        "averageScore": 0,
        "highestScore": 0,
        "lowestScore": 0,
        "averageTime": 0,
        "recentAttempts": [],
        "questionAnalytics": [],
    }


def question_analytics(questions, attempts):
    """Per question index, how many attempts picked the correct option."""
    total = len(attempts)
    results = []
    for index, question in enumerate(questions):
        key = str(index)
        correct = sum(1 for a in attempts if (a.answers or {}).get(key) == question.correct_answer)
        results.append({
            "questionIndex": index,
            "correctAnswers": correct,
            "totalAnswers": total,
            "correctPercentage": (correct / total) * 100 if total > 0 else 0,
        })
    return results


class AnalyticsManager:
    @staticmethod
    def dashboard(identity):
        user_id = int(identity.get("user_id"))

        if identity.get("role") == "admin":
            owned_ids = select(Quiz.id).where(Quiz.created_by == user_id)
            attempts_query = Attempt.query.filter(Attempt.quiz_id.in_(owned_ids))
            total_attempts = attempts_query.count()
            average = db.session.query(func.avg(Attempt.percentage)).filter(Attempt.quiz_id.in_(owned_ids)).scalar()
            return {
                "totalQuizzes": Quiz.query.filter_by(created_by=user_id).count(),
                "totalAttempts": total_attempts,
                "averageScore": _round_half_up(average or 0),
                "completedQuizzes": Quiz.query.filter_by(created_by=user_id, is_published=True).count(),
            }

        total_attempts = Attempt.query.filter_by(user_id=user_id).count()
        average = db.session.query(func.avg(Attempt.percentage)).filter(Attempt.user_id == user_id).scalar()
        return {
            "totalQuizzes": Quiz.query.filter_by(is_published=True).count(),
            "totalAttempts": total_attempts,
            "averageScore": _round_half_up(average or 0),
            "completedQuizzes": total_attempts,
        }

    @staticmethod
    def quiz_analytics(quiz_id, identity):
        quiz = AccessGate.get_owned_quiz(quiz_id, identity, conceal=True)
        attempts = Attempt.query.filter_by(quiz_id=quiz.id).all()
        if not attempts:
            return empty_quiz_analytics()

        percentages = [a.percentage for a in attempts]
        recent = sorted(attempts, key=lambda a: (a.created_at, a.id), reverse=True)
        recent = recent[:current_app.config["RECENT_ATTEMPTS_LIMIT"]]

        return {
            "totalAttempts": len(attempts),
            "averageScore": _mean(percentages),
            "highestScore": max(percentages),
            "lowestScore": min(percentages),
            "averageTime": _mean([a.time_taken for a in attempts]),
            "recentAttempts": [
                {
                    "userName": a.user.name if a.user else None,
                    "percentage": a.percentage,
                    "timeTaken": a.time_taken,
                    "submittedAt": format_datetime(a.created_at),
                }
                for a in recent
            ],
            "questionAnalytics": question_analytics(quiz.questions, attempts),
        }

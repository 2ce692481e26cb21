from datetime import datetime
from models import db

class Attempt(db.Model):
    __tablename__ = "attempts"
    # Two submissions racing past the count check collide here instead of both landing.
    __table_args__ = (
        db.UniqueConstraint("user_id", "quiz_id", "attempt_number", name="uq_attempt_user_quiz_number"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id"), nullable=False)
    attempt_number = db.Column(db.Integer, nullable=False)
    answers = db.Column(db.JSON, nullable=False, default=dict)
    score = db.Column(db.Integer, nullable=False)
    total_marks = db.Column(db.Integer, nullable=False)
    percentage = db.Column(db.Float, nullable=False)
    time_taken = db.Column(db.Integer, nullable=False)  # seconds
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    quiz = db.relationship("Quiz", back_populates="attempts")
    user = db.relationship("User", backref=db.backref("attempts", lazy=True, cascade="all, delete"))

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "quizId": self.quiz_id,
            "attemptNumber": self.attempt_number,
            "answers": dict(self.answers or {}),
            "score": self.score,
            "totalMarks": self.total_marks,
            "percentage": self.percentage,
            "timeTaken": self.time_taken,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

from models import db
from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash


class Quiz(db.Model):
    __tablename__ = "quizzes"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(100), nullable=True)
    time_limit = db.Column(db.Integer, nullable=False, default=30)  # minutes
    is_published = db.Column(db.Boolean, nullable=False, default=False)
    attempts_allowed = db.Column(db.Integer, nullable=False, default=1)
    allow_previous = db.Column(db.Boolean, nullable=False, default=True)
    # Privileged column: only set_password/check_password read or write it
    password_hash = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    created_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    creator = db.relationship("User", back_populates="quizzes")

    @property
    def requires_password(self):
        return bool(self.password_hash)

    @property
    def total_marks(self):
        """Sum of every question's marks, computed on the fly"""
        return sum(q.marks for q in self.questions)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password, method="pbkdf2:sha256")

    def check_password(self, password):
        if not self.password_hash or not password:
            return False
        return check_password_hash(self.password_hash, password)

    def is_owned_by(self, user_id):
        return self.created_by is not None and str(self.created_by) == str(user_id)

    def __repr__(self):
        return f"<Quiz {self.title}>"

    def to_dict(self):
        """Public projection: the password hash never leaves the model."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "timeLimit": self.time_limit,
            "isPublished": self.is_published,
            "attemptsAllowed": self.attempts_allowed,
            "allowPrevious": self.allow_previous,
            "requiresPassword": self.requires_password,
            "createdBy": {
                "id": self.created_by,
                "name": self.creator.name if self.creator else None,
            },
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
            "questions": [q.to_dict() for q in self.questions],
        }

from .questions import Question
from .attempts import Attempt

Quiz.questions = db.relationship(
    "Question", back_populates="quiz", order_by=Question.position, cascade="all, delete-orphan"
)
Quiz.attempts = db.relationship("Attempt", back_populates="quiz", lazy=True, cascade="all, delete-orphan")

from models import db

class Question(db.Model):
    __tablename__ = "questions"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id"), nullable=False)
    position = db.Column(db.Integer, nullable=False)  # zero-based, defines the answer key
    question_text = db.Column(db.Text, nullable=False)
    options = db.Column(db.JSON, nullable=False)
    correct_answer = db.Column(db.Integer, nullable=False)
    marks = db.Column(db.Integer, nullable=False, default=1)

    quiz = db.relationship("Quiz", back_populates="questions")

    def to_dict(self):
        return {
            "questionText": self.question_text,
            "options": list(self.options or []),
            "correctAnswer": self.correct_answer,
            "marks": self.marks,
        }

from flask import jsonify


class QuizAppError(Exception):
    """Base error carrying the HTTP status it maps to."""
    status_code = 500
    message = "Server error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_response(self):
        return jsonify({"error": self.message}), self.status_code


class ValidationError(QuizAppError):
    status_code = 400
    message = "Invalid input"


class Unauthorized(QuizAppError):
    status_code = 401
    message = "Unauthorized"


class Forbidden(QuizAppError):
    status_code = 403
    message = "Access denied"


class AttemptLimitReached(Forbidden):
    message = "Attempt limit reached for this quiz"


class NotFound(QuizAppError):
    status_code = 404
    message = "Quiz not found or not available"


class InternalError(QuizAppError):
    status_code = 500
    message = "Server error"

import logging

from flask import Blueprint, request, jsonify, g

from classes.attempt_manager import AttemptManager
from classes.errors import ValidationError
from utils.utils import login_required

attempt_bp = Blueprint("attempt", __name__)
logger = logging.getLogger(__name__)


@attempt_bp.route("/submit", methods=["POST"])
@login_required
def submit_attempt():
    """Grades the quiz and returns the scored result."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")

    quiz_id = data.get("quizId")
    if quiz_id is None:
        raise ValidationError("quizId is required")

    logger.debug("Submission from user %s for quiz %s", g.user.get("user_id"), quiz_id)
    result = AttemptManager.submit_attempt(g.user, quiz_id, data.get("answers"), data.get("password"))
    return jsonify(result), 200


@attempt_bp.route("/user/<int:quiz_id>", methods=["GET"])
@login_required
def user_attempts(quiz_id):
    return jsonify(AttemptManager.user_attempts(g.user, quiz_id)), 200

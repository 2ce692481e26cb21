from flask import Blueprint, request, jsonify, g

from classes.quiz_manager import QuizManager
from utils.utils import login_required, admin_required

quiz_bp = Blueprint("quiz", __name__)


# Fetch all visible quizzes
# --------------------------------------------------------------------------------
@quiz_bp.route("", methods=["GET"])
@login_required
def list_quizzes():
    return jsonify(QuizManager.list_quizzes(g.user)), 200


# Fetch the newest visible quizzes
# --------------------------------------------------------------------------------
@quiz_bp.route("/recent", methods=["GET"])
@login_required
def recent_quizzes():
    return jsonify(QuizManager.recent_quizzes(g.user)), 200


# Fetch one single quiz
# --------------------------------------------------------------------------------
@quiz_bp.route("/<int:quiz_id>", methods=["GET"])
@login_required
def get_quiz(quiz_id):
    return jsonify(QuizManager.get_quiz(quiz_id, g.user)), 200


# CREATE a New Quiz
# --------------------------------------------------------------------------------
@quiz_bp.route("", methods=["POST"])
@admin_required
def create_quiz():
    data = request.get_json(silent=True)
    quiz = QuizManager.create_quiz(data, g.user)
    return jsonify(quiz), 201


# EDIT a Quiz
# --------------------------------------------------------------------------------
@quiz_bp.route("/<int:quiz_id>", methods=["PUT"])
@admin_required
def edit_quiz(quiz_id):
    data = request.get_json(silent=True)
    return jsonify(QuizManager.update_quiz(quiz_id, data, g.user)), 200


# DELETE a Quiz and its attempts
# --------------------------------------------------------------------------------
@quiz_bp.route("/<int:quiz_id>", methods=["DELETE"])
@admin_required
def delete_quiz(quiz_id):
    QuizManager.delete_quiz(quiz_id, g.user)
    return jsonify({"message": "Quiz deleted successfully"}), 200


# Check a quiz password before starting
# --------------------------------------------------------------------------------
@quiz_bp.route("/<int:quiz_id>/verify-password", methods=["POST"])
@login_required
def verify_password(quiz_id):
    data = request.get_json(silent=True) or {}
    QuizManager.verify_password(quiz_id, data.get("password"), g.user)
    return jsonify({"success": True}), 200

from flask import Blueprint, jsonify, g

from classes.analytics_manager import AnalyticsManager
from utils.utils import login_required, admin_required

stats_bp = Blueprint("stats", __name__)


@stats_bp.route("/stats/dashboard", methods=["GET"])
@login_required
def dashboard():
    return jsonify(AnalyticsManager.dashboard(g.user)), 200


@stats_bp.route("/analytics/<int:quiz_id>", methods=["GET"])
@admin_required
def quiz_analytics(quiz_id):
    return jsonify(AnalyticsManager.quiz_analytics(quiz_id, g.user)), 200

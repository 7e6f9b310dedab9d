from flask import Blueprint, current_app, jsonify, request

from ..extensions import get_backend
from ..services import reporting_service


reports_bp = Blueprint("reports", __name__, url_prefix="/api/reports")


@reports_bp.get("/summary")
def summary_report():
    threshold = request.args.get("low_stock_threshold", current_app.config["LOW_STOCK_THRESHOLD"], type=int)
    report = reporting_service.dashboard_summary(get_backend(), low_stock_threshold=threshold)
    return jsonify(report), 200

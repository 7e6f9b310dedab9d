# backend/greenleaf/routes/exports.py
"""Data export downloads (CSV or JSON attachments named with today's date)."""
from flask import Blueprint, Response, current_app, request

from ..extensions import get_backend
from ..services import export_service
from ..services.export_service import ExportError

exports_bp = Blueprint("exports", __name__, url_prefix="/api/exports")


def _download(filename: str, content: str, mimetype: str) -> Response:
    response = Response(content, content_type=mimetype)
    response.headers["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response


@exports_bp.get("/<table>")
def export_table(table: str):
    fmt = request.args.get("format", "csv").lower()
    try:
        filename, content, mimetype = export_service.export_table(get_backend(), table, fmt)
    except ExportError as e:
        return {"error": str(e)}, 400
    except Exception:
        current_app.logger.exception("Failed to export %s", table)
        return {"error": "There was an error exporting the data"}, 500
    return _download(filename, content, mimetype)


@exports_bp.get("")
def export_all():
    fmt = request.args.get("format", "json").lower()
    try:
        filename, content, mimetype = export_service.export_all(get_backend(), fmt)
    except ExportError as e:
        return {"error": str(e)}, 400
    except Exception:
        current_app.logger.exception("Failed to export complete database")
        return {"error": "There was an error exporting the data"}, 500
    return _download(filename, content, mimetype)

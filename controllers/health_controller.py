from flask import Blueprint, current_app, jsonify

health_bp = Blueprint("health", __name__)


@health_bp.route("/health")
def health():
    """Report whether the subjects store has reached MongoDB yet."""
    if current_app.extensions["subject_store"].ready:
        return jsonify({"status": "ok", "database": "connected"}), 200
    return jsonify({"status": "starting", "database": "unavailable"}), 503

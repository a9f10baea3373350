from flask import Blueprint, current_app, jsonify, request

subjects_bp = Blueprint("subjects", __name__, url_prefix="/subjects")


def get_store():
    return current_app.extensions["subject_store"]


# List Subjects
@subjects_bp.route("", methods=["GET"])
def list_subjects():
    subjects = get_store().list_subjects()
    return jsonify([subject.to_json() for subject in subjects]), 200


# Add Subject
@subjects_bp.route("", methods=["POST"])
def add_subject():
    # A missing or unparsable body counts as a missing name
    payload = request.get_json(silent=True)
    name = payload.get("name") if isinstance(payload, dict) else None

    subject = get_store().create_subject(name)
    return jsonify(subject.to_json()), 201


# Mark Present
@subjects_bp.route("/<subject_id>/present", methods=["POST"])
def mark_present(subject_id):
    get_store().mark_present(subject_id)
    return jsonify({"message": "Marked as present"}), 200


# Mark Absent
@subjects_bp.route("/<subject_id>/absent", methods=["POST"])
def mark_absent(subject_id):
    get_store().mark_absent(subject_id)
    return jsonify({"message": "Marked as absent"}), 200


# Delete Subject
@subjects_bp.route("/<subject_id>", methods=["DELETE"])
def delete_subject(subject_id):
    get_store().delete_subject(subject_id)
    return jsonify({"message": "Subject deleted successfully"}), 200

"""School registration and share link endpoints."""

import logging

from flask import Blueprint, current_app, jsonify, request

from ..config import get_share_base_url
from ..database import db
from ..services.school_store import (
    SchoolNotFoundError,
    SchoolValidationError,
    create_school,
    ensure_share_token,
    get_school,
)

logger = logging.getLogger(__name__)

schools_bp = Blueprint("schools", __name__)


def _school_to_dict(school) -> dict:
    return {
        "id": school.id,
        "school_name": school.school_name,
        "contact_person": school.contact_person,
        "created_at": school.created_at.isoformat() if school.created_at else None,
    }


@schools_bp.route("/api/schools", methods=["POST"])
def register_school():
    """Register a school.

    Accepts JSON body with:
        - school_name (required)
        - contact_person (required)

    Returns:
        201: School created
        400: Missing fields
    """
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "Request body is required"}), 400

    try:
        school = create_school(data.get("school_name"), data.get("contact_person"))
    except SchoolValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        logger.exception("Failed to register school")
        db.session.rollback()
        return jsonify({"error": "Failed to register school"}), 500

    return jsonify(_school_to_dict(school)), 201


@schools_bp.route("/api/schools/<school_id>", methods=["GET"])
def school_detail(school_id: str):
    """Get a school's registration details."""
    try:
        school = get_school(school_id)
    except SchoolNotFoundError:
        return jsonify({"error": "School not found"}), 404
    return jsonify(_school_to_dict(school)), 200


@schools_bp.route("/api/schools/<school_id>/share", methods=["POST"])
def create_share_link(school_id: str):
    """Create (or return the existing) read-only share link for a school's chart."""
    try:
        token = ensure_share_token(school_id)
    except SchoolNotFoundError:
        return jsonify({"error": "School not found"}), 404
    except Exception:
        logger.exception(f"Failed to create share link for school {school_id}")
        db.session.rollback()
        return jsonify({"error": "Failed to create share link"}), 500

    base_url = get_share_base_url(current_app.config.get("APP_CONFIG", {}))
    return jsonify({
        "token": token,
        "url": f"{base_url}/api/shared/{token}/organization",
    }), 200

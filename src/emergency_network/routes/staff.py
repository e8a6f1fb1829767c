"""Staff roster endpoints."""

import logging

from flask import Blueprint, jsonify, request

from ..services.school_store import SchoolNotFoundError
from ..services.staff_store import (
    StaffStoreError,
    StaffValidationError,
    list_staff,
    replace_staff,
)

logger = logging.getLogger(__name__)

staff_bp = Blueprint("staff", __name__)


@staff_bp.route("/api/schools/<school_id>/staff", methods=["GET"])
def get_staff(school_id: str):
    """List the roster in submission order."""
    try:
        records = list_staff(school_id)
    except SchoolNotFoundError:
        return jsonify({"error": "School not found"}), 404
    except StaffStoreError:
        logger.exception(f"Failed to list staff for school {school_id}")
        return jsonify({"error": "Failed to load staff"}), 500

    return jsonify({"staff": [r.to_dict() for r in records]}), 200


@staff_bp.route("/api/schools/<school_id>/staff", methods=["PUT"])
def put_staff(school_id: str):
    """Replace the whole roster.

    Accepts JSON body with:
        - staff (required): list of {name, department, position, contact, id?}

    Returns:
        200: Roster stored
        400: Validation error (with the offending entry index)
        404: Unknown school
    """
    data = request.get_json(silent=True)
    if not data or "staff" not in data:
        return jsonify({"error": "Request body with 'staff' list is required"}), 400

    try:
        records = replace_staff(school_id, data["staff"])
    except SchoolNotFoundError:
        return jsonify({"error": "School not found"}), 404
    except StaffValidationError as e:
        return jsonify({"error": str(e), "index": e.index}), 400
    except StaffStoreError:
        logger.exception(f"Failed to replace staff for school {school_id}")
        return jsonify({"error": "Failed to save staff"}), 500

    return jsonify({"staff": [r.to_dict() for r in records]}), 200

"""Organization chart API endpoints."""

import logging

from flask import Blueprint, current_app, jsonify, request

from ..config import get_organization_config
from ..services.chart_service import (
    get_organization_chart,
    move_and_save,
    reset_layout,
    save_layout,
)
from ..services.layout_store import LayoutStoreError
from ..services.org_tree import LayoutFormatError
from ..services.school_store import SchoolNotFoundError, get_school_by_share_token
from ..services.staff_store import StaffStoreError
from ..services.tree_reorder import ROOT, InvalidMoveError, NotFoundError

logger = logging.getLogger(__name__)

organization_bp = Blueprint("organization", __name__)


def _reconcile_requested() -> bool:
    """?reconcile=true wins; otherwise fall back to organization.reconcile_on_load."""
    arg = request.args.get("reconcile")
    if arg is not None:
        return arg.lower() in ("true", "1", "yes")
    config = current_app.config.get("APP_CONFIG", {})
    return bool(get_organization_config(config)["reconcile_on_load"])


@organization_bp.route("/api/schools/<school_id>/organization", methods=["GET"])
def get_chart(school_id: str):
    """Get the chart: the saved layout if any, else the tier-derived tree."""
    try:
        chart = get_organization_chart(school_id, reconcile=_reconcile_requested())
    except SchoolNotFoundError:
        return jsonify({"error": "School not found"}), 404
    except LayoutFormatError:
        logger.exception(f"Stored layout for school {school_id} is malformed")
        return jsonify({"error": "Stored layout is malformed"}), 500
    except (StaffStoreError, LayoutStoreError):
        logger.exception(f"Failed to load chart for school {school_id}")
        return jsonify({"error": "Failed to load organization chart"}), 500

    return jsonify(chart.to_dict()), 200


@organization_bp.route("/api/schools/<school_id>/organization/move", methods=["POST"])
def move(school_id: str):
    """Move one node and save the result as the school's layout.

    Accepts JSON body with:
        - node_id (required)
        - from_parent_id (optional, default "root")
        - from_index (required)
        - to_parent_id (optional, default "root")
        - to_index (required)

    Returns:
        200: Updated chart
        400: Missing or mistyped fields
        404: Unknown school
        409: Stale node or parent ids (refetch the chart and retry)
        422: Target index out of range
    """
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "Request body is required"}), 400

    node_id = data.get("node_id")
    from_parent_id = data.get("from_parent_id") or ROOT
    to_parent_id = data.get("to_parent_id") or ROOT
    from_index = data.get("from_index")
    to_index = data.get("to_index")

    if not isinstance(node_id, str) or not node_id:
        return jsonify({"error": "'node_id' is required"}), 400
    if not isinstance(from_parent_id, str) or not isinstance(to_parent_id, str):
        return jsonify({"error": "Parent ids must be strings"}), 400
    # bool is an int subclass; reject it explicitly
    for name, value in (("from_index", from_index), ("to_index", to_index)):
        if not isinstance(value, int) or isinstance(value, bool):
            return jsonify({"error": f"'{name}' must be an integer"}), 400

    try:
        chart = move_and_save(
            school_id,
            node_id,
            from_parent_id,
            from_index,
            to_parent_id,
            to_index,
            reconcile=_reconcile_requested(),
        )
    except SchoolNotFoundError:
        return jsonify({"error": "School not found"}), 404
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 409
    except InvalidMoveError as e:
        return jsonify({"error": str(e)}), 422
    except LayoutFormatError:
        logger.exception(f"Stored layout for school {school_id} is malformed")
        return jsonify({"error": "Stored layout is malformed"}), 500
    except (StaffStoreError, LayoutStoreError):
        logger.exception(f"Failed to move node for school {school_id}")
        return jsonify({"error": "Failed to save organization chart"}), 500

    return jsonify(chart.to_dict()), 200


@organization_bp.route("/api/schools/<school_id>/organization/layout", methods=["PUT"])
def put_layout(school_id: str):
    """Save a full forest as the school's layout.

    Accepts JSON body with:
        - tree (required): list of serialized root nodes
    """
    data = request.get_json(silent=True)
    if not data or "tree" not in data:
        return jsonify({"error": "Request body with 'tree' is required"}), 400

    try:
        chart = save_layout(school_id, data["tree"])
    except SchoolNotFoundError:
        return jsonify({"error": "School not found"}), 404
    except LayoutFormatError as e:
        return jsonify({"error": str(e)}), 422
    except (StaffStoreError, LayoutStoreError):
        logger.exception(f"Failed to save layout for school {school_id}")
        return jsonify({"error": "Failed to save layout"}), 500

    return jsonify(chart.to_dict()), 200


@organization_bp.route("/api/schools/<school_id>/organization/layout", methods=["DELETE"])
def delete_layout(school_id: str):
    """Discard the saved layout and return the tier-derived chart."""
    try:
        chart = reset_layout(school_id)
    except SchoolNotFoundError:
        return jsonify({"error": "School not found"}), 404
    except (StaffStoreError, LayoutStoreError):
        logger.exception(f"Failed to reset layout for school {school_id}")
        return jsonify({"error": "Failed to reset layout"}), 500

    return jsonify(chart.to_dict()), 200


@organization_bp.route("/api/shared/<token>/organization", methods=["GET"])
def shared_chart(token: str):
    """Read-only chart for holders of a share link."""
    try:
        school = get_school_by_share_token(token)
        chart = get_organization_chart(school.id, reconcile=_reconcile_requested())
    except SchoolNotFoundError:
        return jsonify({"error": "Shared chart not found"}), 404
    except (StaffStoreError, LayoutStoreError, LayoutFormatError):
        logger.exception("Failed to load shared chart")
        return jsonify({"error": "Failed to load organization chart"}), 500

    result = chart.to_dict()
    result["school_name"] = school.school_name
    return jsonify(result), 200

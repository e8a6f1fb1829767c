"""Saved chart layout persistence."""

import logging
from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError

from ..database import db
from ..models.organization_layout import OrganizationLayout
from .org_tree import OrganizationNode, forest_from_dicts, forest_to_dicts

logger = logging.getLogger(__name__)


class LayoutStoreError(Exception):
    """Raised when a layout cannot be read or written."""


def get_layout(school_id: str) -> list[OrganizationNode] | None:
    """
    Return the saved forest for a school, or None when none is saved.

    Raises:
        LayoutStoreError: Database failure
        LayoutFormatError: Stored payload is malformed
    """
    try:
        row = OrganizationLayout.query.filter_by(school_id=school_id).first()
    except SQLAlchemyError as e:
        raise LayoutStoreError(f"Failed to load layout for school {school_id}") from e
    if row is None:
        return None
    return forest_from_dicts(row.layout_data)


def put_layout(school_id: str, forest: Sequence[OrganizationNode]) -> None:
    """Save (insert or overwrite) the school's layout. Last writer wins."""
    data = forest_to_dicts(forest)
    try:
        row = OrganizationLayout.query.filter_by(school_id=school_id).first()
        if row is None:
            db.session.add(OrganizationLayout(school_id=school_id, layout_data=data))
        else:
            row.layout_data = data
            row.updated_at = datetime.now(timezone.utc)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to save layout for school {school_id}: {e}")
        raise LayoutStoreError(f"Failed to save layout for school {school_id}") from e

    logger.info(f"Saved layout for school {school_id} ({len(data)} roots)")


def delete_layout(school_id: str) -> bool:
    """Remove the saved layout. Returns True if one existed."""
    try:
        deleted = OrganizationLayout.query.filter_by(school_id=school_id).delete()
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise LayoutStoreError(f"Failed to delete layout for school {school_id}") from e

    if deleted:
        logger.info(f"Layout reset for school {school_id}")
    return bool(deleted)

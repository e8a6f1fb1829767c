"""Staff roster persistence.

Rosters are replaced wholesale: every submission deletes the school's
existing rows and inserts the new list in one transaction. Roster order is
kept in StaffMember.sort_order.
"""

import logging
import uuid
from typing import Any, Sequence

from sqlalchemy.exc import SQLAlchemyError

from ..database import db
from ..models.staff import StaffMember, StaffPosition
from .org_tree import StaffRecord
from .school_store import get_school

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "department", "contact")
MAX_ID_LENGTH = 36
MAX_FIELD_LENGTH = 128


class StaffStoreError(Exception):
    """Raised when the roster cannot be read or written."""


class StaffValidationError(Exception):
    """Raised when a submitted roster entry is invalid."""

    def __init__(self, message: str, index: int | None = None):
        super().__init__(message)
        self.index = index


def list_staff(school_id: str) -> list[StaffRecord]:
    """
    Return the school's roster in submission order.

    Raises:
        SchoolNotFoundError: Unknown school
        StaffStoreError: Database failure
    """
    get_school(school_id)
    try:
        members = (
            StaffMember.query.filter_by(school_id=school_id)
            .order_by(StaffMember.sort_order.asc())
            .all()
        )
    except SQLAlchemyError as e:
        raise StaffStoreError(f"Failed to load staff for school {school_id}") from e
    return [StaffRecord.from_model(m) for m in members]


def validate_entries(entries: Sequence[Any]) -> list[StaffRecord]:
    """
    Validate raw roster entries and convert them to records.

    Entries without an id get a fresh UUID. Supplied ids are kept so a
    resubmitted roster still matches a saved layout.

    Raises:
        StaffValidationError: On the first invalid entry
    """
    if not isinstance(entries, (list, tuple)):
        raise StaffValidationError("'staff' must be a list")

    records = []
    seen_ids = set()
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise StaffValidationError("Staff entry must be an object", index)

        values = {}
        for key in REQUIRED_FIELDS:
            value = entry.get(key)
            if not isinstance(value, str) or not value.strip():
                raise StaffValidationError(f"Field '{key}' is required", index)
            value = value.strip()
            if len(value) > MAX_FIELD_LENGTH:
                raise StaffValidationError(
                    f"Field '{key}' must be at most {MAX_FIELD_LENGTH} characters", index
                )
            values[key] = value

        try:
            position = StaffPosition(entry.get("position", StaffPosition.STAFF.value))
        except ValueError:
            raise StaffValidationError(
                f"Unknown position: {entry.get('position')!r}", index
            )

        staff_id = entry.get("id")
        if staff_id is None or (isinstance(staff_id, str) and not staff_id.strip()):
            staff_id = str(uuid.uuid4())
        elif not isinstance(staff_id, str):
            raise StaffValidationError("Field 'id' must be a string", index)
        elif len(staff_id) > MAX_ID_LENGTH:
            raise StaffValidationError(
                f"Field 'id' must be at most {MAX_ID_LENGTH} characters", index
            )
        if staff_id in seen_ids:
            raise StaffValidationError(f"Duplicate staff id: {staff_id}", index)
        seen_ids.add(staff_id)

        records.append(StaffRecord(id=staff_id, position=position, **values))
    return records


def replace_staff(school_id: str, entries: Sequence[Any]) -> list[StaffRecord]:
    """
    Replace the school's roster with the submitted entries.

    Args:
        school_id: Target school
        entries: Raw entry dicts (name, department, position, contact, optional id)

    Returns:
        The stored records in submission order

    Raises:
        SchoolNotFoundError: Unknown school
        StaffValidationError: Invalid entry; nothing is written
        StaffStoreError: Database failure; the transaction is rolled back
    """
    get_school(school_id)
    records = validate_entries(entries)

    try:
        StaffMember.query.filter_by(school_id=school_id).delete()
        # Flush deletes first so resubmitted ids do not collide
        db.session.flush()
        for order, record in enumerate(records):
            db.session.add(
                StaffMember(
                    id=record.id,
                    school_id=school_id,
                    name=record.name,
                    department=record.department,
                    position=record.position,
                    contact=record.contact,
                    sort_order=order,
                )
            )
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to replace staff for school {school_id}: {e}")
        raise StaffStoreError(f"Failed to save staff for school {school_id}") from e

    logger.info(f"Replaced staff roster for school {school_id}: {len(records)} members")
    return records

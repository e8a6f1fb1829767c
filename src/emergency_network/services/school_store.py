"""School registration and share-token lookup."""

import logging
import secrets

from ..database import db
from ..models.school import School

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 128


class SchoolNotFoundError(Exception):
    """Raised when a school id or share token does not resolve to a school."""


class SchoolValidationError(Exception):
    """Raised when school registration input is incomplete."""


def create_school(school_name: str, contact_person: str) -> School:
    """Register a new school.

    Raises:
        SchoolValidationError: If either field is empty or too long
    """
    school_name = (school_name or "").strip()
    contact_person = (contact_person or "").strip()
    if not school_name or not contact_person:
        raise SchoolValidationError("Both 'school_name' and 'contact_person' are required")
    if max(len(school_name), len(contact_person)) > MAX_NAME_LENGTH:
        raise SchoolValidationError(
            f"'school_name' and 'contact_person' must be at most {MAX_NAME_LENGTH} characters"
        )

    school = School(school_name=school_name, contact_person=contact_person)
    db.session.add(school)
    db.session.commit()
    logger.info(f"Registered school {school.id} ({school.school_name})")
    return school


def get_school(school_id: str) -> School:
    """Return the school or raise SchoolNotFoundError."""
    school = db.session.get(School, school_id)
    if school is None:
        raise SchoolNotFoundError(f"School not found: {school_id}")
    return school


def ensure_share_token(school_id: str) -> str:
    """Return the school's share token, creating one on first use."""
    school = get_school(school_id)
    if not school.share_token:
        school.share_token = secrets.token_urlsafe(24)
        db.session.commit()
        logger.info(f"Share token created for school {school_id}")
    return school.share_token


def get_school_by_share_token(token: str) -> School:
    school = School.query.filter_by(share_token=token).first() if token else None
    if school is None:
        raise SchoolNotFoundError("Unknown share token")
    return school

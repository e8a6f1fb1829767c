"""School model."""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..database import db

if TYPE_CHECKING:
    from .organization_layout import OrganizationLayout
    from .staff import StaffMember


class School(db.Model):
    """
    Represents a registered school.

    A school owns one staff roster and at most one saved organization
    layout. The optional share token grants read-only access to the chart.
    """

    __tablename__ = "schools"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    school_name: Mapped[str] = mapped_column(String(128), nullable=False)
    contact_person: Mapped[str] = mapped_column(String(128), nullable=False)
    share_token: Mapped[str | None] = mapped_column(
        String(64), nullable=True, unique=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    staff: Mapped[list["StaffMember"]] = relationship(
        "StaffMember",
        back_populates="school",
        cascade="all, delete-orphan",
        order_by="StaffMember.sort_order",
    )
    layout: Mapped["OrganizationLayout | None"] = relationship(
        "OrganizationLayout",
        back_populates="school",
        cascade="all, delete-orphan",
        uselist=False,
    )

    def __repr__(self) -> str:
        return f"<School id={self.id} name={self.school_name}>"

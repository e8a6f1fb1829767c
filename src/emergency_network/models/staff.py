"""Staff member model and StaffPosition enum."""

import enum
import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..database import db

if TYPE_CHECKING:
    from .school import School


class StaffPosition(enum.Enum):
    """Position tiers, declared in precedence order (highest first)."""

    PRINCIPAL = "principal"
    VICE_PRINCIPAL = "vice_principal"
    DEPARTMENT_HEAD = "department_head"
    STAFF = "staff"

    @property
    def rank(self) -> int:
        """Zero-based precedence; lower ranks sit higher in the chart."""
        return list(StaffPosition).index(self)


class StaffMember(db.Model):
    """
    Represents one row of a school's staff roster.

    Rosters are replaced wholesale, so rows are never updated in place.
    sort_order preserves the order in which the roster was submitted.
    Ids are client-visible and only unique within one school.
    """

    __tablename__ = "staff"

    school_id: Mapped[str] = mapped_column(
        ForeignKey("schools.id", ondelete="CASCADE"), primary_key=True
    )
    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    department: Mapped[str] = mapped_column(String(128), nullable=False)
    position: Mapped[StaffPosition] = mapped_column(
        Enum(StaffPosition, name="staffposition", create_constraint=True),
        nullable=False,
        default=StaffPosition.STAFF,
    )
    contact: Mapped[str] = mapped_column(String(128), nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    school: Mapped["School"] = relationship("School", back_populates="staff")

    def __repr__(self) -> str:
        return f"<StaffMember id={self.id} name={self.name} position={self.position.value}>"

"""OrganizationLayout model."""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..database import db

if TYPE_CHECKING:
    from .school import School


class OrganizationLayout(db.Model):
    """
    A manually arranged organization chart for one school.

    layout_data holds the serialized forest (nested id/staff/children
    dicts). When a row exists it overrides the tier-derived chart.
    """

    __tablename__ = "organization_layouts"

    id: Mapped[int] = mapped_column(primary_key=True)
    school_id: Mapped[str] = mapped_column(
        ForeignKey("schools.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    layout_data: Mapped[Any] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    school: Mapped["School"] = relationship("School", back_populates="layout")

    def __repr__(self) -> str:
        return f"<OrganizationLayout id={self.id} school_id={self.school_id}>"

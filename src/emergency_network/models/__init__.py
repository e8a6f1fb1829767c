"""Database models package.

Models:
    - School: Registered school with optional share token
    - StaffMember: One roster row (name, department, position, contact)
    - OrganizationLayout: Saved, manually arranged chart for a school

Enums:
    - StaffPosition: principal, vice_principal, department_head, staff
"""

from .organization_layout import OrganizationLayout
from .school import School
from .staff import StaffMember, StaffPosition

__all__ = [
    # Models
    "School",
    "StaffMember",
    "OrganizationLayout",
    # Enums
    "StaffPosition",
]

"""Routes package for Emergency Network."""

from .health import health_bp
from .organization import organization_bp
from .schools import schools_bp
from .staff import staff_bp

__all__ = ["health_bp", "organization_bp", "schools_bp", "staff_bp"]

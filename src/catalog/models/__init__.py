"""Model exports.

Import from here: `from src.catalog.models import Project, User`
"""

from src.catalog.models.project import Project
from src.catalog.models.user import User

__all__ = ["Project", "User"]

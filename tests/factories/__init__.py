"""Test data factories."""

from tests.factories.base import BaseFactory, generate_uuid, utc_now
from tests.factories.project import ProjectFactory, sample_servers
from tests.factories.user import UserFactory

__all__ = [
    "BaseFactory",
    "ProjectFactory",
    "UserFactory",
    "generate_uuid",
    "sample_servers",
    "utc_now",
]

"""Project factory for test data generation."""

from polyfactory import Use

from src.catalog.models import Project
from tests.factories.base import BaseFactory, generate_uuid, utc_now


def sample_servers() -> list[dict]:
    return [
        {
            "name": "S1",
            "host": "10.0.0.1",
            "databases": [{"name": "D1", "tables": [{"name": "T1", "rows": 10}]}],
        }
    ]


class ProjectFactory(BaseFactory):
    """Factory for generating stored Project rows."""

    __model__ = Project

    id = Use(generate_uuid)
    name = Use(lambda: f"Project {generate_uuid().hex[-8:]}")
    user_id = "u1"
    description = None
    is_active = True
    sql_servers = Use(sample_servers)
    attributes = Use(dict)
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

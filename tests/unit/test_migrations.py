"""Alembic migrations against a throwaway SQLite file."""

from pathlib import Path

import pytest
from sqlalchemy import create_engine, inspect

from src.catalog.core.config import get_settings
from src.catalog.core.db import run_migrations_async, run_migrations_sync

pytestmark = pytest.mark.unit

ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture
def migrations_db(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point DATABASE_MIGRATIONS_URL at a fresh SQLite file."""
    db_file = tmp_path / "catalog.db"
    monkeypatch.chdir(ROOT)
    monkeypatch.setenv("DATABASE_MIGRATIONS_URL", f"sqlite+aiosqlite:///{db_file}")
    get_settings.cache_clear()
    yield f"sqlite:///{db_file}"
    get_settings.cache_clear()


def _inspect(url: str, table: str = "projects"):
    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        columns = {c["name"] for c in inspector.get_columns(table)}
        indexes = {i["name"]: i for i in inspector.get_indexes(table)}
        return columns, indexes
    finally:
        engine.dispose()


def test_upgrade_creates_projects_table(migrations_db: str):
    run_migrations_sync()

    columns, indexes = _inspect(migrations_db)

    assert {"id", "name", "user_id", "sql_servers", "attributes", "created_at"} <= columns
    assert indexes["ix_projects_name"]["unique"]


def test_upgrade_creates_users_table(migrations_db: str):
    run_migrations_sync()

    columns, indexes = _inspect(migrations_db, "users")

    assert {"id", "email", "role", "is_active", "attributes", "last_login_at"} <= columns
    assert indexes["ix_users_email"]["unique"]


async def test_async_runner(migrations_db: str):
    await run_migrations_async()

    columns, _ = _inspect(migrations_db)
    assert "updated_at" in columns

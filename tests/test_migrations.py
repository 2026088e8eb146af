import importlib.util
from pathlib import Path

from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import create_engine, inspect
from sqlmodel import SQLModel

import app.models  # noqa: F401

VERSIONS = Path(__file__).resolve().parent.parent / "alembic" / "versions"


def _load_revision(filename):
    location = importlib.util.spec_from_file_location("initial_revision", VERSIONS / filename)
    module = importlib.util.module_from_spec(location)
    location.loader.exec_module(module)
    return module


def _schema(engine):
    inspector = inspect(engine)
    schema = {}
    for table in SQLModel.metadata.sorted_tables:
        columns = sorted(c["name"] for c in inspector.get_columns(table.name))
        foreign_keys = sorted(
            (
                tuple(fk["constrained_columns"]),
                fk["referred_table"],
                (fk.get("options") or {}).get("ondelete"),
            )
            for fk in inspector.get_foreign_keys(table.name)
        )
        schema[table.name] = (columns, foreign_keys)
    return schema


def test_migration_builds_the_same_schema_as_the_models():
    migrated = create_engine("sqlite://")
    revision = _load_revision("3f1c9a7d2b10_create_order_workflow_tables.py")
    with migrated.begin() as conn:
        with Operations.context(MigrationContext.configure(conn)):
            revision.upgrade()

    declared = create_engine("sqlite://")
    SQLModel.metadata.create_all(declared)

    assert _schema(migrated) == _schema(declared)


def test_order_discount_reference_has_no_delete_action():
    discount_fk = next(iter(SQLModel.metadata.tables["order"].c.discount_id.foreign_keys))
    assert discount_fk.ondelete is None

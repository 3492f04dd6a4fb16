"""Database-level guard against double-booking courts and coaches.

PostgreSQL gets a gist exclusion constraint over
(resource_type, resource_id, [start_time, end_time)) for confirmed items.
SQLite gets BEFORE INSERT/UPDATE triggers raising the constraint name;
SQLite serializes writers, so the check runs atomically with the write.
"""

import logging

from django.db import migrations

logger = logging.getLogger(__name__)

CONSTRAINT_NAME = "bookingitem_exclusive_no_overlap"
TABLE = "bookings_bookingitem"
EXCLUSIVE_TYPES = "('court', 'coach')"

POSTGRES_FORWARD = [
    "CREATE EXTENSION IF NOT EXISTS btree_gist",
    f"""
    ALTER TABLE {TABLE} ADD CONSTRAINT {CONSTRAINT_NAME}
    EXCLUDE USING gist (
        resource_type WITH =,
        resource_id WITH =,
        tstzrange(start_time, end_time, '[)') WITH &&
    ) WHERE (status = 'confirmed' AND resource_type IN {EXCLUSIVE_TYPES})
    """,
]

POSTGRES_BACKWARD = [
    f"ALTER TABLE {TABLE} DROP CONSTRAINT IF EXISTS {CONSTRAINT_NAME}",
]

SQLITE_TRIGGER = """
CREATE TRIGGER {name}
BEFORE {event} ON {table}
FOR EACH ROW
WHEN NEW.status = 'confirmed' AND NEW.resource_type IN {types}
BEGIN
    SELECT RAISE(ABORT, '{constraint}')
    WHERE EXISTS (
        SELECT 1 FROM {table} AS other
        WHERE other.resource_type = NEW.resource_type
          AND other.resource_id = NEW.resource_id
          AND other.status = 'confirmed'
          AND other.start_time < NEW.end_time
          AND other.end_time > NEW.start_time
          {exclude_self}
    );
END
"""

SQLITE_FORWARD = [
    SQLITE_TRIGGER.format(
        name=f"{CONSTRAINT_NAME}_insert",
        event="INSERT",
        table=TABLE,
        types=EXCLUSIVE_TYPES,
        constraint=CONSTRAINT_NAME,
        exclude_self="",
    ),
    SQLITE_TRIGGER.format(
        name=f"{CONSTRAINT_NAME}_update",
        event="UPDATE OF status, resource_type, resource_id, start_time, end_time",
        table=TABLE,
        types=EXCLUSIVE_TYPES,
        constraint=CONSTRAINT_NAME,
        exclude_self="AND other.id != NEW.id",
    ),
]

SQLITE_BACKWARD = [
    f"DROP TRIGGER IF EXISTS {CONSTRAINT_NAME}_insert",
    f"DROP TRIGGER IF EXISTS {CONSTRAINT_NAME}_update",
]


def _statements(vendor, forward):
    if vendor == "postgresql":
        return POSTGRES_FORWARD if forward else POSTGRES_BACKWARD
    if vendor == "sqlite":
        return SQLITE_FORWARD if forward else SQLITE_BACKWARD
    return None


def _run(schema_editor, forward):
    vendor = schema_editor.connection.vendor
    statements = _statements(vendor, forward)
    if statements is None:
        logger.warning(
            f"No exclusive overlap constraint available for database vendor '{vendor}'; "
            "court and coach double-booking is not prevented at the storage level"
        )
        return
    for sql in statements:
        schema_editor.execute(sql)


def add_constraint(apps, schema_editor):
    _run(schema_editor, forward=True)


def drop_constraint(apps, schema_editor):
    _run(schema_editor, forward=False)


class Migration(migrations.Migration):

    dependencies = [
        ("bookings", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(add_constraint, drop_constraint),
    ]

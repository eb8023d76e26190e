"""Indexes for the filters used by the listing endpoints.

Revision ID: listing_indexes
Revises:
Create Date: 2026-09-28

"""

from alembic import op
import sqlalchemy as sa


revision = "listing_indexes"
down_revision = None
branch_labels = None
depends_on = None

INDEXES = [
    ("idx_destinations_status", "destinations", ["status"]),
    ("idx_destinations_active", "destinations", ["is_active"]),
    ("idx_events_status", "events", ["status"]),
    ("idx_events_dates", "events", ["start_date", "end_date"]),
    ("idx_events_type", "events", ["event_type"]),
    ("idx_countries_continent", "countries", ["continent"]),
    ("idx_payments_created", "payments", ["created_at"]),
]


def _existing_indexes(table):
    inspector = sa.inspect(op.get_bind())
    if not inspector.has_table(table):
        return None
    return {i["name"] for i in inspector.get_indexes(table)}


def upgrade():
    for name, table, columns in INDEXES:
        existing = _existing_indexes(table)
        # Missing tables are left to db.create_all()
        if existing is None or name in existing:
            continue
        op.create_index(name, table, columns)


def downgrade():
    for name, table, _ in reversed(INDEXES):
        existing = _existing_indexes(table)
        if existing and name in existing:
            op.drop_index(name, table_name=table)

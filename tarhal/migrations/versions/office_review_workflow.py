"""Put travel offices through the content review workflow.

Databases created before offices were moderated lack these columns.
Columns already present are left alone, so the revision also applies
cleanly to a schema built by db.create_all().

Revision ID: office_review_workflow
Revises: listing_indexes
Create Date: 2026-10-02

"""

from alembic import op
import sqlalchemy as sa


revision = "office_review_workflow"
down_revision = "listing_indexes"
branch_labels = None
depends_on = None


def _columns():
    return [
        sa.Column("is_company_office", sa.Boolean(), server_default="0"),
        sa.Column(
            "status", sa.String(length=20), nullable=False,
            server_default="published",
        ),
        sa.Column("submitted_by", sa.String(length=64)),
        sa.Column("submitted_at", sa.DateTime(timezone=True)),
        sa.Column("reviewed_by", sa.String(length=64)),
        sa.Column("reviewed_at", sa.DateTime(timezone=True)),
        sa.Column("published_by", sa.String(length=64)),
        sa.Column("published_at", sa.DateTime(timezone=True)),
        sa.Column("rejection_reason", sa.Text()),
    ]


def _existing_columns():
    inspector = sa.inspect(op.get_bind())
    if not inspector.has_table("travel_offices"):
        return None
    return {c["name"] for c in inspector.get_columns("travel_offices")}


def upgrade():
    existing = _existing_columns()
    if existing is None:
        return
    missing = [c for c in _columns() if c.name not in existing]
    if missing:
        with op.batch_alter_table("travel_offices") as batch_op:
            for column in missing:
                batch_op.add_column(column)

    indexes = {
        i["name"] for i in sa.inspect(op.get_bind()).get_indexes("travel_offices")
    }
    if "idx_travel_offices_status" not in indexes:
        op.create_index("idx_travel_offices_status", "travel_offices", ["status"])


def downgrade():
    existing = _existing_columns()
    if not existing:
        return
    indexes = {
        i["name"] for i in sa.inspect(op.get_bind()).get_indexes("travel_offices")
    }
    if "idx_travel_offices_status" in indexes:
        op.drop_index("idx_travel_offices_status", table_name="travel_offices")
    with op.batch_alter_table("travel_offices") as batch_op:
        for column in reversed(_columns()):
            if column.name in existing:
                batch_op.drop_column(column.name)

"""Add the travel_offers table.

Revision ID: travel_offers
Revises: office_review_workflow
Create Date: 2026-10-19

"""

from alembic import op
import sqlalchemy as sa


revision = "travel_offers"
down_revision = "office_review_workflow"
branch_labels = None
depends_on = None


def upgrade():
    inspector = sa.inspect(op.get_bind())
    if inspector.has_table("travel_offers"):
        return

    op.create_table(
        "travel_offers",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column(
            "country_id", sa.String(length=64),
            sa.ForeignKey("countries.id"), nullable=False,
        ),
        sa.Column("title_ar", sa.String(length=255), nullable=False),
        sa.Column("title_en", sa.String(length=255), nullable=False),
        sa.Column("title_fr", sa.String(length=255), nullable=False),
        sa.Column("description_ar", sa.Text(), nullable=False),
        sa.Column("description_en", sa.Text(), nullable=False),
        sa.Column("description_fr", sa.Text(), nullable=False),
        sa.Column("original_price", sa.Float(), nullable=False),
        sa.Column("discount_price", sa.Float(), nullable=False),
        sa.Column("discount_percentage", sa.Integer(), nullable=False),
        sa.Column("duration_days", sa.Integer()),
        sa.Column("duration_text_ar", sa.String(length=255)),
        sa.Column("duration_text_en", sa.String(length=255)),
        sa.Column("duration_text_fr", sa.String(length=255)),
        sa.Column("start_date", sa.String(length=10)),
        sa.Column("end_date", sa.String(length=10)),
        sa.Column("valid_until", sa.String(length=10)),
        sa.Column("max_participants", sa.Integer(), server_default="20"),
        sa.Column("includes_ar", sa.Text()),
        sa.Column("includes_en", sa.Text()),
        sa.Column("includes_fr", sa.Text()),
        sa.Column("highlights_ar", sa.Text()),
        sa.Column("highlights_en", sa.Text()),
        sa.Column("highlights_fr", sa.Text()),
        sa.Column("images", sa.Text()),
        sa.Column("main_image", sa.Text()),
        sa.Column("currency", sa.String(length=3), server_default="USD"),
        sa.Column("is_featured", sa.Boolean(), server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True)),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_travel_offers_country_id", "travel_offers", ["country_id"])


def downgrade():
    op.drop_index("ix_travel_offers_country_id", table_name="travel_offers")
    op.drop_table("travel_offers")

"""add production floor models

Revision ID: 0001
Revises: None
Create Date: 2026-10-18 00:00:00.000000

"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "unit",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("is_main", sa.Boolean(), nullable=False, server_default=sa.false()),
    )

    op.create_table(
        "style",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("style_number", sa.String(length=100), nullable=False, unique=True),
        sa.Column("style_text", sa.String(length=255), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("size_type", sa.String(length=20), nullable=False, server_default="letter"),
        sa.Column("tech_pack", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "production_order",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("order_no", sa.String(length=50), nullable=False, unique=True),
        sa.Column("unit_id", sa.Integer(), sa.ForeignKey("unit.id"), nullable=False),
        sa.Column("style_number", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("size_breakdown", sa.JSON(), nullable=True),
        sa.Column("size_format", sa.String(length=20), nullable=False, server_default="standard"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("target_delivery_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(length=50), nullable=False, server_default="ASSIGNED"),
        sa.Column("box_count", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_production_order_unit_id", "production_order", ["unit_id"])

    op.create_table(
        "material_request",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("production_order.id"), nullable=False),
        sa.Column("material_content", sa.String(length=500), nullable=False),
        sa.Column("quantity_requested", sa.Float(), nullable=False),
        sa.Column("quantity_approved", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("unit", sa.String(length=20), nullable=False, server_default="Nos"),
        sa.Column("attachments", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(length=50), nullable=False, server_default="PENDING"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_material_request_order_id", "material_request", ["order_id"])

    op.create_table(
        "material_approval",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("request_id", sa.Integer(), sa.ForeignKey("material_request.id"), nullable=False),
        sa.Column("qty_approved", sa.Float(), nullable=False),
        sa.Column("approved_by_name", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("material_approval")
    op.drop_index("ix_material_request_order_id", table_name="material_request")
    op.drop_table("material_request")
    op.drop_index("ix_production_order_unit_id", table_name="production_order")
    op.drop_table("production_order")
    op.drop_table("style")
    op.drop_table("unit")

"""create equipment, equipment history and personnel tables

Revision ID: 4f1c2a9d7e10
Revises:
Create Date: 2026-10-18 09:12:44.301517

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f1c2a9d7e10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

equipment_type = sa.Enum("DUMP_TRUCK", "EXCAVATOR", "BULLDOZER", "CRANE", "DRILL", name="equipmenttype")
equipment_status = sa.Enum("AVAILABLE", "OPERATING", "MAINTENANCE", "INACTIVE", name="equipmentstatus")


def upgrade() -> None:
    op.create_table(
        "equipment",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("code", sa.String(), nullable=False),
        sa.Column("equipment_type", equipment_type, nullable=False),
        sa.Column("status", equipment_status, nullable=False),
        sa.Column("fuel_level", sa.Float(), nullable=False),
        sa.Column("operating_hours", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_equipment_code", "equipment", ["code"], unique=True)
    op.create_index("ix_equipment_equipment_type", "equipment", ["equipment_type"])
    op.create_index("ix_equipment_status", "equipment", ["status"])

    op.create_table(
        "equipment_history",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("equipment_id", sa.String(), nullable=False),
        sa.Column("seq", sa.Integer(), nullable=False),
        sa.Column("action", sa.String(), nullable=False),
        sa.Column("value", sa.JSON(), nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["equipment_id"], ["equipment.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_equipment_history_equipment_id", "equipment_history", ["equipment_id"])

    for table, extra in (
        ("operators", [sa.Column("license", sa.String(), nullable=False)]),
        ("supervisors", []),
    ):
        op.create_table(
            table,
            sa.Column("id", sa.String(), nullable=False),
            sa.Column("first_name", sa.String(), nullable=False),
            sa.Column("last_name", sa.String(), nullable=False),
            *extra,
            sa.Column("equipment_id", sa.String(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(f"ix_{table}_first_name", table, ["first_name"])
        op.create_index(f"ix_{table}_last_name", table, ["last_name"])
        op.create_index(f"ix_{table}_equipment_id", table, ["equipment_id"])


def downgrade() -> None:
    for table in ("supervisors", "operators"):
        op.drop_index(f"ix_{table}_equipment_id", table_name=table)
        op.drop_index(f"ix_{table}_last_name", table_name=table)
        op.drop_index(f"ix_{table}_first_name", table_name=table)
        op.drop_table(table)

    op.drop_index("ix_equipment_history_equipment_id", table_name="equipment_history")
    op.drop_table("equipment_history")

    op.drop_index("ix_equipment_status", table_name="equipment")
    op.drop_index("ix_equipment_equipment_type", table_name="equipment")
    op.drop_index("ix_equipment_code", table_name="equipment")
    op.drop_table("equipment")
    equipment_status.drop(op.get_bind(), checkfirst=True)
    equipment_type.drop(op.get_bind(), checkfirst=True)

"""create schools table

Revision ID: a7c3e91b5d20
Revises:
Create Date: 2026-10-17 10:00:00.000000

This migration:
1. Creates the schools table (name, address, latitude, longitude)
2. Adds a unique index on (lower(name), lower(address)) so the same
   school cannot be registered twice with different letter case
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a7c3e91b5d20"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create schools table and its case-insensitive unique index."""
    op.create_table(
        "schools",
        # Primary key and timestamp (from BaseModel)
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        # School information
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        # Location
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index(
        "uq_schools_lower_name_lower_address",
        "schools",
        [sa.text("lower(name)"), sa.text("lower(address)")],
        unique=True,
    )


def downgrade() -> None:
    """Drop schools table."""
    op.drop_index("uq_schools_lower_name_lower_address", table_name="schools")
    op.drop_table("schools")

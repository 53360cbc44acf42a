"""Add blacklist table for persistent username bans.

Bans survive process restarts when DATABASE_URL is configured.

Revision ID: 0001
Revises:
Create Date: 2026-10-18

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "blacklist",
        sa.Column("username", sa.String(255), primary_key=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
        ),
    )


def downgrade() -> None:
    op.drop_table("blacklist")

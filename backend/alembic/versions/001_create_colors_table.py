"""Create colors table

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the `colors` table holding named hex colors.
Rollback: downgrade() drops the table (all stored colors are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create colors with its unique hex constraint and name index."""
    op.create_table(
        "colors",
        sa.Column(
            "id",
            sa.String(64),
            nullable=False,
            comment="Record identifier",
        ),
        sa.Column(
            "hex",
            sa.String(7),
            nullable=False,
            comment="Color as #RRGGBB",
        ),
        sa.Column(
            "name",
            sa.String(255),
            nullable=False,
            comment="Human-readable color name",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this color was stored (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("hex", name="uq_colors_hex"),
    )

    op.create_index("idx_colors_name", "colors", ["name"])


def downgrade() -> None:
    op.drop_index("idx_colors_name", table_name="colors")
    op.drop_table("colors")

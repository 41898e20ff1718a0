"""
Palette Backend: Color SQLAlchemy Model
========================================

What:  ORM model for the `colors` table.
Who:   ColorService for queries and inserts; Alembic for migrations.

Table Design:
    - id: string primary key (UUID4 hex) so ids round-trip through URLs as-is
    - hex: '#RRGGBB', unique; duplicates are rejected by ColorService first
    - name: free-form display name
    - created_at: UTC insert time; listings are returned in this order
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from palette.database import Base


def new_color_id() -> str:
    return uuid.uuid4().hex


class Color(Base):
    """A named hex color stored by the palette service."""

    __tablename__ = "colors"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=new_color_id,
        comment="Record identifier",
    )

    hex: Mapped[str] = mapped_column(
        String(7),
        nullable=False,
        comment="Color as #RRGGBB",
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Human-readable color name",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this color was stored (UTC)",
    )

    # Exact-match lookups on hex (unique) and name
    __table_args__ = (
        UniqueConstraint("hex", name="uq_colors_hex"),
        Index("idx_colors_name", "name"),
    )

    def __repr__(self) -> str:
        return f"<Color(id={self.id}, hex='{self.hex}', name='{self.name}')>"

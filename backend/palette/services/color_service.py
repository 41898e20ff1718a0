"""
Palette Backend: Color Service
===============================

What:  Business logic for stored colors: exact-match lookups, inserts with
       duplicate detection, and the transformed listing behind GET /colors.
How:   Receives an AsyncSession per call, runs SQLAlchemy queries, converts
       rows to ColorRecord, and hands records to the transform pipeline.
Who:   Called by route handlers in routes/colors.py.

Error Handling Strategy:
    Lookups that match nothing raise NotFoundError (404). Unexpected
    SQLAlchemy failures are wrapped in DatabaseError so query details never
    reach the client. Our own exceptions, including MalformedHexError from the
    transform, propagate unchanged.
"""

import logging
from typing import List, Optional

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from palette.exceptions import (
    ConflictError,
    DatabaseError,
    MalformedHexError,
    NotFoundError,
    ValidationError,
)
from palette.models.color import Color, new_color_id
from palette.schemas.color import (
    ColorCreate,
    ColorObject,
    ColorRecord,
    InsertResponse,
)
from palette.services.transform import parse_hex, transform_colors

logger = logging.getLogger(__name__)


class ColorService:
    """
    Stateless service; all state lives in the session passed to each call.

    Responsibilities:
        - list_colors() / find_by_*(): raw ColorRecord lookups
        - list_color_objects(): all records run through transform_colors()
        - add_color(): validated, de-duplicated insert
    """

    @staticmethod
    def _ordered(query: Select) -> Select:
        # Insertion order; the transform never re-sorts
        return query.order_by(Color.created_at, Color.id)

    async def _fetch(
        self,
        db: AsyncSession,
        query: Select,
        resource_id: Optional[str] = None,
    ) -> List[ColorRecord]:
        try:
            result = await db.execute(self._ordered(query))
            rows = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error querying colors: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve colors. Please try again.",
                context={"error_type": type(e).__name__},
            )

        if not rows:
            raise NotFoundError(resource="color", resource_id=resource_id)

        return [ColorRecord.model_validate(row) for row in rows]

    async def list_colors(self, db: AsyncSession) -> List[ColorRecord]:
        """All stored colors, raw. Raises NotFoundError when the table is empty."""
        return await self._fetch(db, select(Color))

    async def find_by_id(self, db: AsyncSession, color_id: str) -> List[ColorRecord]:
        return await self._fetch(db, select(Color).where(Color.id == color_id), color_id)

    async def find_by_hex(self, db: AsyncSession, hex_value: str) -> List[ColorRecord]:
        """Exact match on the stored string; '#ff0000' does not find '#FF0000'."""
        return await self._fetch(db, select(Color).where(Color.hex == hex_value), hex_value)

    async def find_by_name(self, db: AsyncSession, name: str) -> List[ColorRecord]:
        return await self._fetch(db, select(Color).where(Color.name == name), name)

    async def list_color_objects(self, db: AsyncSession) -> List[ColorObject]:
        """
        All stored colors as derived ColorObjects, in storage order.

        Raises:
            NotFoundError: no colors stored
            MalformedHexError: a stored hex does not parse (whole batch fails)
        """
        records = await self.list_colors(db)
        try:
            objects = transform_colors(records)
        except MalformedHexError as e:
            logger.error("Stored color data is malformed: %s | Context: %s", e.message, e.context)
            raise

        logger.debug("Transformed %d colors", len(objects))
        return objects

    async def hex_exists(self, db: AsyncSession, hex_value: str) -> bool:
        try:
            result = await db.execute(
                select(func.count(Color.id)).where(Color.hex == hex_value)
            )
            return (result.scalar() or 0) > 0
        except SQLAlchemyError as e:
            logger.error("Database error checking hex %s: %s", hex_value, str(e))
            raise DatabaseError(context={"hex": hex_value})

    async def add_color(self, db: AsyncSession, payload: ColorCreate) -> InsertResponse:
        """
        Validate and store a new color.

        Workflow:
            1. Both hex and name must be non-empty
            2. hex must parse as '#RRGGBB' (same parser the transform uses)
            3. hex must not already be stored
            4. Insert with a freshly generated id and flush

        Raises:
            ValidationError: missing field or malformed hex (400)
            ConflictError: hex already stored, including a lost insert race (409)
            DatabaseError: insert failed (500)
        """
        hex_value = payload.hex.strip()
        name = payload.name.strip()

        if not hex_value or not name:
            raise ValidationError(
                message="incorrect post content: both 'hex' and 'name' are required",
                field="hex" if not hex_value else "name",
            )

        try:
            parse_hex(hex_value)
        except MalformedHexError as e:
            raise ValidationError(message=e.message, field="hex", context=dict(e.context))

        if await self.hex_exists(db, hex_value):
            raise ConflictError(context={"hex": hex_value})

        color = Color(id=new_color_id(), hex=hex_value, name=name)
        try:
            db.add(color)
            await db.flush()
        except IntegrityError:
            # A concurrent insert won the race past hex_exists()
            logger.warning("Duplicate color %s rejected by unique constraint", hex_value)
            raise ConflictError(context={"hex": hex_value})
        except SQLAlchemyError as e:
            logger.error("Failed to insert color %s: %s", hex_value, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not store the color. Please try again.",
                context={"hex": hex_value, "error_type": type(e).__name__},
            )

        logger.info("Stored color %s (%s) as %s", hex_value, name, color.id)
        return InsertResponse(inserted_id=color.id)


color_service = ColorService()

"""
Palette Backend: Color Route Handlers
======================================

What:  Raw color lookups, the derived listing, and color insertion.
How:   Thin handlers: pull path/body values, delegate to ColorService, return
       schemas. Errors bubble to the global handlers in main.py.

Route Inventory:
    GET  /                     all raw records
    GET  /colors               all records as derived ColorObjects
    GET  /colorid[/{id}]       raw records by id (all when id omitted)
    GET  /color[/{hex}]        raw records by exact hex (send '#' as %23)
    GET  /colorname/{name}     raw records by exact name
    POST /addcolor             store a new color
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from palette.database import get_db_session
from palette.schemas.color import (
    ColorCreate,
    ColorObject,
    ColorRecord,
    ErrorResponse,
    InsertResponse,
)
from palette.services.color_service import color_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Colors"])

_NOT_FOUND = {404: {"description": "No matching colors", "model": ErrorResponse}}


@router.get(
    "/",
    response_model=List[ColorRecord],
    responses=_NOT_FOUND,
    summary="List stored colors",
)
async def list_colors(db: AsyncSession = Depends(get_db_session)) -> List[ColorRecord]:
    return await color_service.list_colors(db)


@router.get(
    "/colors",
    response_model=List[ColorObject],
    responses={
        **_NOT_FOUND,
        500: {"description": "A stored color is malformed", "model": ErrorResponse},
    },
    summary="List stored colors with derived RGB/HSV/luma values",
    description=(
        "Every stored color expanded into red, green and blue channels plus "
        "chroma, hue, saturation, value and luma. Order matches storage order; "
        "nothing is sorted. One malformed stored color fails the whole request."
    ),
)
async def list_color_objects(db: AsyncSession = Depends(get_db_session)) -> List[ColorObject]:
    return await color_service.list_color_objects(db)


@router.get("/colorid", response_model=List[ColorRecord], responses=_NOT_FOUND, include_in_schema=False)
@router.get(
    "/colorid/{color_id}",
    response_model=List[ColorRecord],
    responses=_NOT_FOUND,
    summary="Find colors by id",
)
async def get_color_by_id(
    color_id: str = "",
    db: AsyncSession = Depends(get_db_session),
) -> List[ColorRecord]:
    if not color_id:
        return await color_service.list_colors(db)
    return await color_service.find_by_id(db, color_id)


@router.get("/color", response_model=List[ColorRecord], responses=_NOT_FOUND, include_in_schema=False)
@router.get(
    "/color/{hex_value}",
    response_model=List[ColorRecord],
    responses=_NOT_FOUND,
    summary="Find colors by exact hex value",
)
async def get_color_by_hex(
    hex_value: str = "",
    db: AsyncSession = Depends(get_db_session),
) -> List[ColorRecord]:
    if not hex_value:
        return await color_service.list_colors(db)
    return await color_service.find_by_hex(db, hex_value)


@router.get(
    "/colorname/{name}",
    response_model=List[ColorRecord],
    responses=_NOT_FOUND,
    summary="Find colors by exact name",
)
async def get_color_by_name(
    name: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[ColorRecord]:
    return await color_service.find_by_name(db, name)


@router.post(
    "/addcolor",
    status_code=201,
    response_model=InsertResponse,
    responses={
        400: {"description": "Missing field or malformed hex", "model": ErrorResponse},
        409: {"description": "Color already stored", "model": ErrorResponse},
    },
    summary="Store a new color",
)
async def add_color(
    payload: ColorCreate,
    db: AsyncSession = Depends(get_db_session),
) -> InsertResponse:
    logger.info("Add color request: hex=%s name=%s", payload.hex, payload.name)
    return await color_service.add_color(db, payload)

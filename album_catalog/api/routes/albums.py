"""Album Routes - HTTP surface of the catalog.

Invariants:
    - Each route extracts parameters/body, calls one album_store operation, maps the outcome
    - Storage failures become 502 with a fixed per-route message; no driver text leaks
    - GET /albums is 200 even when empty; GET /albums/artist/{name} is 404 when empty
    - PATCH and DELETE report success when no row matched the id
    - Body validation failures never reach a route (RequestValidationError -> 400)

Design Decisions:
    - /artist/{name} registered before /{album_id} so the literal segment wins
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from album_catalog.core.errors import (
    ALBUM_NOT_FOUND_MESSAGE, AlbumNotFoundError, StorageFailure,
)
from album_catalog.infrastructure.database import get_db
from album_catalog.schemas.album import AlbumCreate, AlbumResponse, MessageResponse
from album_catalog.services import album_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/albums", tags=["albums"])

RETRIEVE_FAILED = "Error while retrieving data"
GET_FAILED = "err while retrieving data"
CREATE_FAILED = "Error while creating data"
UPDATE_FAILED = "Error while updating data"
DELETE_FAILED = "Error while deleting data"
DELETE_OK = "Delete data success!"


def get_list_limit(request: Request) -> int:
    """Page size for the list routes, from the app settings."""
    return request.app.state.settings.list_limit


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=MessageResponse(message=message).model_dump(),
    )


@router.get("", response_model=list[AlbumResponse])
async def get_albums(
    db: AsyncSession = Depends(get_db),
    limit: int = Depends(get_list_limit),
):
    """First page of albums (offset 0)."""
    try:
        albums = await album_store.list_albums(db, 0, limit)
    except StorageFailure:
        return _message(status.HTTP_502_BAD_GATEWAY, RETRIEVE_FAILED)
    return [AlbumResponse.from_record(a) for a in albums]


@router.get("/artist/{name}", response_model=list[AlbumResponse])
async def get_albums_by_artist(
    name: str,
    db: AsyncSession = Depends(get_db),
    limit: int = Depends(get_list_limit),
):
    """Albums by one artist; 404 when there are none."""
    try:
        albums = await album_store.list_albums_by_artist(
            db, name, limit,
        )
    except StorageFailure:
        return _message(status.HTTP_502_BAD_GATEWAY, RETRIEVE_FAILED)
    if not albums:
        return _message(status.HTTP_404_NOT_FOUND, ALBUM_NOT_FOUND_MESSAGE)
    return [AlbumResponse.from_record(a) for a in albums]


@router.get("/{album_id}", response_model=AlbumResponse)
async def get_album_by_id(album_id: str, db: AsyncSession = Depends(get_db)):
    try:
        album = await album_store.get_album(db, album_id)
    except AlbumNotFoundError:
        return _message(status.HTTP_404_NOT_FOUND, ALBUM_NOT_FOUND_MESSAGE)
    except StorageFailure:
        return _message(status.HTTP_502_BAD_GATEWAY, GET_FAILED)
    return AlbumResponse.from_record(album)


@router.post(
    "", response_model=AlbumResponse, status_code=status.HTTP_201_CREATED,
)
async def add_album(body: AlbumCreate, db: AsyncSession = Depends(get_db)):
    """Create an album; the response carries the assigned id."""
    album = body.to_record()
    try:
        await album_store.create_album(db, album)
    except StorageFailure:
        return _message(status.HTTP_502_BAD_GATEWAY, CREATE_FAILED)
    return AlbumResponse.from_record(album)


@router.patch("/{album_id}", response_model=AlbumResponse)
async def update_album(
    album_id: str, body: AlbumCreate, db: AsyncSession = Depends(get_db),
):
    """Overwrite an album; echoes the submitted record with the path id."""
    album = body.to_record(album_id)
    try:
        await album_store.update_album(db, album)
    except StorageFailure:
        return _message(status.HTTP_502_BAD_GATEWAY, UPDATE_FAILED)
    return AlbumResponse.from_record(album)


@router.delete("/{album_id}", response_model=MessageResponse)
async def delete_album(album_id: str, db: AsyncSession = Depends(get_db)):
    try:
        await album_store.delete_album(db, album_id)
    except StorageFailure:
        return _message(status.HTTP_502_BAD_GATEWAY, DELETE_FAILED)
    return MessageResponse(message=DELETE_OK)

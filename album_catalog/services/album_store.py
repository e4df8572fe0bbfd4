"""Album Store - persistence operations over the album table.

Invariants:
    - Every operation is a single round trip (create adds the key read-back) and
      never holds the session across requests
    - Statements are SQLAlchemy Core constructs; values are always bound parameters
    - Only AlbumNotFoundError and StorageFailure escape; SQLAlchemy errors are
      translated and the session rolled back
    - Empty result sets are returned as [], never raised; the route decides
      whether absence is an error
    - update_album / delete_album succeed when zero rows matched

Design Decisions:
    - Rows scanned positionally in ALBUM_COLUMNS order into AlbumRecord
    - ORDER BY id makes the implicit insertion order explicit
    - Ids that are not base-10 integers in key range cannot match a row: get raises
      AlbumNotFoundError and update/delete affect zero rows, all without a round trip
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Sequence

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Row
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncSession

from album_catalog.core.domain_types import (
    ALBUM_COLUMNS, AlbumId, AlbumRecord, StorageOperation,
)
from album_catalog.core.errors import (
    AlbumNotFoundError, ErrorContext, StorageFailure,
)
from album_catalog.models.album import Album

logger = logging.getLogger(__name__)

album_table = Album.__table__
_SCAN_COLUMNS = [album_table.c[name] for name in ALBUM_COLUMNS]
_MAX_KEY = 2**31 - 1  # INTEGER primary key


def parse_album_key(album_id: str) -> int | None:
    """Primary key for a path id, or None when no row could carry it."""
    if not album_id.isascii() or not album_id.isdigit():
        return None
    key = int(album_id)
    if key > _MAX_KEY:
        return None
    return key


def scan_album(row: Row | Sequence) -> AlbumRecord:
    """Build an AlbumRecord from a row selected in ALBUM_COLUMNS order."""
    album_id, title, artist, price = row
    return AlbumRecord(
        id=AlbumId(str(album_id)),
        title=title,
        artist=artist,
        price=float(price),
    )


@asynccontextmanager
async def _storage_errors(
    db: AsyncSession, operation: StorageOperation, album_id: str | None = None,
) -> AsyncGenerator[None, None]:
    """Translate SQLAlchemy errors into StorageFailure."""
    try:
        yield
    except IntegrityError as e:
        raise await _fail(db, operation, album_id, "Integrity constraint violated", e) from e
    except OperationalError as e:
        raise await _fail(db, operation, album_id, "Connection or operational error", e) from e
    except DBAPIError as e:
        raise await _fail(db, operation, album_id, "Database driver error", e) from e
    except SQLAlchemyError as e:
        raise await _fail(db, operation, album_id, "Database operation failed", e) from e


async def _fail(
    db: AsyncSession,
    operation: StorageOperation,
    album_id: str | None,
    summary: str,
    cause: Exception,
) -> StorageFailure:
    try:
        await db.rollback()
    except SQLAlchemyError as rollback_error:
        logger.error(f"Rollback after {operation.value} failed: {rollback_error}")
    failure = StorageFailure(
        operation, summary,
        ErrorContext(album_id=album_id, debug_info={"cause": str(cause)}),
    )
    logger.error(f"{failure}: {cause}", extra=failure.log_extra())
    return failure


def _check_window(**bounds: int) -> None:
    for name, value in bounds.items():
        if value < 0:
            raise ValueError(f"{name} must be >= 0, got {value}")


async def list_albums(
    db: AsyncSession, offset: int, limit: int,
) -> list[AlbumRecord]:
    """Up to `limit` albums in insertion order, skipping the first `offset`."""
    _check_window(offset=offset, limit=limit)
    query = (
        select(*_SCAN_COLUMNS)
        .order_by(album_table.c.id)
        .limit(limit)
        .offset(offset)
    )
    async with _storage_errors(db, StorageOperation.LIST):
        result = await db.execute(query)
        return [scan_album(row) for row in result.all()]


async def list_albums_by_artist(
    db: AsyncSession, artist: str, limit: int,
) -> list[AlbumRecord]:
    """Up to `limit` albums whose artist equals `artist` exactly."""
    _check_window(limit=limit)
    query = (
        select(*_SCAN_COLUMNS)
        .where(album_table.c.artist == artist)
        .order_by(album_table.c.id)
        .limit(limit)
    )
    async with _storage_errors(db, StorageOperation.LIST_BY_ARTIST):
        result = await db.execute(query)
        return [scan_album(row) for row in result.all()]


async def get_album(db: AsyncSession, album_id: str) -> AlbumRecord:
    """Album by primary key. Raises AlbumNotFoundError on zero rows."""
    key = parse_album_key(album_id)
    if key is None:
        raise AlbumNotFoundError(album_id)
    query = (
        select(album_table.c.title, album_table.c.artist, album_table.c.price)
        .where(album_table.c.id == key)
    )
    async with _storage_errors(db, StorageOperation.GET, album_id):
        result = await db.execute(query)
        row = result.first()
    if row is None:
        raise AlbumNotFoundError(album_id)
    title, artist, price = row
    return AlbumRecord(
        id=AlbumId(album_id), title=title, artist=artist, price=float(price),
    )


async def create_album(db: AsyncSession, album: AlbumRecord) -> AlbumRecord:
    """Insert `album` and write the storage-assigned id back onto it."""
    stmt = insert(album_table).values(
        title=album.title, artist=album.artist, price=album.price,
    )
    async with _storage_errors(db, StorageOperation.CREATE):
        result = await db.execute(stmt)
        new_key = result.inserted_primary_key[0]
        await db.commit()
    album.id = AlbumId(str(new_key))
    logger.info(
        f"Album {album.id} created",
        extra={"album_id": album.id, "operation": StorageOperation.CREATE.value},
    )
    return album


async def update_album(db: AsyncSession, album: AlbumRecord) -> AlbumRecord:
    """Overwrite title, artist, price of the row with album.id.

    Returns `album` unchanged. Matching zero rows is not an error.
    """
    key = parse_album_key(album.id or "")
    if key is None:
        _log_rows(StorageOperation.UPDATE, album.id, 0)
        return album
    stmt = (
        update(album_table)
        .where(album_table.c.id == key)
        .values(title=album.title, artist=album.artist, price=album.price)
    )
    async with _storage_errors(db, StorageOperation.UPDATE, album.id):
        result = await db.execute(stmt)
        rows = result.rowcount
        await db.commit()
    _log_rows(StorageOperation.UPDATE, album.id, rows)
    return album


async def delete_album(db: AsyncSession, album_id: str) -> int:
    """Remove the row with `album_id`. Returns rows removed; zero is not an error."""
    key = parse_album_key(album_id)
    if key is None:
        return _log_rows(StorageOperation.DELETE, album_id, 0)
    stmt = delete(album_table).where(album_table.c.id == key)
    async with _storage_errors(db, StorageOperation.DELETE, album_id):
        result = await db.execute(stmt)
        rows = result.rowcount
        await db.commit()
    return _log_rows(StorageOperation.DELETE, album_id, rows)


def _log_rows(operation: StorageOperation, album_id: str | None, rows: int) -> int:
    extra = {"album_id": album_id, "operation": operation.value, "rows": rows}
    if rows == 0:
        logger.warning(f"Album {album_id} {operation.value}: no row matched", extra=extra)
    else:
        logger.info(f"Album {album_id} {operation.value}: {rows} row(s)", extra=extra)
    return rows

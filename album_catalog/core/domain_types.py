"""Domain Types - the album record and the identifiers that travel with it.

Invariants:
    - AlbumId is the string form of the storage-assigned integer key
    - AlbumRecord.id is None until storage assigns one on insert
    - ALBUM_COLUMNS is the scan order for every row read from the album table

Design Decisions:
    - NewType for AlbumId: zero runtime cost, type checker keeps ids apart from titles
    - Mutable dataclass for AlbumRecord: create_album writes the assigned id back in place
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

AlbumId = NewType("AlbumId", str)


# ─── Records ─────────────────────────────────────────────────────

ALBUM_COLUMNS = ("id", "title", "artist", "price")


@dataclass
class AlbumRecord:
    """One row of the album table, as the rest of the service sees it."""
    title: str
    artist: str
    price: float
    id: AlbumId | None = None

    def to_dict(self) -> dict:
        return asdict(self)


# ─── Enums ───────────────────────────────────────────────────────

class StorageOperation(str, Enum):
    """Persistence operations, used to tag failures and log records."""
    LIST = "list"
    LIST_BY_ARTIST = "list_by_artist"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class AppMode(str, Enum):
    """Deployment mode; selects which database the service talks to."""
    PRODUCTION = "production"
    DEVELOPMENT = "development"
    TESTING = "testing"

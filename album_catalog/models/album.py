"""Album ORM - storage shape of the single catalog entity.

Invariants:
    - id is an auto-increment integer primary key, never reused (sqlite_autoincrement on SQLite)
    - title, artist, price are NOT NULL
    - price is fixed-point with 2 decimal places, read back as float
    - Column order is id, title, artist, price (ALBUM_COLUMNS in core/domain_types.py)
"""

from sqlalchemy import Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from album_catalog.db.base import Base


class Album(Base):
    """Album row."""
    __tablename__ = "album"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    title: Mapped[str] = mapped_column(String(128), nullable=False)
    artist: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[float] = mapped_column(
        Numeric(5, 2, asdecimal=False), nullable=False,
    )

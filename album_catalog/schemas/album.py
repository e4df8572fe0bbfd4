"""Album Schemas - Pydantic models for the JSON side of the album record.

Invariants:
    - AlbumCreate.title / artist: non-empty, stored exactly as given, bounded by the column widths
    - AlbumCreate.price: a JSON number, required, non-zero, finite; rounded to 2 places
    - Unknown fields (including "id") are ignored; ids come from storage or the path
    - AlbumResponse always carries all four fields, id as a string
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from album_catalog.core.domain_types import AlbumId, AlbumRecord


class AlbumCreate(BaseModel):
    """Body of POST /albums and PATCH /albums/{id}."""
    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1, max_length=128)
    artist: str = Field(min_length=1, max_length=255)
    price: float = Field(strict=True, allow_inf_nan=False)

    @field_validator("price")
    @classmethod
    def check_price(cls, v: float) -> float:
        if v == 0:
            raise ValueError("price is required")
        return round(v, 2)

    def to_record(self, album_id: str | None = None) -> AlbumRecord:
        return AlbumRecord(
            id=AlbumId(album_id) if album_id is not None else None,
            title=self.title,
            artist=self.artist,
            price=self.price,
        )


class AlbumResponse(BaseModel):
    """Album as returned to clients."""
    id: str
    title: str
    artist: str
    price: float

    @classmethod
    def from_record(cls, album: AlbumRecord) -> "AlbumResponse":
        return cls(**{**album.to_dict(), "id": album.id or ""})


class MessageResponse(BaseModel):
    """Status body: {"message": "..."}."""
    message: str

"""ORM Models - SQLAlchemy declarative models for the catalog.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every model is imported here so Base.metadata is complete before create_all
"""

from album_catalog.models.album import Album  # noqa: F401

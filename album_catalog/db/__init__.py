"""Database Declarations - SQLAlchemy Base shared by the ORM models.

Invariants:
    - Engine and sessions live in infrastructure/database.py, not here
"""

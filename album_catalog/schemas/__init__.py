"""Pydantic Schemas - request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (request bodies, responses)
    - Persistence code never sees a schema; routes convert to AlbumRecord first
"""

"""
Shared Test Fixtures

Centralized factories used across all test layers.

Structure:
    - album_fixtures.py: Album service factories
"""

# Album service fixtures
from .album_fixtures import (
    make_album_id,
    make_album_name,
    make_album,
    make_album_row,
    make_album_params,
    make_album_body,
)

__all__ = [
    "make_album_id",
    "make_album_name",
    "make_album",
    "make_album_row",
    "make_album_params",
    "make_album_body",
]

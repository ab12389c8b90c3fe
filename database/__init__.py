"""
Database package for the reservation service.

This package provides modular database operations:
- connection: Database connection management (get_db, close_db, init_db)
- schema: Table, index, and overlap guard creation
"""

from database.connection import connect, get_db, close_db, init_db
from database.schema import (
    ROOM_NOT_FREE_ABORT,
    drop_tables,
    create_tables,
    create_indexes,
    create_triggers,
)

__all__ = [
    # Connection
    'connect',
    'get_db',
    'close_db',
    'init_db',
    # Schema
    'ROOM_NOT_FREE_ABORT',
    'drop_tables',
    'create_tables',
    'create_indexes',
    'create_triggers',
]

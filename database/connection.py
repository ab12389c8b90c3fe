"""
Database connection management.
Handles per-context connections, initialization, and teardown.
"""

import os
import sqlite3
from flask import g, current_app


def connect(db_path: str) -> sqlite3.Connection:
    """
    Open a SQLite connection configured for the reservation store.

    Transactions are managed explicitly by the store (BEGIN IMMEDIATE),
    so the connection runs in autocommit mode.

    Args:
        db_path: Path to the database file or ':memory:'

    Returns:
        sqlite3.Connection: Database connection object
    """
    if db_path != ':memory:':
        directory = os.path.dirname(db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

    conn = sqlite3.connect(db_path, isolation_level=None)
    conn.row_factory = sqlite3.Row
    # Enable WAL mode for better concurrency
    conn.execute('PRAGMA journal_mode = WAL')
    return conn


def get_db():
    """
    Get the database connection bound to the current application context.

    Returns:
        sqlite3.Connection: Database connection object
    """
    if 'db' not in g:
        db_path = current_app.config.get('DATABASE_PATH', 'instance/reservations.db')
        g.db = connect(db_path)
    return g.db


def close_db(e=None):
    """
    Close database connection.

    Args:
        e: Exception if any (from Flask teardown context)
    """
    g.pop('reservation_service', None)
    g.pop('health_checker', None)
    db = g.pop('db', None)
    if db is not None:
        db.close()


def init_db(reset: bool = False):
    """
    Initialize database schema: tables, indexes, and overlap triggers.

    Args:
        reset: Drop existing tables first. WARNING: deletes all reservations!
    """
    from database.schema import drop_tables, create_tables, create_indexes, create_triggers

    db = get_db()

    if reset:
        drop_tables(db)

    create_tables(db)
    create_indexes(db)
    create_triggers(db)

"""
Database schema definitions.
Table creation, indexes, and the overlap guard triggers.
"""


ROOM_NOT_FREE_ABORT = 'room_not_free'


def drop_tables(db):
    """Drop all existing tables."""
    db.execute('DROP TRIGGER IF EXISTS trg_reservations_no_overlap_insert')
    db.execute('DROP TRIGGER IF EXISTS trg_reservations_no_overlap_update')
    db.execute('DROP TABLE IF EXISTS reservations')


def create_tables(db):
    """Create all database tables."""

    # Dates are ISO-8601 strings so lexical order matches calendar order
    db.execute('''
        CREATE TABLE IF NOT EXISTS reservations (
            id TEXT PRIMARY KEY,
            room_id TEXT NOT NULL,
            "from" TEXT NOT NULL,
            "to" TEXT NOT NULL,
            deleted_at TEXT
        )
    ''')


def create_indexes(db):
    """Create performance indexes."""

    # Conflict checks scan by room and range
    db.execute('''
        CREATE INDEX IF NOT EXISTS ix_reservations_room_id_from_to
        ON reservations(room_id, "from", "to")
    ''')


def create_triggers(db):
    """
    Create the storage-level exclusion guard.

    Two active reservations of the same room may not overlap on [from, to).
    The application checks this first; these triggers are the final gate
    when concurrent writers both pass the application check.
    """
    db.execute(f'''
        CREATE TRIGGER IF NOT EXISTS trg_reservations_no_overlap_insert
        BEFORE INSERT ON reservations
        WHEN NEW.deleted_at IS NULL AND EXISTS (
            SELECT 1 FROM reservations r
            WHERE r.room_id = NEW.room_id
              AND r.deleted_at IS NULL
              AND r.id != NEW.id
              AND r."from" < NEW."to"
              AND NEW."from" < r."to"
        )
        BEGIN
            SELECT RAISE(ABORT, '{ROOM_NOT_FREE_ABORT}');
        END
    ''')

    db.execute(f'''
        CREATE TRIGGER IF NOT EXISTS trg_reservations_no_overlap_update
        BEFORE UPDATE OF room_id, "from", "to", deleted_at ON reservations
        WHEN NEW.deleted_at IS NULL AND EXISTS (
            SELECT 1 FROM reservations r
            WHERE r.room_id = NEW.room_id
              AND r.deleted_at IS NULL
              AND r.id != NEW.id
              AND r."from" < NEW."to"
              AND NEW."from" < r."to"
        )
        BEGIN
            SELECT RAISE(ABORT, '{ROOM_NOT_FREE_ABORT}');
        END
    ''')

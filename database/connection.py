# =============================================================================
# database/connection.py
# =============================================================================
# PURPOSE:
#   The only place that knows how to open the database. Everything else in
#   database/ calls get_db_connection().
#
# WHICH FILE?
#   config.DB_PATH, read on every call. Tests and scripts can point the app
#   at a scratch file by assigning config.DB_PATH before loading anything.
# =============================================================================

import sqlite3

import config


def get_db_connection():
    """
    Open a connection to the SQLite record store.

    WHAT THIS DOES:
        1. Opens (or creates) the file at config.DB_PATH
        2. Turns on foreign key enforcement (SQLite leaves it off by default)
        3. Returns the connection; the caller closes it

    USAGE:
        conn = get_db_connection()
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM bookings")
        rows = cursor.fetchall()
        conn.close()

    RETURNS:
        sqlite3.Connection
    """
    conn = sqlite3.connect(config.DB_PATH)
    conn.execute("PRAGMA foreign_keys = ON")
    return conn

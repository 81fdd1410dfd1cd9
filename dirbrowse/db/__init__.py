"""Sort-preference storage."""
from __future__ import print_function, unicode_literals

DB_VER = 1

try:
    import sqlite3

    HAVE_SQLITE3 = True
except ImportError:
    HAVE_SQLITE3 = False

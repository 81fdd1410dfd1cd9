"""Sort-preference stores, keyed by scope.

Both stores are safe to share between request threads;
concurrent writers to the same scope are last-writer-wins.

SQLite schema:
  table sp (sc text, k text, v text, primary key (sc, k))
  kv table with sver=1
"""
from __future__ import print_function, unicode_literals

import sqlite3
import threading

from . import DB_VER


class MemPrefs(object):
    """In-memory preferences; forgotten on restart."""

    def __init__(self):
        # type: () -> None
        self.mutex = threading.Lock()
        self.prefs = {}  # type: dict[str, dict[str, str]]

    def get(self, scope):
        # type: (str) -> dict[str, str]
        with self.mutex:
            return dict(self.prefs.get(scope) or {})

    def put(self, scope, vals):
        # type: (str, dict[str, str]) -> None
        if not vals:
            return
        with self.mutex:
            self.prefs.setdefault(scope, {}).update(vals)

    def close(self):
        # type: () -> None
        pass


class PrefsRepository(object):
    """Preferences persisted in SQLite."""

    SCHEMA = [
        r"create table if not exists kv (k text, v int)",
        r"create table if not exists sp (sc text, k text, v text, primary key (sc, k))",
    ]

    def __init__(self, db_path):
        # type: (str) -> None
        self.db_path = db_path
        self.mutex = threading.Lock()
        self._conn = None  # type: sqlite3.Connection | None

    def _connect(self):
        # type: () -> sqlite3.Connection
        if self._conn is None:
            # shared by all request threads; every use is under self.mutex
            conn = sqlite3.connect(self.db_path, timeout=10, check_same_thread=False)
            cur = conn.cursor()
            self.create_schema(cur)
            conn.commit()
            cur.close()
            self._conn = conn
        return self._conn

    def create_schema(self, cur):
        # type: (sqlite3.Cursor) -> None
        """Create tables and record the schema version."""
        for cmd in self.SCHEMA:
            cur.execute(cmd)

        if not cur.execute("select v from kv where k = 'sver'").fetchone():
            cur.execute("insert into kv values ('sver', ?)", (DB_VER,))

    def get(self, scope):
        # type: (str) -> dict[str, str]
        with self.mutex:
            conn = self._connect()
            cur = conn.cursor()
            q = "select k, v from sp where sc = ?"
            rows = cur.execute(q, (scope,)).fetchall()
            cur.close()
        return {k: v for k, v in rows}

    def put(self, scope, vals):
        # type: (str, dict[str, str]) -> None
        if not vals:
            return
        with self.mutex:
            conn = self._connect()
            cur = conn.cursor()
            q = "insert or replace into sp values (?,?,?)"
            for k, v in vals.items():
                cur.execute(q, (scope, k, v))
            conn.commit()
            cur.close()

    def close(self):
        # type: () -> None
        with self.mutex:
            if self._conn:
                self._conn.close()
                self._conn = None

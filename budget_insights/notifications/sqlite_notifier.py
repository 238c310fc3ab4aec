# budget_insights/notifications/sqlite_notifier.py
from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List

from budget_insights.notifications.base import BaseNotifier


def _init_db(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS notifications (
            id INTEGER PRIMARY KEY,
            owner_id TEXT,
            title TEXT NOT NULL,
            message TEXT NOT NULL,
            type TEXT NOT NULL,
            read INTEGER NOT NULL DEFAULT 0,
            created_at TEXT NOT NULL,
            dedupe_key TEXT UNIQUE
        )
        """
    )
    conn.commit()


def _connect(db_path: str) -> sqlite3.Connection:
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    _init_db(conn)
    return conn


class SQLiteNotifier(BaseNotifier):
    """
    Stores notifications in a SQLite table, one row per alert.

    With ``suppress_repeat_alerts`` enabled, the dedupe key is stored in a
    UNIQUE column so the same owner/category/month is only stored once.
    Otherwise every alert becomes a new row.
    """

    def __init__(self, config=None):
        super().__init__(config)
        self.db_path = self.config.get('notifications_db', 'notifications.db')
        self.suppress_repeats = bool(self.config.get('suppress_repeat_alerts', False))

    def deliver(self, owner_id, title, message, severity_tag, dedupe_key):
        key = dedupe_key if self.suppress_repeats else None
        conn = _connect(self.db_path)
        try:
            conn.execute(
                """
                INSERT OR IGNORE INTO notifications
                (owner_id, title, message, type, read, created_at, dedupe_key)
                VALUES (?, ?, ?, ?, 0, ?, ?)
                """,
                (
                    owner_id,
                    title,
                    message,
                    severity_tag,
                    datetime.now(timezone.utc).isoformat(),
                    key,
                ),
            )
            conn.commit()
        finally:
            conn.close()


def fetch_notifications(
    db_path: str,
    owner_id: str | None = None,
    unread_only: bool = False,
    limit: int = 10,
) -> List[Dict[str, object]]:
    """Return the newest notifications first, ten by default."""

    if not Path(db_path).exists():
        return []
    conn = sqlite3.connect(db_path)
    try:
        _init_db(conn)
        conditions: list[str] = []
        params: list[object] = []
        if owner_id is not None:
            conditions.append("owner_id = ?")
            params.append(owner_id)
        if unread_only:
            conditions.append("read = 0")
        where = " WHERE " + " AND ".join(conditions) if conditions else ""
        rows = conn.execute(
            f"""
            SELECT id, owner_id, title, message, type, read, created_at
            FROM notifications
            {where}
            ORDER BY created_at DESC, id DESC
            LIMIT ?
            """,
            params + [limit],
        ).fetchall()
        return [
            {
                "id": row[0],
                "owner_id": row[1],
                "title": row[2],
                "message": row[3],
                "type": row[4],
                "read": bool(row[5]),
                "created_at": row[6],
            }
            for row in rows
        ]
    finally:
        conn.close()


def mark_as_read(db_path: str, notification_id: int) -> bool:
    conn = sqlite3.connect(db_path)
    try:
        _init_db(conn)
        cur = conn.execute(
            "UPDATE notifications SET read = 1 WHERE id = ?", (notification_id,)
        )
        conn.commit()
        return cur.rowcount > 0
    finally:
        conn.close()


def delete_notification(db_path: str, notification_id: int) -> bool:
    conn = sqlite3.connect(db_path)
    try:
        _init_db(conn)
        cur = conn.execute("DELETE FROM notifications WHERE id = ?", (notification_id,))
        conn.commit()
        return cur.rowcount > 0
    finally:
        conn.close()

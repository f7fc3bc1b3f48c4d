"""Wardrobe storage abstractions and SQLite implementation.

The engine itself never persists anything; this store plays the item
provider, wear-log provider and log-writer collaborators for the app layer.
"""
from __future__ import annotations

import json
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from models.clothing_item import ClothingItem
from models.coercion import parse_date, parse_datetime
from models.outfit import Outfit, OutfitLog


class WardrobeStore:
    """Persistence interface for clothing items, outfits and wear logs."""

    def save_item(self, user_id: str, item: ClothingItem) -> ClothingItem:
        raise NotImplementedError

    def list_items(self, user_id: str) -> List[ClothingItem]:
        raise NotImplementedError

    def delete_item(self, user_id: str, item_id: str) -> bool:
        raise NotImplementedError

    def save_outfit(self, user_id: str, outfit: Outfit) -> Outfit:
        raise NotImplementedError

    def get_outfit(self, user_id: str, outfit_id: str) -> Optional[Outfit]:
        raise NotImplementedError

    def list_outfits(self, user_id: str) -> List[Outfit]:
        raise NotImplementedError

    def save_log(self, user_id: str, log: OutfitLog) -> OutfitLog:
        raise NotImplementedError

    def save_logs(self, user_id: str, logs: Sequence[OutfitLog]) -> List[OutfitLog]:
        raise NotImplementedError

    def list_logs(self, user_id: str) -> List[OutfitLog]:
        raise NotImplementedError

    def delete_log(self, user_id: str, log_id: str) -> bool:
        raise NotImplementedError


class SQLiteWardrobeStore(WardrobeStore):
    """Local SQLite-backed store for a user's wardrobe and wear history."""

    def __init__(self, database_path: str | Path = "data/wardrobe.db") -> None:
        self.database_path = Path(database_path)
        if self.database_path.parent and not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS clothing_items (
                    user_id TEXT NOT NULL,
                    item_id TEXT NOT NULL,
                    name TEXT,
                    type TEXT NOT NULL,
                    color TEXT,
                    material TEXT,
                    seasons TEXT,
                    occasions TEXT,
                    favorite INTEGER DEFAULT 0,
                    times_worn INTEGER DEFAULT 0,
                    date_added TEXT,
                    PRIMARY KEY (user_id, item_id)
                );
                CREATE TABLE IF NOT EXISTS outfits (
                    user_id TEXT NOT NULL,
                    outfit_id TEXT NOT NULL,
                    name TEXT,
                    items TEXT,
                    seasons TEXT,
                    occasions TEXT,
                    favorite INTEGER DEFAULT 0,
                    times_worn INTEGER DEFAULT 0,
                    last_worn TEXT,
                    date_added TEXT,
                    PRIMARY KEY (user_id, outfit_id)
                );
                CREATE TABLE IF NOT EXISTS outfit_logs (
                    user_id TEXT NOT NULL,
                    log_id TEXT NOT NULL,
                    outfit_id TEXT NOT NULL,
                    date TEXT NOT NULL,
                    time_of_day TEXT,
                    weather_condition TEXT,
                    temperature REAL,
                    activity TEXT,
                    notes TEXT,
                    ai_suggested INTEGER DEFAULT 0,
                    PRIMARY KEY (user_id, log_id)
                );
                """
            )

    @staticmethod
    def _serialise_list(values: Optional[List[object]]) -> str:
        return json.dumps(values or [])

    @staticmethod
    def _deserialise_list(raw: str) -> List[object]:
        return json.loads(raw) if raw else []

    @staticmethod
    def _serialise_datetime(value: Optional[datetime]) -> Optional[str]:
        return value.isoformat() if value else None

    def save_item(self, user_id: str, item: ClothingItem) -> ClothingItem:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO clothing_items (
                    user_id, item_id, name, type, color, material, seasons, occasions,
                    favorite, times_worn, date_added
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user_id,
                    item.item_id,
                    item.name,
                    item.type,
                    item.color,
                    item.material,
                    self._serialise_list(item.seasons),
                    self._serialise_list(item.occasions),
                    int(item.favorite),
                    item.times_worn,
                    self._serialise_datetime(item.date_added),
                ),
            )
        return item

    def _row_to_item(self, row: sqlite3.Row) -> ClothingItem:
        return ClothingItem(
            item_id=row["item_id"],
            name=row["name"] or "",
            type=row["type"],
            color=row["color"],
            material=row["material"],
            seasons=self._deserialise_list(row["seasons"]),
            occasions=self._deserialise_list(row["occasions"]),
            favorite=bool(row["favorite"]),
            times_worn=row["times_worn"] or 0,
            date_added=parse_datetime(row["date_added"]),
        )

    def list_items(self, user_id: str) -> List[ClothingItem]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM clothing_items WHERE user_id = ? ORDER BY item_id",
                (user_id,),
            )
            return [self._row_to_item(row) for row in cursor.fetchall()]

    def delete_item(self, user_id: str, item_id: str) -> bool:
        # Outfits keep referencing the id; readers tolerate dangling references.
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM clothing_items WHERE user_id = ? AND item_id = ?",
                (user_id, item_id),
            )
            return cursor.rowcount > 0

    def save_outfit(self, user_id: str, outfit: Outfit) -> Outfit:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO outfits (
                    user_id, outfit_id, name, items, seasons, occasions, favorite,
                    times_worn, last_worn, date_added
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user_id,
                    outfit.outfit_id,
                    outfit.name,
                    self._serialise_list(outfit.items),
                    self._serialise_list(outfit.seasons),
                    self._serialise_list(outfit.occasions),
                    int(outfit.favorite),
                    outfit.times_worn,
                    self._serialise_datetime(outfit.last_worn),
                    self._serialise_datetime(outfit.date_added),
                ),
            )
        return outfit

    def _row_to_outfit(self, row: sqlite3.Row) -> Outfit:
        return Outfit(
            outfit_id=row["outfit_id"],
            name=row["name"] or "",
            items=self._deserialise_list(row["items"]),
            seasons=self._deserialise_list(row["seasons"]),
            occasions=self._deserialise_list(row["occasions"]),
            favorite=bool(row["favorite"]),
            times_worn=row["times_worn"] or 0,
            last_worn=parse_datetime(row["last_worn"]),
            date_added=parse_datetime(row["date_added"]),
        )

    def get_outfit(self, user_id: str, outfit_id: str) -> Optional[Outfit]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM outfits WHERE user_id = ? AND outfit_id = ?",
                (user_id, outfit_id),
            )
            row = cursor.fetchone()
            return self._row_to_outfit(row) if row else None

    def list_outfits(self, user_id: str) -> List[Outfit]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM outfits WHERE user_id = ? ORDER BY outfit_id",
                (user_id,),
            )
            return [self._row_to_outfit(row) for row in cursor.fetchall()]

    @staticmethod
    def _record_log(conn: sqlite3.Connection, user_id: str, log: OutfitLog) -> bool:
        """Insert one wear log and bump its outfit; ``False`` if the log id is already stored."""

        cursor = conn.execute(
            """
            INSERT INTO outfit_logs (
                user_id, log_id, outfit_id, date, time_of_day, weather_condition,
                temperature, activity, notes, ai_suggested
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT (user_id, log_id) DO NOTHING
            """,
            (
                user_id,
                log.log_id,
                log.outfit_id,
                log.date.isoformat(),
                log.time_of_day,
                log.weather_condition,
                log.temperature,
                log.activity,
                log.notes,
                int(log.ai_suggested),
            ),
        )
        if cursor.rowcount == 0:
            return False
        worn_at = datetime(log.date.year, log.date.month, log.date.day).isoformat()
        conn.execute(
            """
            UPDATE outfits
            SET times_worn = times_worn + 1,
                last_worn = CASE
                    WHEN last_worn IS NULL OR last_worn < ? THEN ?
                    ELSE last_worn
                END
            WHERE user_id = ? AND outfit_id = ?
            """,
            (worn_at, worn_at, user_id, log.outfit_id),
        )
        return True

    def save_log(self, user_id: str, log: OutfitLog) -> OutfitLog:
        """Insert a wear log and bump the outfit's wear counter and last-worn date.

        A log id that is already stored counts as recorded: the existing row is
        kept and the counter is not bumped again.
        """

        with self._connect() as conn:
            self._record_log(conn, user_id, log)
        return log

    def save_logs(self, user_id: str, logs: Sequence[OutfitLog]) -> List[OutfitLog]:
        """Record several wear logs in one transaction; any failure stores none of them."""

        with self._connect() as conn:
            for log in logs:
                self._record_log(conn, user_id, log)
        return list(logs)

    def _row_to_log(self, row: sqlite3.Row) -> OutfitLog:
        return OutfitLog(
            log_id=row["log_id"],
            outfit_id=row["outfit_id"],
            date=parse_date(row["date"]),
            time_of_day=row["time_of_day"],
            weather_condition=row["weather_condition"],
            temperature=row["temperature"],
            activity=row["activity"],
            notes=row["notes"],
            ai_suggested=bool(row["ai_suggested"]),
        )

    def list_logs(self, user_id: str) -> List[OutfitLog]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM outfit_logs WHERE user_id = ? ORDER BY date, log_id",
                (user_id,),
            )
            return [self._row_to_log(row) for row in cursor.fetchall()]

    def delete_log(self, user_id: str, log_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM outfit_logs WHERE user_id = ? AND log_id = ?",
                (user_id, log_id),
            )
            return cursor.rowcount > 0


__all__ = ["WardrobeStore", "SQLiteWardrobeStore"]

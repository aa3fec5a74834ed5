from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from postgrest.exceptions import APIError
from supabase import AsyncClient, acreate_client

from .models import EntryRecord, MapRecord


logger = logging.getLogger(__name__)

MAPS_TABLE = "maps"
ENTRIES_TABLE = "entries"
# Leaderboard position is derived from time order at read time; the stored
# column is written once and never recomputed.
INSERTED_RANK = 1


class LeaderboardStoreError(RuntimeError):
    """Raised when a Supabase query fails."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause


class LeaderboardStore:
    """Thin async wrapper over the Supabase ``maps`` and ``entries`` tables.

    The store owns no state besides the client; every call is a single
    PostgREST round-trip. Callers decide how to report failures.
    """

    def __init__(self, client: AsyncClient) -> None:
        self._client = client

    @classmethod
    async def connect(cls, url: str, key: str) -> "LeaderboardStore":
        client = await acreate_client(url, key)
        logger.info("Supabase client ready for %s", url)
        return cls(client)

    async def find_map(self, map_code: str) -> Optional[MapRecord]:
        """Return the map whose code exactly matches ``map_code``."""

        query = (
            self._client.table(MAPS_TABLE)
            .select("id, map_id, category, author")
            .eq("map_id", map_code)
            .limit(1)
        )
        rows = await self._execute(query, "find_map")
        if not rows:
            return None
        return MapRecord.from_row(rows[0])

    async def list_entries(self, map_id: int) -> List[EntryRecord]:
        query = self._client.table(ENTRIES_TABLE).select("*").eq("map_id", map_id)
        rows = await self._execute(query, "list_entries")
        return [EntryRecord.from_row(row) for row in rows]

    async def ranked_entries(self, map_id: int) -> List[EntryRecord]:
        """Entries for ``map_id`` ordered fastest first."""

        return rank_entries(await self.list_entries(map_id))

    async def insert_entry(self, map_id: int, player_name: str, time: str) -> None:
        payload = {
            "map_id": int(map_id),
            "player_name": player_name,
            "time": time,
            "rank": INSERTED_RANK,
        }
        await self._execute(self._client.table(ENTRIES_TABLE).insert([payload]), "insert_entry")

    async def delete_entry(self, entry_id: int) -> None:
        query = self._client.table(ENTRIES_TABLE).delete().eq("id", entry_id)
        await self._execute(query, "delete_entry")

    async def _execute(self, query: Any, operation: str) -> List[dict]:
        try:
            response = await query.execute()
        except APIError as exc:
            raise LeaderboardStoreError(operation, exc) from exc
        return list(getattr(response, "data", None) or [])


def rank_entries(entries: Sequence[EntryRecord]) -> List[EntryRecord]:
    """Sort by numeric time, never by string comparison."""

    return sorted(entries, key=lambda entry: entry.seconds)


__all__ = [
    "INSERTED_RANK",
    "LeaderboardStore",
    "LeaderboardStoreError",
    "rank_entries",
]

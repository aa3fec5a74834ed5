"""Row types for the ``maps`` and ``entries`` tables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(slots=True, frozen=True)
class MapRecord:
    id: int
    map_code: str
    category: str
    author: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "MapRecord":
        return cls(
            id=int(row["id"]),
            map_code=str(row["map_id"]),
            category=str(row.get("category") or ""),
            author=str(row.get("author") or ""),
        )


@dataclass(slots=True, frozen=True)
class EntryRecord:
    id: int
    map_id: int
    player_name: str
    time: str
    rank: int = 1

    @property
    def seconds(self) -> float:
        """Numeric time used for ordering; unparseable times sort last."""
        try:
            return float(self.time)
        except (TypeError, ValueError):
            return float("inf")

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "EntryRecord":
        return cls(
            id=int(row["id"]),
            map_id=int(row["map_id"]),
            player_name=str(row.get("player_name") or ""),
            time=str(row.get("time") or ""),
            rank=int(row.get("rank") or 1),
        )


__all__ = ["EntryRecord", "MapRecord"]

"""Encoding of pending approvals into button custom ids.

A pending submission never touches the database or process memory: the
approve button's ``custom_id`` carries ``approve_<mapId>_<player>_<time>``.
Player names may contain ``_`` while map ids and times never do, so the
payload is parsed from both ends: the map id is everything before the first
separator, the time everything after the last one, and the player name is
whatever sits in between.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

SEPARATOR = "_"
# Discord rejects component custom ids longer than this.
MAX_CUSTOM_ID_LENGTH = 100


class PayloadError(ValueError):
    """Raised when a custom id cannot be encoded or decoded."""


class ReviewAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


class RejectSource(str, Enum):
    """Where the card carrying a reject button came from."""

    DISCORD = "discord"
    WEBHOOK = "webhook"


@dataclass(slots=True, frozen=True)
class PendingSubmission:
    map_id: int
    player_name: str
    time: str

    def to_custom_id(self) -> str:
        if SEPARATOR in self.time:
            raise PayloadError(f"time {self.time!r} must not contain {SEPARATOR!r}")
        custom_id = SEPARATOR.join(
            (ReviewAction.APPROVE.value, str(int(self.map_id)), self.player_name, self.time)
        )
        if len(custom_id) > MAX_CUSTOM_ID_LENGTH:
            raise PayloadError(
                f"encoded approval is {len(custom_id)} characters; the limit is {MAX_CUSTOM_ID_LENGTH}"
            )
        return custom_id

    @classmethod
    def from_custom_id(cls, custom_id: str) -> "PendingSubmission":
        action, payload = split_action(custom_id)
        if action is not ReviewAction.APPROVE:
            raise PayloadError(f"{custom_id!r} is not an approval")
        return cls.from_payload(payload)

    @classmethod
    def from_payload(cls, payload: str) -> "PendingSubmission":
        head, sep, time = payload.rpartition(SEPARATOR)
        if not sep:
            raise PayloadError(f"approval payload {payload!r} has no time segment")
        map_id_raw, sep, player_name = head.partition(SEPARATOR)
        if not sep:
            raise PayloadError(f"approval payload {payload!r} has no player segment")
        try:
            map_id = int(map_id_raw)
        except ValueError as exc:
            raise PayloadError(f"approval payload {payload!r} has a non-numeric map id") from exc
        return cls(map_id=map_id, player_name=player_name, time=time)


def reject_custom_id(source: RejectSource) -> str:
    return f"{ReviewAction.REJECT.value}{SEPARATOR}{source.value}"


def split_action(custom_id: str) -> Tuple[Optional[ReviewAction], str]:
    """Split ``custom_id`` into its action keyword and the remaining payload.

    Returns ``(None, custom_id)`` for ids that belong to some other component.
    """

    keyword, _, payload = (custom_id or "").partition(SEPARATOR)
    try:
        return ReviewAction(keyword), payload
    except ValueError:
        return None, custom_id


__all__ = [
    "MAX_CUSTOM_ID_LENGTH",
    "PayloadError",
    "PendingSubmission",
    "RejectSource",
    "ReviewAction",
    "reject_custom_id",
    "split_action",
]

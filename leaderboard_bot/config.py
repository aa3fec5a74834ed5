"""Environment-backed configuration for LeaderboardBot."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional, Set


def _split_ints(value: str) -> Set[int]:
    ints: Set[int] = set()
    for chunk in (value or "").replace(";", ",").split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            ints.add(int(chunk))
        except ValueError:
            continue
    return ints


def _optional_int(value: Optional[str]) -> Optional[int]:
    value = (value or "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


@dataclass(slots=True)
class LeaderboardBotConfig:
    discord_token: str
    supabase_url: str
    supabase_key: str
    admin_role_id: Optional[int] = None
    # Channel where review cards are posted and webhook submissions arrive.
    review_channel_id: Optional[int] = None
    # Channel where members are allowed to run /submit.
    submit_channel_id: Optional[int] = None
    test_guild_ids: Set[int] = field(default_factory=set)
    command_prefix: str = "!"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "LeaderboardBotConfig":
        token = os.getenv("DISCORD_TOKEN", "").strip()
        if not token:
            raise RuntimeError("DISCORD_TOKEN is required to run the bot")

        supabase_url = os.getenv("SUPABASE_URL", "").strip()
        supabase_key = os.getenv("SUPABASE_KEY", "").strip()
        if not supabase_url or not supabase_key:
            raise RuntimeError("SUPABASE_URL and SUPABASE_KEY are required to run the bot")

        return cls(
            discord_token=token,
            supabase_url=supabase_url,
            supabase_key=supabase_key,
            admin_role_id=_optional_int(os.getenv("ADMIN_ROLE_ID")),
            review_channel_id=_optional_int(os.getenv("SUBMISSIONS_CHANNEL_ID")),
            submit_channel_id=_optional_int(os.getenv("SUBMIT_CHANNEL_ID")),
            test_guild_ids=_split_ints(os.getenv("TEST_GUILDS", "")),
            command_prefix=os.getenv("BOT_PREFIX", "!").strip() or "!",
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )


__all__ = ["LeaderboardBotConfig"]

from pathlib import Path
import sys
import types
from typing import Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from leaderboard_bot.config import LeaderboardBotConfig  # noqa: E402
from leaderboard_bot.core.leaderboard_store import rank_entries  # noqa: E402
from leaderboard_bot.core.models import EntryRecord, MapRecord  # noqa: E402

ADMIN_ROLE_ID = 500
REVIEW_CHANNEL_ID = 600
SUBMIT_CHANNEL_ID = 700


@pytest.fixture()
def sample_config() -> LeaderboardBotConfig:
    return LeaderboardBotConfig(
        discord_token="testing-token",
        supabase_url="https://example.supabase.co",
        supabase_key="service-key",
        admin_role_id=ADMIN_ROLE_ID,
        review_channel_id=REVIEW_CHANNEL_ID,
        submit_channel_id=SUBMIT_CHANNEL_ID,
        test_guild_ids={2},
    )


class FakeStore:
    """In-memory stand-in for LeaderboardStore."""

    def __init__(self, maps: Optional[List[MapRecord]] = None) -> None:
        self.maps: Dict[str, MapRecord] = {m.map_code: m for m in maps or []}
        self.entries: List[EntryRecord] = []
        self.inserted: List[tuple] = []
        self.deleted: List[int] = []
        self.lookups: List[str] = []
        self.fail_with: Optional[Exception] = None

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def find_map(self, map_code: str) -> Optional[MapRecord]:
        self._maybe_fail()
        self.lookups.append(map_code)
        return self.maps.get(map_code)

    async def list_entries(self, map_id: int) -> List[EntryRecord]:
        self._maybe_fail()
        return [entry for entry in self.entries if entry.map_id == map_id]

    async def ranked_entries(self, map_id: int) -> List[EntryRecord]:
        return rank_entries(await self.list_entries(map_id))

    async def insert_entry(self, map_id: int, player_name: str, time: str) -> None:
        self._maybe_fail()
        self.inserted.append((map_id, player_name, time))

    async def delete_entry(self, entry_id: int) -> None:
        self._maybe_fail()
        self.deleted.append(entry_id)
        self.entries = [entry for entry in self.entries if entry.id != entry_id]


@pytest.fixture()
def sample_map() -> MapRecord:
    return MapRecord(id=42, map_code="@968049", category="Speedrun", author="Mapper")


@pytest.fixture()
def fake_store(sample_map: MapRecord) -> FakeStore:
    return FakeStore([sample_map])


@pytest.fixture()
def error_engine() -> MagicMock:
    return MagicMock()


class DummyResponse:
    def __init__(self) -> None:
        self._done = False
        self.messages: List[dict] = []
        self.deferred: List[dict] = []

    def is_done(self) -> bool:
        return self._done

    async def send_message(self, content=None, *, embed=None, ephemeral: bool = False) -> None:
        self._done = True
        self.messages.append({"content": content, "embed": embed, "ephemeral": ephemeral})

    async def defer(self, *, ephemeral: bool = False, thinking: bool = False) -> None:
        self._done = True
        self.deferred.append({"ephemeral": ephemeral, "thinking": thinking})


class DummyFollowup:
    def __init__(self) -> None:
        self.messages: List[dict] = []

    async def send(self, content=None, *, embed=None, ephemeral: bool = False) -> None:
        self.messages.append({"content": content, "embed": embed, "ephemeral": ephemeral})


class DummyMember:
    def __init__(self, user_id: int, roles, name: str) -> None:
        self.id = user_id
        self.roles = roles
        self.name = name

    def __str__(self) -> str:
        return self.name


def make_member(*role_ids: int, user_id: int = 1, name: str = "Admin#0001") -> DummyMember:
    roles = [types.SimpleNamespace(id=role_id) for role_id in role_ids]
    return DummyMember(user_id, roles, name)


def make_interaction(
    *,
    user=None,
    channel_id: int = SUBMIT_CHANNEL_ID,
    custom_id: Optional[str] = None,
    message=None,
):
    interaction = types.SimpleNamespace()
    interaction.user = user if user is not None else make_member()
    interaction.guild = types.SimpleNamespace(id=1, fetch_member=AsyncMock())
    interaction.channel_id = channel_id
    interaction.response = DummyResponse()
    interaction.followup = DummyFollowup()
    interaction.message = message
    interaction.edit_original_response = AsyncMock()
    if custom_id is not None:
        interaction.type = discord.InteractionType.component
        interaction.data = {"custom_id": custom_id, "component_type": 2}
    else:
        interaction.type = discord.InteractionType.application_command
        interaction.data = {}
    return interaction


class DummyChannel:
    def __init__(self, channel_id: int) -> None:
        self.id = channel_id
        self.sent: List[dict] = []

    async def send(self, *, embed=None, view=None) -> None:
        self.sent.append({"embed": embed, "view": view})


class DummyBot:
    def __init__(self, channels=None) -> None:
        self._channels = {channel.id: channel for channel in channels or []}
        self.user = types.SimpleNamespace(id=999, bot=True)

    def get_channel(self, channel_id: int):
        return self._channels.get(channel_id)


__all__ = [
    "ADMIN_ROLE_ID",
    "REVIEW_CHANNEL_ID",
    "SUBMIT_CHANNEL_ID",
    "DummyBot",
    "DummyChannel",
    "DummyMember",
    "FakeStore",
    "make_interaction",
    "make_member",
]

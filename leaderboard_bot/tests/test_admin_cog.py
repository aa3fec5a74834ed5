import pytest

from leaderboard_bot.cogs.admin_cog import AdminCog
from leaderboard_bot.core.models import EntryRecord
from leaderboard_bot.core.review_ui_engine import ReviewUIEngine
from leaderboard_bot.tests.conftest import ADMIN_ROLE_ID, DummyBot, make_interaction, make_member


def _entry(entry_id, time, player="P#0000", map_id=42):
    return EntryRecord(id=entry_id, map_id=map_id, player_name=player, time=time)


@pytest.fixture()
def cog(sample_config, fake_store, error_engine):
    fake_store.entries = [
        _entry(1, "50.00", "First#0001"),
        _entry(2, "45.20", "Fastest#0002"),
        _entry(3, "60.10", "Slow#0003"),
        _entry(4, "1.00", "OtherMap#0004", map_id=99),
    ]
    return AdminCog(DummyBot(), sample_config, fake_store, ReviewUIEngine(), error_engine)


def _admin_interaction():
    return make_interaction(user=make_member(ADMIN_ROLE_ID, name="Mod#0001"))


@pytest.mark.asyncio
async def test_delete_rank_one_removes_fastest_time(cog, fake_store):
    interaction = _admin_interaction()

    await AdminCog.delete_entry.callback(cog, interaction, map_code="968049", rank=1)

    assert fake_store.deleted == [2]
    embed = interaction.followup.messages[-1]["embed"]
    fields = {field.name: field.value for field in embed.fields}
    assert fields["👤 Player"] == "Fastest#0002"
    assert fields["⏱️ Time"] == "45.20s"
    assert fields["📂 Category"] == "Speedrun"
    assert fields["🔢 Entry ID"] == "2"
    assert embed.footer.text == "Deleted by Mod#0001"
    assert interaction.response.deferred == [{"ephemeral": True, "thinking": True}]


@pytest.mark.asyncio
async def test_delete_last_rank(cog, fake_store):
    interaction = _admin_interaction()

    await AdminCog.delete_entry.callback(cog, interaction, map_code="@968049", rank=3)

    assert fake_store.deleted == [3]


@pytest.mark.asyncio
@pytest.mark.parametrize("rank", [0, -1, 4])
async def test_delete_out_of_range_rank_deletes_nothing(cog, fake_store, rank):
    interaction = _admin_interaction()

    await AdminCog.delete_entry.callback(cog, interaction, map_code="968049", rank=rank)

    assert fake_store.deleted == []
    content = interaction.followup.messages[-1]["content"]
    assert "Invalid rank" in content
    assert "ranks 1-3" in content


@pytest.mark.asyncio
async def test_delete_requires_admin_role(cog, fake_store):
    interaction = make_interaction(user=make_member(123))

    await AdminCog.delete_entry.callback(cog, interaction, map_code="968049", rank=1)

    assert interaction.response.messages[0]["content"] == "❌ Only admins can delete entries."
    assert interaction.response.messages[0]["ephemeral"] is True
    assert fake_store.deleted == []
    assert fake_store.lookups == []


@pytest.mark.asyncio
async def test_delete_unknown_map_echoes_normalised_code(cog, fake_store):
    interaction = _admin_interaction()

    await AdminCog.delete_entry.callback(cog, interaction, map_code="111111", rank=1)

    content = interaction.followup.messages[-1]["content"]
    assert "Map not found" in content
    assert "`@111111`" in content
    assert fake_store.deleted == []


@pytest.mark.asyncio
async def test_delete_map_without_entries(cog, fake_store):
    fake_store.entries = []
    interaction = _admin_interaction()

    await AdminCog.delete_entry.callback(cog, interaction, map_code="968049", rank=1)

    assert "No entries found for map `@968049`" in interaction.followup.messages[-1]["content"]


@pytest.mark.asyncio
async def test_delete_datastore_error_is_generic(cog, fake_store, error_engine):
    fake_store.fail_with = RuntimeError("timeout")
    interaction = _admin_interaction()

    await AdminCog.delete_entry.callback(cog, interaction, map_code="968049", rank=1)

    error_engine.log_interaction_exception.assert_called_once()
    assert interaction.followup.messages[-1]["content"] == "❌ Error deleting entry. Please try again."

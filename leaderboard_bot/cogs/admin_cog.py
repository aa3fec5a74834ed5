from __future__ import annotations

import logging
from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from leaderboard_bot.config import LeaderboardBotConfig
from leaderboard_bot.core.error_engine import ErrorEngine
from leaderboard_bot.core.leaderboard_store import LeaderboardStore
from leaderboard_bot.core.normalizer import normalize_map_code
from leaderboard_bot.core.review_ui_engine import ReviewUIEngine
from leaderboard_bot.core.role_utils import interaction_has_admin_role


logger = logging.getLogger(__name__)


class AdminPermissionError(Exception):
    """Raised when a user lacks the admin role for a command."""


class AdminCog(commands.Cog):
    """Admin-only leaderboard maintenance."""

    def __init__(
        self,
        bot: commands.Bot,
        config: LeaderboardBotConfig,
        store: LeaderboardStore,
        ui_engine: ReviewUIEngine,
        error_engine: Optional[ErrorEngine] = None,
    ) -> None:
        self.bot = bot
        self.config = config
        self.store = store
        self.ui = ui_engine
        self.error_engine = error_engine or ErrorEngine()
        self._denied = "❌ Only admins can delete entries."

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    async def _deny(self, interaction: discord.Interaction) -> None:
        if interaction.response.is_done():
            await interaction.followup.send(self._denied, ephemeral=True)
        else:
            await interaction.response.send_message(self._denied, ephemeral=True)

    async def _ensure_permitted(self, interaction: discord.Interaction) -> None:
        if not await interaction_has_admin_role(interaction, self.config.admin_role_id):
            raise AdminPermissionError()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    @app_commands.command(name="delete", description="[ADMIN] Delete an entry from the leaderboard")
    @app_commands.rename(map_code="map")
    @app_commands.describe(
        map_code="Map code (with or without @, e.g., @968049 or 968049)",
        rank="Rank position to delete (1 = first place, 2 = second, etc.)",
    )
    async def delete_entry(self, interaction: discord.Interaction, map_code: str, rank: int) -> None:
        try:
            await self._ensure_permitted(interaction)
        except AdminPermissionError:
            await self._deny(interaction)
            return

        await interaction.response.defer(ephemeral=True, thinking=True)

        try:
            normalized = normalize_map_code(map_code)
            map_record = await self.store.find_map(normalized)
            if map_record is None:
                await interaction.followup.send(
                    "❌ Map not found! Make sure to use the exact map code.\n"
                    f"Example: `{normalized}`",
                    ephemeral=True,
                )
                return

            entries = await self.store.ranked_entries(map_record.id)
            if not entries:
                await interaction.followup.send(
                    f"❌ No entries found for map `{map_record.map_code}`", ephemeral=True
                )
                return

            count = len(entries)
            if rank < 1 or rank > count:
                await interaction.followup.send(
                    f"❌ Invalid rank! Map `{map_record.map_code}` has {count} entries "
                    f"(ranks 1-{count}).",
                    ephemeral=True,
                )
                return

            entry = entries[rank - 1]
            await self.store.delete_entry(entry.id)

            embed = self.ui.build_deletion_embed(
                map_record=map_record,
                entry=entry,
                rank=rank,
                deleted_by=str(interaction.user),
            )
            await interaction.followup.send(embed=embed, ephemeral=True)
            logger.info(
                "Deleted rank %s from %s: %s (%ss)",
                rank,
                map_record.map_code,
                entry.player_name,
                entry.time,
            )
        except Exception as exc:
            self.error_engine.log_interaction_exception(exc, interaction, context="AdminCog.delete_entry")
            await interaction.followup.send("❌ Error deleting entry. Please try again.", ephemeral=True)


async def setup(bot: commands.Bot) -> None:  # pragma: no cover - dynamic loading guard
    raise RuntimeError("Use LeaderboardBotRunner to load AdminCog")


__all__ = ["AdminCog", "AdminPermissionError"]

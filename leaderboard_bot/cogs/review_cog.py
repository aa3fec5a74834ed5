"""Handles Approve/Reject clicks on review cards."""

from __future__ import annotations

import logging
from typing import Optional

import discord
from discord.ext import commands

from leaderboard_bot.config import LeaderboardBotConfig
from leaderboard_bot.core.error_engine import ErrorEngine
from leaderboard_bot.core.leaderboard_store import LeaderboardStore
from leaderboard_bot.core.review_payload import PendingSubmission, ReviewAction, split_action
from leaderboard_bot.core.review_ui_engine import ReviewUIEngine
from leaderboard_bot.core.role_utils import interaction_has_admin_role


logger = logging.getLogger(__name__)


class ReviewCog(commands.Cog):
    """Admin-gated moderation of pending submissions.

    Buttons are matched by ``custom_id`` in an ``on_interaction`` listener
    rather than through registered views, so cards posted before a restart
    (and cards decorated on webhook messages) stay clickable. Resolving a
    card strips its buttons, which is the only guard against processing the
    same submission twice.
    """

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

    @commands.Cog.listener()
    async def on_interaction(self, interaction: discord.Interaction) -> None:
        if interaction.type is not discord.InteractionType.component:
            return
        custom_id = str((interaction.data or {}).get("custom_id", ""))
        action, payload = split_action(custom_id)
        if action is None:
            return

        if not await interaction_has_admin_role(interaction, self.config.admin_role_id):
            await interaction.response.send_message(
                "❌ Only admins can approve/reject.", ephemeral=True
            )
            return

        await interaction.response.defer()

        try:
            if action is ReviewAction.APPROVE:
                await self._approve(interaction, PendingSubmission.from_payload(payload))
            else:
                await self._reject(interaction)
        except Exception as exc:
            self.error_engine.log_interaction_exception(exc, interaction, context="ReviewCog.on_interaction")
            await interaction.followup.send("❌ Error processing approval.", ephemeral=True)

    async def _approve(self, interaction: discord.Interaction, pending: PendingSubmission) -> None:
        # An insert failure propagates before the card is touched.
        await self.store.insert_entry(pending.map_id, pending.player_name, pending.time)

        embed = self.ui.mark_approved(self._card_embed(interaction))
        await interaction.edit_original_response(embed=embed, view=None)
        logger.info(
            "Approved %s (%ss) on map %s by %s",
            pending.player_name,
            pending.time,
            pending.map_id,
            interaction.user,
        )

        await interaction.followup.send(
            "✅ Score approved and added to leaderboard!\n"
            f"**Player:** {pending.player_name}\n"
            f"**Time:** {pending.time}s",
            ephemeral=True,
        )

    async def _reject(self, interaction: discord.Interaction) -> None:
        embed = self.ui.mark_rejected(self._card_embed(interaction))
        await interaction.edit_original_response(embed=embed, view=None)
        logger.info("Submission rejected by %s", interaction.user)

        await interaction.followup.send("❌ Score rejected.", ephemeral=True)

    @staticmethod
    def _card_embed(interaction: discord.Interaction) -> Optional[discord.Embed]:
        message = interaction.message
        if message is None or not message.embeds:
            return None
        return message.embeds[0]


async def setup(bot: commands.Bot) -> None:  # pragma: no cover - dynamic loading guard
    raise RuntimeError("Use LeaderboardBotRunner to load ReviewCog")


__all__ = ["ReviewCog"]

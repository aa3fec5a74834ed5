"""Slash command that queues a score for admin review."""

from __future__ import annotations

import logging
from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from leaderboard_bot.config import LeaderboardBotConfig
from leaderboard_bot.core.channel_utils import ensure_channel
from leaderboard_bot.core.error_engine import ErrorEngine
from leaderboard_bot.core.leaderboard_store import LeaderboardStore
from leaderboard_bot.core.normalizer import (
    capitalize_username,
    format_time,
    is_valid_url,
    is_valid_username,
    normalize_map_code,
)
from leaderboard_bot.core.review_payload import PayloadError, PendingSubmission, RejectSource
from leaderboard_bot.core.review_ui_engine import ReviewUIEngine


logger = logging.getLogger(__name__)

EXAMPLE_MAP_CODE = "@968049"


class ReviewChannelUnavailable(RuntimeError):
    """Raised when the configured review channel cannot be resolved."""


class SubmissionCog(commands.Cog):
    """Validates `/submit` requests and posts them to the review channel."""

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

    @app_commands.command(name="submit", description="Submit your score for a map")
    @app_commands.rename(map_code="map")
    @app_commands.describe(
        username="Your username (format: Name#0000)",
        map_code="Map code (with or without @, e.g., @968049 or 968049)",
        time="Your completion time (e.g., 45.23)",
        proof="Link to proof (screenshot/video)",
    )
    async def submit(
        self,
        interaction: discord.Interaction,
        username: str,
        map_code: str,
        time: str,
        proof: str,
    ) -> None:
        if not await ensure_channel(interaction, self.config.submit_channel_id):
            return

        if not is_valid_username(username):
            await interaction.response.send_message(
                "❌ Username must be in format: Name#0000", ephemeral=True
            )
            return
        player_name = capitalize_username(username)

        formatted_time = format_time(time)
        if formatted_time is None:
            await interaction.response.send_message(
                "❌ Time must be a valid number (e.g., 45.23)", ephemeral=True
            )
            return

        if not is_valid_url(proof):
            await interaction.response.send_message("❌ Proof must be a valid URL", ephemeral=True)
            return

        await interaction.response.defer(ephemeral=True, thinking=True)

        try:
            map_record = await self.store.find_map(normalize_map_code(map_code))
            if map_record is None:
                await interaction.followup.send(
                    "❌ Map not found! Make sure to use the exact map code.\n"
                    f"Example: `{EXAMPLE_MAP_CODE}`",
                    ephemeral=True,
                )
                return

            pending = PendingSubmission(map_id=map_record.id, player_name=player_name, time=formatted_time)
            try:
                view = self.ui.build_review_view(pending, RejectSource.DISCORD)
            except PayloadError:
                await interaction.followup.send(
                    "❌ Username is too long to be reviewed. Please shorten it and submit again.",
                    ephemeral=True,
                )
                return

            embed = self.ui.build_submission_embed(
                map_record=map_record,
                player_name=player_name,
                time=formatted_time,
                proof_url=proof.strip(),
            )
            channel = self._review_channel()
            await channel.send(embed=embed, view=view)
            logger.info(
                "Queued submission for review: %s %ss on %s",
                player_name,
                formatted_time,
                map_record.map_code,
            )

            await interaction.followup.send("✅ Your score has been sent for review!", ephemeral=True)
        except Exception as exc:
            self.error_engine.log_interaction_exception(exc, interaction, context="SubmissionCog.submit")
            await interaction.followup.send("❌ Error submitting score. Please try again.", ephemeral=True)

    def _review_channel(self) -> discord.abc.Messageable:
        channel_id = self.config.review_channel_id
        channel = self.bot.get_channel(channel_id) if channel_id is not None else None
        if channel is None:
            raise ReviewChannelUnavailable(f"review channel {channel_id} is not available")
        return channel  # type: ignore[return-value]


async def setup(bot: commands.Bot) -> None:  # pragma: no cover - dynamic loading guard
    raise RuntimeError("Use LeaderboardBotRunner to load SubmissionCog")


__all__ = ["SubmissionCog"]

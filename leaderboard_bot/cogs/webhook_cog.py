"""Adds review buttons to submission cards posted by the external webhook."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import discord
from discord.ext import commands

from leaderboard_bot.config import LeaderboardBotConfig
from leaderboard_bot.core.error_engine import ErrorEngine
from leaderboard_bot.core.leaderboard_store import LeaderboardStore
from leaderboard_bot.core.normalizer import capitalize_username, format_time, normalize_map_code
from leaderboard_bot.core.review_payload import PendingSubmission, RejectSource
from leaderboard_bot.core.review_ui_engine import (
    MAP_CODE_FIELD,
    MAP_FIELD,
    PLAYER_FIELD,
    TIME_FIELD,
    TIME_SUFFIX,
    ReviewUIEngine,
)


logger = logging.getLogger(__name__)

SUBMISSION_TITLE_MARKER = "Submission"


@dataclass(slots=True)
class WebhookSubmission:
    map_code: str
    player_name: str
    time: str


def parse_webhook_card(embed: Optional[discord.Embed]) -> Optional[WebhookSubmission]:
    """Extract a normalised submission from a webhook card, or ``None``."""

    if embed is None or not embed.title or SUBMISSION_TITLE_MARKER not in embed.title:
        return None

    fields = {field.name: field.value for field in embed.fields}
    map_value = fields.get(MAP_FIELD) or fields.get(MAP_CODE_FIELD)
    player_value = fields.get(PLAYER_FIELD)
    time_value = fields.get(TIME_FIELD)
    if not map_value or not player_value or not time_value:
        return None

    time = format_time(time_value.strip().removesuffix(TIME_SUFFIX))
    if time is None:
        return None

    return WebhookSubmission(
        map_code=normalize_map_code(map_value),
        player_name=capitalize_username(player_value),
        time=time,
    )


class WebhookCog(commands.Cog):
    """Best-effort decoration of webhook cards; failures are logged, never surfaced."""

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
    async def on_message(self, message: discord.Message) -> None:
        if not message.webhook_id:
            return
        if self.config.review_channel_id is None or message.channel.id != self.config.review_channel_id:
            return
        # Cards are decorated at most once.
        if message.components:
            return

        try:
            submission = parse_webhook_card(message.embeds[0] if message.embeds else None)
            if submission is None:
                return

            map_record = await self.store.find_map(submission.map_code)
            if map_record is None:
                return

            pending = PendingSubmission(
                map_id=map_record.id,
                player_name=submission.player_name,
                time=submission.time,
            )
            await message.edit(view=self.ui.build_review_view(pending, RejectSource.WEBHOOK))
            logger.info("Added review buttons to webhook submission from %s", submission.player_name)
        except Exception as exc:
            self.error_engine.log_message_exception(exc, message, context="WebhookCog.on_message")


async def setup(bot: commands.Bot) -> None:  # pragma: no cover - dynamic loading guard
    raise RuntimeError("Use LeaderboardBotRunner to load WebhookCog")


__all__ = ["WebhookCog", "WebhookSubmission", "parse_webhook_card"]

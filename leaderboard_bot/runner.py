"""Async bootstrapper for LeaderboardBot."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import discord
from discord.ext import commands
from dotenv import load_dotenv

from leaderboard_bot.config import LeaderboardBotConfig
from leaderboard_bot.core.error_engine import ErrorEngine
from leaderboard_bot.core.leaderboard_store import LeaderboardStore
from leaderboard_bot.core.logging_utils import configure_library_logging
from leaderboard_bot.core.review_ui_engine import ReviewUIEngine
from leaderboard_bot.cogs.admin_cog import AdminCog
from leaderboard_bot.cogs.review_cog import ReviewCog
from leaderboard_bot.cogs.submission_cog import SubmissionCog
from leaderboard_bot.cogs.webhook_cog import WebhookCog


logger = logging.getLogger(__name__)


class LeaderboardBotRunner:
    """Full lifecycle manager for the discord.py bot instance."""

    def __init__(self) -> None:
        load_dotenv()
        self.config = LeaderboardBotConfig.from_env()
        configure_library_logging(level=self.config.log_level)
        self.error_engine = ErrorEngine()
        self.error_engine.catch_uncaught()
        self.store: Optional[LeaderboardStore] = None

        intents = discord.Intents.default()
        intents.message_content = True
        intents.guilds = True

        self.bot = commands.Bot(
            command_prefix=self.config.command_prefix,
            intents=intents,
            help_command=None,
        )

        ui_engine = ReviewUIEngine()

        async def setup_hook() -> None:
            # Without the datastore no cog can work; let the failure stop startup.
            self.store = await LeaderboardStore.connect(self.config.supabase_url, self.config.supabase_key)
            for cog_cls in (SubmissionCog, WebhookCog, ReviewCog, AdminCog):
                await self.bot.add_cog(
                    cog_cls(self.bot, self.config, self.store, ui_engine, self.error_engine)
                )

            try:
                if self.config.test_guild_ids:
                    for gid in self.config.test_guild_ids:
                        guild = discord.Object(id=gid)
                        self.bot.tree.copy_global_to(guild=guild)
                        await self.bot.tree.sync(guild=guild)
                else:
                    await self.bot.tree.sync()
                logger.info("Slash commands synced")
            except Exception as exc:
                logger.warning("Failed to sync slash commands: %s", exc)

        self.bot.setup_hook = setup_hook  # type: ignore[assignment]

        @self.bot.event  # type: ignore[misc]
        async def on_ready() -> None:
            guild_names = ", ".join(guild.name for guild in self.bot.guilds)
            bot_user = self.bot.user
            user_id = bot_user.id if bot_user else "unknown"
            logger.info("LeaderboardBot connected as %s (%s) in %s", bot_user, user_id, guild_names)

    async def start(self) -> None:
        await self.bot.start(self.config.discord_token)

    async def close(self) -> None:
        await self.bot.close()


def run_leaderboard_bot() -> None:
    runner = LeaderboardBotRunner()
    try:
        asyncio.run(runner.start())
    except KeyboardInterrupt:
        logger.info("LeaderboardBot interrupted by user")


__all__ = ["LeaderboardBotRunner", "run_leaderboard_bot"]

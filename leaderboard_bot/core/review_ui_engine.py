"""Embeds and buttons for review cards and admin confirmations."""

from __future__ import annotations

from typing import Optional

import discord

from .models import EntryRecord, MapRecord
from .review_payload import PendingSubmission, RejectSource, reject_custom_id

SUBMISSION_COLOUR = discord.Colour(0x60A5FA)
APPROVED_COLOUR = discord.Colour(0x22C55E)
REJECTED_COLOUR = discord.Colour(0xEF4444)

SUBMISSION_TITLE = "📊 New Score Submission"
APPROVED_TITLE = "✅ APPROVED"
REJECTED_TITLE = "❌ REJECTED"

# Field labels shared with the external webhook integration.
MAP_FIELD = "🗺️ Map"
MAP_CODE_FIELD = "🗺️ Map Code"
PLAYER_FIELD = "👤 Player"
TIME_FIELD = "⏱️ Time"
TIME_SUFFIX = "s"


class ReviewUIEngine:
    """Formatting helpers that keep discord.py concerns outside the cogs."""

    def build_submission_embed(
        self,
        *,
        map_record: MapRecord,
        player_name: str,
        time: str,
        proof_url: str,
    ) -> discord.Embed:
        embed = discord.Embed(
            title=SUBMISSION_TITLE,
            colour=SUBMISSION_COLOUR,
            timestamp=discord.utils.utcnow(),
        )
        embed.add_field(name=MAP_CODE_FIELD, value=map_record.map_code, inline=True)
        embed.add_field(name="📂 Category", value=self._or_dash(map_record.category), inline=True)
        embed.add_field(name="✍️ Author", value=self._or_dash(map_record.author), inline=True)
        embed.add_field(name=PLAYER_FIELD, value=player_name, inline=True)
        embed.add_field(name=TIME_FIELD, value=f"{time}{TIME_SUFFIX}", inline=True)
        embed.add_field(name="📷 Proof", value=f"[View Proof]({proof_url})", inline=False)
        return embed

    def build_review_view(self, pending: PendingSubmission, source: RejectSource) -> discord.ui.View:
        """Approve/Reject buttons; clicks are handled by the review cog listener."""

        view = discord.ui.View(timeout=None)
        view.add_item(
            discord.ui.Button(
                label="✅ Approve",
                style=discord.ButtonStyle.success,
                custom_id=pending.to_custom_id(),
            )
        )
        view.add_item(
            discord.ui.Button(
                label="❌ Reject",
                style=discord.ButtonStyle.danger,
                custom_id=reject_custom_id(source),
            )
        )
        return view

    def mark_approved(self, embed: Optional[discord.Embed]) -> discord.Embed:
        return self._resolve(embed, APPROVED_TITLE, APPROVED_COLOUR)

    def mark_rejected(self, embed: Optional[discord.Embed]) -> discord.Embed:
        return self._resolve(embed, REJECTED_TITLE, REJECTED_COLOUR)

    def build_deletion_embed(
        self,
        *,
        map_record: MapRecord,
        entry: EntryRecord,
        rank: int,
        deleted_by: str,
    ) -> discord.Embed:
        embed = discord.Embed(
            title="🗑️ Entry Deleted Successfully",
            colour=REJECTED_COLOUR,
            timestamp=discord.utils.utcnow(),
        )
        embed.add_field(name=MAP_CODE_FIELD, value=map_record.map_code, inline=True)
        embed.add_field(name="📂 Category", value=self._or_dash(map_record.category), inline=True)
        embed.add_field(name="📊 Rank Deleted", value=f"#{rank}", inline=True)
        embed.add_field(name=PLAYER_FIELD, value=self._or_dash(entry.player_name), inline=True)
        embed.add_field(name=TIME_FIELD, value=f"{entry.time}{TIME_SUFFIX}", inline=True)
        embed.add_field(name="🔢 Entry ID", value=str(entry.id), inline=True)
        embed.set_footer(text=f"Deleted by {deleted_by}")
        return embed

    @staticmethod
    def _resolve(embed: Optional[discord.Embed], title: str, colour: discord.Colour) -> discord.Embed:
        updated = embed.copy() if embed is not None else discord.Embed()
        updated.title = title
        updated.colour = colour
        return updated

    @staticmethod
    def _or_dash(value: str) -> str:
        # Discord rejects empty field values.
        return value if value else "—"


__all__ = [
    "MAP_CODE_FIELD",
    "MAP_FIELD",
    "PLAYER_FIELD",
    "ReviewUIEngine",
    "TIME_FIELD",
    "TIME_SUFFIX",
]

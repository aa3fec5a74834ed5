from __future__ import annotations

from typing import Optional

import discord


async def ensure_channel(
    interaction: discord.Interaction,
    required_channel_id: Optional[int],
) -> bool:
    """Ensure a slash command is used in its designated channel.

    Returns ``True`` when the command should proceed, or ``False`` when an
    ephemeral notice has been sent and the caller should return early. An
    unconfigured channel refuses every invocation.
    """

    if required_channel_id is not None and interaction.channel_id == required_channel_id:
        return True

    if required_channel_id is None:
        message = "❌ Submissions are not open: no submission channel is configured."
    else:
        message = f"❌ This command can only be used in <#{required_channel_id}>"
    if not interaction.response.is_done():
        await interaction.response.send_message(message, ephemeral=True)
    return False


__all__ = ["ensure_channel"]

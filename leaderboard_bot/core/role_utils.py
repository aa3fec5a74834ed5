"""
Role checks for admin-only commands and review buttons.

Admin status is decided by a single configured role id; server owners and
Discord-level administrators get no implicit bypass.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import discord

__all__ = [
    "has_admin_role",
    "resolve_member",
    "interaction_has_admin_role",
]

logger = logging.getLogger(__name__)


def has_admin_role(user: Any, admin_role_id: Optional[int]) -> bool:
    """
    Check if user holds the configured admin role.

    Args:
        user: Discord member to check
        admin_role_id: Role id from ``ADMIN_ROLE_ID``; ``None`` means nobody is admin

    Returns:
        True if the member has the role, False otherwise
    """
    if admin_role_id is None:
        return False

    roles = getattr(user, "roles", None)
    if not roles:
        return False

    try:
        return any(getattr(role, "id", None) == admin_role_id for role in roles)
    except TypeError:
        return False


async def resolve_member(interaction: discord.Interaction) -> Any:
    """
    Return the invoking guild member with an up-to-date role list.

    Interaction payloads usually carry a full ``discord.Member``; when they
    only carry a ``discord.User`` the member is fetched from the guild.
    """
    user = interaction.user
    if isinstance(getattr(user, "roles", None), list):
        return user

    guild = interaction.guild
    if guild is None:
        return user
    try:
        return await guild.fetch_member(user.id)
    except discord.HTTPException as exc:
        logger.warning("Could not fetch member %s for role check: %s", user.id, exc)
        return user


async def interaction_has_admin_role(
    interaction: discord.Interaction,
    admin_role_id: Optional[int],
) -> bool:
    member = await resolve_member(interaction)
    return has_admin_role(member, admin_role_id)

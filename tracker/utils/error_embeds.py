"""
Centralized error embeds for consistent error handling across the stat tracker bot.
"""

import discord
from typing import Optional


class ErrorEmbeds:
    """Centralized error embed factory for consistent error handling."""

    @staticmethod
    def player_not_found(public_id: Optional[str] = None) -> discord.Embed:
        """Create embed for when a player is not found in the database."""
        if public_id:
            description = f"No player with id `{public_id}` has been recorded yet."
        else:
            description = "This player has not been recorded yet."

        return discord.Embed(
            title="Player Not Found",
            description=description,
            color=discord.Color.red()
        )

    @staticmethod
    def no_results(query: str) -> discord.Embed:
        """Create embed for a search that matched nobody."""
        return discord.Embed(
            title="No Results",
            description=f"No players match `{query}`.",
            color=discord.Color.orange()
        )

    @staticmethod
    def command_error(error: str) -> discord.Embed:
        """Create embed for general command errors."""
        return discord.Embed(
            title="Command Error",
            description=f"An error occurred: {error}\n\nPlease try again or contact an administrator.",
            color=discord.Color.red()
        )

    @staticmethod
    def invalid_input(message: str) -> discord.Embed:
        """Create embed for invalid user input."""
        return discord.Embed(
            title="Invalid Input",
            description=message,
            color=discord.Color.red()
        )

    @staticmethod
    def database_error() -> discord.Embed:
        """Create embed for database-related errors."""
        return discord.Embed(
            title="Database Error",
            description="A database error occurred. Please try again later or contact an administrator.",
            color=discord.Color.red()
        )

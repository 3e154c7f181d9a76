"""
Player lookup commands.

Slash commands for player stats, id lookup, search and recent activity.
"""

import discord
from discord.ext import commands
from discord import app_commands
import asyncio

from tracker.config import Config
from tracker.services.player_stats import PlayerStatsService
from tracker.services.stores import SqlBattleStore, SqlPlayerStore
from tracker.utils.embeds import build_active_players_embed, build_player_stats_embed, build_search_embed
from tracker.utils.error_embeds import ErrorEmbeds
from tracker.utils.exceptions import InvalidPublicIdError, StoreError
import logging

logger = logging.getLogger(__name__)


async def send_cooldown_message(interaction: discord.Interaction, command_name: str,
                                error: app_commands.CommandOnCooldown):
    """Tell the user how long a command stays on cooldown."""
    message = (f"⏰ Rate limit exceeded. Please wait {error.retry_after:.0f} seconds "
               f"before using `/{command_name}` again.")
    if interaction.response.is_done():
        await interaction.followup.send(message, ephemeral=True)
    else:
        await interaction.response.send_message(message, ephemeral=True)


class PlayerCog(commands.Cog):
    """Player lookup commands backed by PlayerStatsService."""

    def __init__(self, bot):
        self.bot = bot
        self.stats_service = PlayerStatsService(
            SqlPlayerStore(bot.db.session_factory),
            SqlBattleStore(bot.db.session_factory)
        )

    async def _run(self, coro, description: str):
        """Await a service call with the command timeout."""
        try:
            return await asyncio.wait_for(coro, timeout=Config.COMMAND_TIMEOUT_SECONDS)
        except asyncio.TimeoutError:
            logger.warning(f"{description} timed out.")
            raise

    @app_commands.command(name="stats", description="View a player's character stats and recent battles")
    @app_commands.describe(public_id="The player's public id")
    @app_commands.checks.cooldown(rate=1, per=10.0, key=lambda i: i.user.id)
    async def stats(self, interaction: discord.Interaction, public_id: str):
        """Display aggregated stats for a player."""
        await interaction.response.defer()

        try:
            player_stats = await self._run(
                self.stats_service.get_player_stats(public_id), f"Stats lookup for {public_id}"
            )
            if player_stats is None:
                await interaction.followup.send(embed=ErrorEmbeds.player_not_found(public_id.strip()), ephemeral=True)
                return

            await interaction.followup.send(embed=build_player_stats_embed(player_stats))

        except InvalidPublicIdError as e:
            await interaction.followup.send(embed=ErrorEmbeds.invalid_input(e.user_message), ephemeral=True)
        except asyncio.TimeoutError:
            await interaction.followup.send(
                "⏰ These stats are taking too long to load. Please try again in a moment.",
                ephemeral=True
            )
        except StoreError:
            await interaction.followup.send(embed=ErrorEmbeds.database_error(), ephemeral=True)
        except Exception as e:
            logger.error(f"Error in stats command: {e}", exc_info=True)
            await interaction.followup.send(
                embed=ErrorEmbeds.command_error("An error occurred while fetching stats. Please try again later."),
                ephemeral=True
            )

    @app_commands.command(name="player-id", description="Look up a player's full numeric id")
    @app_commands.describe(public_id="The player's public id")
    async def player_id(self, interaction: discord.Interaction, public_id: str):
        """Reply with the zero-padded stored id."""
        await interaction.response.defer(ephemeral=True)

        try:
            player_id = await self._run(
                self.stats_service.get_player_id(public_id), f"Id lookup for {public_id}"
            )
            if player_id is None:
                await interaction.followup.send(embed=ErrorEmbeds.player_not_found(public_id.strip()), ephemeral=True)
                return

            await interaction.followup.send(f"`{public_id.strip()}` → `{player_id}`", ephemeral=True)

        except InvalidPublicIdError as e:
            await interaction.followup.send(embed=ErrorEmbeds.invalid_input(e.user_message), ephemeral=True)
        except asyncio.TimeoutError:
            await interaction.followup.send("⏰ Id lookup timed out. Please try again.", ephemeral=True)
        except StoreError:
            await interaction.followup.send(embed=ErrorEmbeds.database_error(), ephemeral=True)
        except Exception as e:
            logger.error(f"Error in player-id command: {e}", exc_info=True)
            await interaction.followup.send(
                embed=ErrorEmbeds.command_error("An error occurred while looking up the id. Please try again later."),
                ephemeral=True
            )

    @app_commands.command(name="search", description="Search players by name or public id")
    @app_commands.describe(query="Part of a player's name or id")
    @app_commands.checks.cooldown(rate=5, per=60.0, key=lambda i: i.user.id)
    async def search(self, interaction: discord.Interaction, query: str):
        """Show players matching the query."""
        await interaction.response.defer()

        try:
            results = await self._run(self.stats_service.search_players(query), f"Search for '{query}'")
            if not results:
                await interaction.followup.send(embed=ErrorEmbeds.no_results(query), ephemeral=True)
                return

            await interaction.followup.send(embed=build_search_embed(query, results))

        except asyncio.TimeoutError:
            await interaction.followup.send("⏰ Search timed out. Please try again.", ephemeral=True)
        except StoreError:
            await interaction.followup.send(embed=ErrorEmbeds.database_error(), ephemeral=True)
        except Exception as e:
            logger.error(f"Error in search command: {e}", exc_info=True)
            await interaction.followup.send(
                embed=ErrorEmbeds.command_error("An error occurred while searching. Please try again later."),
                ephemeral=True
            )

    @app_commands.command(name="active", description="List players who played recently")
    async def active(self, interaction: discord.Interaction):
        """Show players seen within the activity window."""
        await interaction.response.defer()

        try:
            players = await self._run(
                self.stats_service.get_recently_active_players(), "Active players lookup"
            )
            await interaction.followup.send(
                embed=build_active_players_embed(players, self.stats_service.active_window_minutes)
            )

        except asyncio.TimeoutError:
            await interaction.followup.send("⏰ Activity lookup timed out. Please try again.", ephemeral=True)
        except StoreError:
            await interaction.followup.send(embed=ErrorEmbeds.database_error(), ephemeral=True)
        except Exception as e:
            logger.error(f"Error in active command: {e}", exc_info=True)
            await interaction.followup.send(
                embed=ErrorEmbeds.command_error("An error occurred while listing active players. Please try again later."),
                ephemeral=True
            )

    @stats.error
    async def stats_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError):
        """Handle cooldown errors for the stats command."""
        if isinstance(error, app_commands.CommandOnCooldown):
            await send_cooldown_message(interaction, "stats", error)
        else:
            raise error

    @search.error
    async def search_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError):
        """Handle cooldown errors for the search command."""
        if isinstance(error, app_commands.CommandOnCooldown):
            await send_cooldown_message(interaction, "search", error)
        else:
            raise error


async def setup(bot):
    await bot.add_cog(PlayerCog(bot))

"""
Shared embed utilities for the stat tracker bot.

Provides reusable embed builders so every command renders player data the
same way.
"""

import discord
from typing import List, Optional
from tracker.constants import LookupConstants, UIConstants
from tracker.data_models.player import (
    BattleEntry, CharacterSummary, PlayerSearchResult, PlayerStats, RecentlyActivePlayer
)
from tracker.utils.season import season_label


def character_label(character_id: Optional[int]) -> str:
    if character_id is None:
        return "None"
    return f"Character {character_id}"


def region_label(region_id: int) -> str:
    if region_id == LookupConstants.NO_REGION:
        return "Unknown"
    return f"Region {region_id}"


def format_rank(rank: Optional[int]) -> str:
    return "Unranked" if rank is None else str(rank)


def format_timestamp(epoch_seconds: Optional[int]) -> str:
    """Discord relative timestamp, or a dash when unknown."""
    if not epoch_seconds:
        return "—"
    return f"<t:{epoch_seconds}:R>"


def format_character_summary(summary: CharacterSummary) -> str:
    lines = [
        f"**Record:** {summary.wins}W / {summary.losses}L ({summary.winrate:.2f}%)",
        f"**Current Season:** {format_rank(summary.current_season_rank)}",
        f"**Previous Season:** {format_rank(summary.previous_season_rank)}",
    ]
    if summary.best_matchup is not None:
        lines.append(f"**Best Matchup:** {character_label(summary.best_matchup)}")
    if summary.worst_matchup is not None:
        lines.append(f"**Worst Matchup:** {character_label(summary.worst_matchup)}")
    return "\n".join(lines)


def format_battle_line(battle: BattleEntry, public_id: str) -> str:
    """One-line battle summary from the point of view of public_id."""
    side = 1 if battle.player1_public_id == public_id else 2
    if side == 1:
        opponent_name, opponent_character = battle.player2_name, battle.player2_character_id
        rounds = f"{battle.player1_rounds_won}-{battle.player2_rounds_won}"
    else:
        opponent_name, opponent_character = battle.player1_name, battle.player1_character_id
        rounds = f"{battle.player2_rounds_won}-{battle.player1_rounds_won}"

    result = "W" if battle.winner == side else "L"
    mode = battle.battle_type.value.replace("_", " ")
    return (f"`{result}` {rounds} vs **{opponent_name}** ({character_label(opponent_character)}) "
            f"· {mode} · {season_label(battle.game_version)} season")


def build_player_stats_embed(stats: PlayerStats) -> discord.Embed:
    """
    Build the main stats embed for a player.

    Shows the most played characters first and stays under Discord's
    field limit.

    Args:
        stats: Aggregated player stats

    Returns:
        Formatted Discord embed ready for display
    """
    embed = discord.Embed(
        title=f"{UIConstants.TROPHY_EMOJI} {stats.name}",
        description=(
            f"**Id:** `{stats.public_id}`\n"
            f"**Power:** {stats.power:,}\n"
            f"**Region:** {region_label(stats.region_id)}\n"
            f"**Last Seen:** {format_timestamp(stats.last_active)}"
        ),
        color=UIConstants.DEFAULT_EMBED_COLOR
    )

    if stats.main_character_id is not None:
        main = stats.played_characters[stats.main_character_id]
        embed.add_field(
            name="🎮 Main",
            value=f"{character_label(main.character_id)} · {main.games} games",
            inline=False
        )

    characters = sorted(stats.played_characters.values(), key=lambda s: (-s.games, s.character_id))
    for summary in characters[:UIConstants.MAX_CHARACTER_FIELDS]:
        embed.add_field(
            name=character_label(summary.character_id),
            value=format_character_summary(summary),
            inline=True
        )

    if stats.battles:
        battle_lines = [
            format_battle_line(battle, stats.public_id)
            for battle in stats.battles[:UIConstants.MAX_BATTLE_LINES]
        ]
        embed.add_field(
            name=f"{UIConstants.SWORDS_EMOJI} Recent Battles",
            value="\n".join(battle_lines),
            inline=False
        )
    else:
        embed.add_field(name=f"{UIConstants.SWORDS_EMOJI} Recent Battles", value="No battles recorded.", inline=False)

    hidden = len(characters) - UIConstants.MAX_CHARACTER_FIELDS
    footer = f"{len(stats.battles)} battles recorded"
    if hidden > 0:
        footer += f" · {hidden} more character(s) not shown"
    embed.set_footer(text=footer)

    return embed


def build_search_embed(query: str, results: List[PlayerSearchResult]) -> discord.Embed:
    """Build the search results embed, one field per player."""
    embed = discord.Embed(
        title=f"🔎 Players matching '{query}'",
        color=UIConstants.DEFAULT_EMBED_COLOR
    )
    for result in results[:UIConstants.MAX_EMBED_FIELDS]:
        embed.add_field(
            name=result.name,
            value=f"`{result.public_id}` · {result.power:,} power · {region_label(result.region_id)}",
            inline=False
        )
    if len(results) > UIConstants.MAX_EMBED_FIELDS:
        embed.set_footer(text=f"Showing {UIConstants.MAX_EMBED_FIELDS} of {len(results)} results")
    return embed


def build_active_players_embed(players: List[RecentlyActivePlayer], window_minutes: int) -> discord.Embed:
    """Build the recently active players embed."""
    embed = discord.Embed(
        title=f"🟢 Active in the last {window_minutes} minutes",
        color=UIConstants.SUCCESS_COLOR
    )
    if not players:
        embed.description = "Nobody has played recently."
        return embed

    lines = [
        f"**{player.name}** `{player.public_id}` · {player.power:,} · {format_timestamp(player.last_active)}"
        for player in players
    ]
    description = "\n".join(lines)
    # Embed descriptions are capped at 4096 characters
    if len(description) > 4000:
        description = description[:4000].rsplit("\n", 1)[0] + "\n…"
    embed.description = description
    return embed

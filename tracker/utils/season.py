from tracker.constants import SeasonConstants


def is_current_season(game_version: int) -> bool:
    """True when the game version belongs to the current season."""
    return game_version >= SeasonConstants.SEASON2_MIN_VERSION


def season_label(game_version: int) -> str:
    """Display label for the season a game version belongs to."""
    if is_current_season(game_version):
        return SeasonConstants.CURRENT_SEASON_LABEL
    return SeasonConstants.PREVIOUS_SEASON_LABEL

"""Simulation and tournament running."""

from simulation.runner import (
    GameResult,
    GameLog,
    GameRunner,
    MoveRecord,
    fallback_move,
    save_game_log,
    run_batch,
)
from simulation.tournament import (
    MatchResult,
    TournamentResult,
    CombinationDistribution,
    run_match,
    run_tournament,
    run_gauntlet,
    calculate_elo_ratings,
    analyze_combination_distribution,
)

__all__ = [
    # runner
    "GameResult",
    "GameLog",
    "GameRunner",
    "MoveRecord",
    "fallback_move",
    "save_game_log",
    "run_batch",
    # tournament
    "MatchResult",
    "TournamentResult",
    "CombinationDistribution",
    "run_match",
    "run_tournament",
    "run_gauntlet",
    "calculate_elo_ratings",
    "analyze_combination_distribution",
]

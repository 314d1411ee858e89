"""Tournaments for comparing Thirteen strategies.

Heads-up matches, round-robin tournaments and gauntlets, summarized with
win rates, Wilson confidence intervals and Elo ratings.
"""

from __future__ import annotations

import math
import time
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from simulation.runner import GameRunner
from thirteen_engine.cards import parse_card
from thirteen_engine.rules import get_combination_type

if TYPE_CHECKING:
    from strategies.base import Strategy

_Z_SCORES = {0.90: 1.645, 0.95: 1.96, 0.99: 2.576}


@dataclass
class MatchResult:
    """Result of a heads-up series between two strategies.

    Attributes:
        strategy_a: Name of first strategy.
        strategy_b: Name of second strategy.
        wins_a: Wins by strategy A.
        wins_b: Wins by strategy B.
        draws: Games that hit the move limit.
        total_games: Total games played.
        avg_game_length: Average moves per game.
        avg_rounds: Average rounds per game.
    """

    strategy_a: str
    strategy_b: str
    wins_a: int
    wins_b: int
    draws: int
    total_games: int
    avg_game_length: float
    avg_rounds: float

    @property
    def win_rate_a(self) -> float:
        return self.wins_a / self.total_games if self.total_games else 0.0

    @property
    def win_rate_b(self) -> float:
        return self.wins_b / self.total_games if self.total_games else 0.0

    def confidence_interval(self, confidence: float = 0.95) -> tuple[float, float]:
        """Wilson score interval for strategy A's win rate."""
        n = self.total_games
        if n == 0:
            return (0.0, 1.0)

        z = _Z_SCORES.get(confidence, 2.576)
        p = self.win_rate_a
        z2 = z * z

        denominator = 1 + z2 / n
        center = (p + z2 / (2 * n)) / denominator
        margin = z * math.sqrt(p * (1 - p) / n + z2 / (4 * n * n)) / denominator

        return (max(0.0, center - margin), min(1.0, center + margin))

    def __str__(self) -> str:
        low, high = self.confidence_interval()
        return (
            f"{self.strategy_a} vs {self.strategy_b}: "
            f"{self.wins_a}-{self.wins_b} ({self.draws} draws) "
            f"[{self.win_rate_a:.1%} win rate, 95% CI: {low:.1%}-{high:.1%}]"
        )


@dataclass
class TournamentResult:
    """Results of a round-robin tournament.

    Attributes:
        strategies: Strategy names in entry order.
        matches: Every match played.
        elo_ratings: Elo rating per strategy.
        win_matrix: ``win_matrix[a][b]`` is how many games a won against b.
        total_games: Total games played.
        duration_seconds: Wall-clock duration.
    """

    strategies: list[str]
    matches: list[MatchResult]
    elo_ratings: dict[str, float]
    win_matrix: dict[str, dict[str, int]]
    total_games: int
    duration_seconds: float

    def get_match(self, strategy_a: str, strategy_b: str) -> MatchResult | None:
        """Find the match between two strategies, in either seat order."""
        wanted = {strategy_a, strategy_b}
        for match in self.matches:
            if {match.strategy_a, match.strategy_b} == wanted:
                return match
        return None

    def standings(self) -> list[tuple[str, float, int, int]]:
        """(strategy, elo, wins, losses) tuples, best Elo first."""
        rows = []
        for name in self.strategies:
            wins = sum(self.win_matrix.get(name, {}).values())
            losses = sum(self.win_matrix.get(other, {}).get(name, 0) for other in self.strategies if other != name)
            rows.append((name, self.elo_ratings.get(name, 0.0), wins, losses))
        return sorted(rows, key=lambda row: row[1], reverse=True)

    def __str__(self) -> str:
        lines = ["Tournament Results", "=" * 50, "", "Standings:"]
        for place, (name, elo, wins, losses) in enumerate(self.standings(), 1):
            lines.append(f"  {place}. {name}: Elo {elo:.0f} ({wins}W-{losses}L)")

        lines.extend(["", "Match Results:"])
        lines.extend(f"  {match}" for match in self.matches)

        lines.append(f"\nTotal: {self.total_games} games in {self.duration_seconds:.1f}s")
        return "\n".join(lines)


@dataclass
class CombinationDistribution:
    """How often a strategy played each combination type, and passed."""

    strategy: str
    total_moves: int
    distribution: dict[str, int] = field(default_factory=dict)

    def percentage(self, combination_type: str) -> float:
        if self.total_moves == 0:
            return 0.0
        return self.distribution.get(combination_type, 0) / self.total_moves


def run_match(
    strategy_a: Strategy,
    strategy_b: Strategy,
    num_games: int,
    start_seed: int = 0,
    alternate_start: bool = True,
) -> MatchResult:
    """Play a heads-up series between two strategies.

    Args:
        strategy_a: First strategy.
        strategy_b: Second strategy.
        num_games: Number of games to play.
        start_seed: Seed of the first deal; each game uses the next seed.
        alternate_start: Swap seats on every other game.

    Returns:
        MatchResult with statistics.
    """
    tally = Counter()
    total_moves = 0
    total_rounds = 0

    forward = GameRunner([strategy_a, strategy_b], log_moves=False)
    swapped = GameRunner([strategy_b, strategy_a], log_moves=False)

    for i in range(num_games):
        is_swapped = alternate_start and i % 2 == 1
        runner = swapped if is_swapped else forward
        result, _ = runner.run_game(seed=start_seed + i)

        if result.winner is None:
            tally["draw"] += 1
        elif (result.winner == 0) != is_swapped:
            tally["a"] += 1
        else:
            tally["b"] += 1

        total_moves += result.move_count
        total_rounds += result.rounds_played

    return MatchResult(
        strategy_a=strategy_a.name,
        strategy_b=strategy_b.name,
        wins_a=tally["a"],
        wins_b=tally["b"],
        draws=tally["draw"],
        total_games=num_games,
        avg_game_length=total_moves / num_games if num_games > 0 else 0,
        avg_rounds=total_rounds / num_games if num_games > 0 else 0,
    )


def calculate_elo_ratings(
    matches: list[MatchResult],
    initial_elo: float = 1500.0,
    k_factor: float = 32.0,
    max_iterations: int = 100,
) -> dict[str, float]:
    """Fit Elo ratings to match results.

    Ratings are updated over all matches repeatedly until no rating moves
    by more than 0.1 in a pass, or ``max_iterations`` passes have run.

    Args:
        matches: Match results to fit.
        initial_elo: Starting rating for every strategy.
        k_factor: Update step size.
        max_iterations: Cap on full passes over ``matches``.

    Returns:
        Dict mapping strategy name to rating.
    """
    ratings: dict[str, float] = {}
    for match in matches:
        ratings.setdefault(match.strategy_a, initial_elo)
        ratings.setdefault(match.strategy_b, initial_elo)

    played = [match for match in matches if match.total_games > 0]
    if not played:
        return ratings

    for _ in range(max_iterations):
        previous = dict(ratings)

        for match in played:
            a, b = match.strategy_a, match.strategy_b
            expected_a = 1 / (1 + 10 ** ((ratings[b] - ratings[a]) / 400))
            score_a = (match.wins_a + 0.5 * match.draws) / match.total_games
            step = k_factor * match.total_games * (score_a - expected_a) / len(matches)
            ratings[a] += step
            ratings[b] -= step

        if max(abs(ratings[name] - previous[name]) for name in ratings) < 0.1:
            break

    return ratings


def run_tournament(
    strategies: list[Strategy],
    games_per_match: int = 100,
    start_seed: int = 0,
) -> TournamentResult:
    """Run a heads-up round robin between strategies.

    Every pair plays ``games_per_match`` games on fresh seeds.

    Args:
        strategies: Competing strategies. Names should be distinct.
        games_per_match: Games per pairing.
        start_seed: Seed of the first deal.

    Returns:
        TournamentResult with all statistics.
    """
    start_time = time.perf_counter()

    matches = []
    win_matrix: dict[str, dict[str, int]] = defaultdict(dict)
    next_seed = start_seed

    for i, strategy_a in enumerate(strategies):
        for strategy_b in strategies[i + 1 :]:
            match = run_match(strategy_a, strategy_b, num_games=games_per_match, start_seed=next_seed)
            matches.append(match)
            win_matrix[match.strategy_a][match.strategy_b] = match.wins_a
            win_matrix[match.strategy_b][match.strategy_a] = match.wins_b
            next_seed += games_per_match

    return TournamentResult(
        strategies=[s.name for s in strategies],
        matches=matches,
        elo_ratings=calculate_elo_ratings(matches),
        win_matrix=dict(win_matrix),
        total_games=sum(m.total_games for m in matches),
        duration_seconds=time.perf_counter() - start_time,
    )


def run_gauntlet(
    challenger: Strategy,
    opponents: list[Strategy],
    games_per_opponent: int = 100,
    start_seed: int = 0,
) -> list[MatchResult]:
    """Play one strategy against each opponent in turn."""
    return [
        run_match(challenger, opponent, num_games=games_per_opponent, start_seed=start_seed + i * games_per_opponent)
        for i, opponent in enumerate(opponents)
    ]


def analyze_combination_distribution(
    strategy: Strategy,
    opponent: Strategy,
    num_games: int = 100,
    start_seed: int = 0,
) -> CombinationDistribution:
    """Count the combination types ``strategy`` plays from seat 0.

    Passes are counted under ``"pass"``.
    """
    distribution: Counter[str] = Counter()
    runner = GameRunner([strategy, opponent], log_moves=True)

    for i in range(num_games):
        _, log = runner.run_game(seed=start_seed + i)
        for record in log.moves:
            if record.player != 0:
                continue
            if record.cards:
                kind = get_combination_type([parse_card(text) for text in record.cards]).value
            else:
                kind = "pass"
            distribution[kind] += 1

    return CombinationDistribution(
        strategy=strategy.name,
        total_moves=sum(distribution.values()),
        distribution=dict(distribution),
    )

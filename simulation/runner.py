"""Game runner for Thirteen simulations."""

from __future__ import annotations

import json
import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from thirteen_engine.executor import IllegalMoveError, execute_move
from thirteen_engine.move_generator import find_all_valid_moves
from thirteen_engine.state import MAX_PLAYERS, MIN_PLAYERS, create_initial_state

if TYPE_CHECKING:
    from thirteen_engine.cards import Card
    from thirteen_engine.state import GameState
    from strategies.base import Strategy

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a completed game."""

    game_id: str
    winner: int | None  # Seat index, or None for draw
    turns: int
    rounds_played: int
    rounds_won: tuple[int, ...]
    cards_left: tuple[int, ...]
    player_strategies: tuple[str, ...]
    seed: int | None
    duration_ms: float
    move_count: int
    illegal_moves: int = 0


@dataclass
class MoveRecord:
    """Record of a single move."""

    turn: int
    player: int
    cards: list[str]  # Empty for a pass
    state_after: dict


@dataclass
class GameLog:
    """Complete log of a game."""

    game_id: str
    timestamp: str
    seed: int | None
    player_strategies: tuple[str, ...]
    initial_state: dict
    moves: list[MoveRecord] = field(default_factory=list)
    result: GameResult | None = None


class GameRunner:
    """Runs Thirteen games between two to four strategies."""

    def __init__(
        self,
        strategies: Sequence[Strategy],
        max_turns: int = 2000,
        log_moves: bool = True,
    ):
        """Initialize the game runner.

        Args:
            strategies: One strategy per seat, seat 0 first.
            max_turns: Maximum moves before declaring a draw.
            log_moves: Whether to log individual moves.
        """
        if not MIN_PLAYERS <= len(strategies) <= MAX_PLAYERS:
            raise ValueError(f"Need {MIN_PLAYERS}-{MAX_PLAYERS} strategies, got {len(strategies)}")
        self.strategies = tuple(strategies)
        self.max_turns = max_turns
        self.log_moves = log_moves

    def run_game(self, seed: int | None = None) -> tuple[GameResult, GameLog | None]:
        """Run a single game.

        Args:
            seed: Random seed for the deal.

        Returns:
            Tuple of (result, log). Log is None if log_moves is False.
        """
        start_time = time.perf_counter()
        game_id = str(uuid.uuid4())
        names = tuple(strategy.name for strategy in self.strategies)

        state = create_initial_state(num_players=len(self.strategies), seed=seed)

        game_log = None
        if self.log_moves:
            game_log = GameLog(
                game_id=game_id,
                timestamp=datetime.now().isoformat(),
                seed=seed,
                player_strategies=names,
                initial_state=self._state_to_dict(state),
            )

        move_count = 0
        illegal_moves = 0

        while not state.is_game_over and move_count < self.max_turns:
            player = state.current_player
            strategy = self.strategies[player]
            cards = strategy.take_turn(
                list(state.current_hand),
                list(state.play_pile),
                state.current_turn,
                state.all_hands,
            )

            try:
                new_state = execute_move(state, cards)
            except IllegalMoveError as e:
                illegal_moves += 1
                logger.warning(f"{strategy.name} (player {player}) made an illegal move: {e}")
                cards = fallback_move(state)
                new_state = execute_move(state, cards)

            move_count += 1

            if game_log:
                game_log.moves.append(
                    MoveRecord(
                        turn=state.current_turn,
                        player=player,
                        cards=[str(c) for c in cards],
                        state_after=self._state_to_dict(new_state),
                    )
                )

            state = new_state

        if not state.is_game_over:
            logger.info(f"Game {game_id} reached {self.max_turns} moves without a winner")

        duration_ms = (time.perf_counter() - start_time) * 1000

        result = GameResult(
            game_id=game_id,
            winner=state.winner,
            turns=state.current_turn,
            rounds_played=state.round_number,
            rounds_won=state.rounds_won,
            cards_left=tuple(len(hand) for hand in state.hands),
            player_strategies=names,
            seed=seed,
            duration_ms=duration_ms,
            move_count=move_count,
            illegal_moves=illegal_moves,
        )

        if game_log:
            game_log.result = result

        return result, game_log

    def _state_to_dict(self, state: GameState) -> dict:
        """Convert game state to a dictionary for logging."""
        return {
            "turn": state.current_turn,
            "round": state.round_number,
            "current_player": state.current_player,
            "play_pile": [str(c) for c in state.play_pile],
            "consecutive_passes": state.consecutive_passes,
            "hands": [[str(c) for c in hand] for hand in state.hands],
            "rounds_won": list(state.rounds_won),
        }


def fallback_move(state: GameState) -> list[Card]:
    """Legal stand-in for a rejected move: pass if allowed, else lead the lowest card."""
    if state.play_pile:
        return []
    moves = find_all_valid_moves(state.current_hand, state.play_pile, state.current_turn, state.all_hands)
    return min(moves, key=lambda move: move[0].value)


def save_game_log(log: GameLog, base_dir: str = "logs/games") -> Path:
    """Save a game log to disk.

    Args:
        log: Game log to save.
        base_dir: Base directory for logs.

    Returns:
        Path to the saved file.
    """
    date_str = log.timestamp[:10]  # YYYY-MM-DD
    dir_path = Path(base_dir) / date_str
    dir_path.mkdir(parents=True, exist_ok=True)

    file_path = dir_path / f"game_{log.game_id}.json"

    data = {
        "game_id": log.game_id,
        "timestamp": log.timestamp,
        "seed": log.seed,
        "player_strategies": log.player_strategies,
        "initial_state": log.initial_state,
        "moves": [
            {
                "turn": m.turn,
                "player": m.player,
                "cards": m.cards,
                "state_after": m.state_after,
            }
            for m in log.moves
        ],
        "result": {
            "winner": log.result.winner,
            "turns": log.result.turns,
            "rounds_played": log.result.rounds_played,
            "rounds_won": log.result.rounds_won,
            "cards_left": log.result.cards_left,
            "duration_ms": log.result.duration_ms,
            "move_count": log.result.move_count,
            "illegal_moves": log.result.illegal_moves,
        }
        if log.result
        else None,
    }

    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    return file_path


def run_batch(
    strategies: Sequence[Strategy],
    num_games: int,
    start_seed: int = 0,
    log_moves: bool = False,
) -> list[GameResult]:
    """Run multiple games with the same seating.

    Args:
        strategies: One strategy per seat.
        num_games: Number of games to run.
        start_seed: Starting seed (incremented for each game).
        log_moves: Whether to log moves (slower).

    Returns:
        List of game results.
    """
    runner = GameRunner(strategies, log_moves=log_moves)
    return [runner.run_game(seed=start_seed + i)[0] for i in range(num_games)]

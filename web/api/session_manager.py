"""Game session management for the web API."""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Sequence

from simulation.runner import fallback_move
from strategies.personas import UnknownPersonaError, get_persona, list_personas
from thirteen_engine.executor import IllegalMoveError, execute_move, transition_events
from thirteen_engine.move_generator import find_all_valid_moves
from thirteen_engine.rules import get_combination_type
from thirteen_engine.state import MAX_PLAYERS, MIN_PLAYERS, create_initial_state

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from thirteen_engine.cards import Card
    from thirteen_engine.state import GameState
    from strategies.base import Strategy


class PlayerType(str, Enum):
    """Type of player."""
    HUMAN = "human"
    AI = "ai"


@dataclass
class PlayerConfig:
    """Configuration for a seat in a game session."""
    player_type: PlayerType
    persona: str | None = None  # None for human players
    strategy_params: dict[str, Any] = field(default_factory=dict)


@dataclass
class GameSession:
    """An active game session: one table, at most one human seat."""

    id: str
    player_configs: tuple[PlayerConfig, ...]
    state: GameState
    strategies: tuple[Strategy | None, ...]
    created_at: datetime
    move_history: list[dict] = field(default_factory=list)

    @property
    def current_player_config(self) -> PlayerConfig:
        return self.player_configs[self.state.current_player]

    @property
    def is_human_turn(self) -> bool:
        """Whether a human player needs to act."""
        return not self.state.is_game_over and self.current_player_config.player_type == PlayerType.HUMAN

    @property
    def human_seat(self) -> int | None:
        for seat, config in enumerate(self.player_configs):
            if config.player_type == PlayerType.HUMAN:
                return seat
        return None

    @property
    def legal_moves(self) -> list[list[Card]]:
        """Legal plays for the player to act (passing not included)."""
        if self.state.is_game_over:
            return []
        state = self.state
        return find_all_valid_moves(state.current_hand, state.play_pile, state.current_turn, state.all_hands)

    @property
    def can_pass(self) -> bool:
        return not self.state.is_game_over and bool(self.state.play_pile)

    def execute_move(self, cards: Sequence[Card]) -> GameState:
        """Apply a move for the current player and record it.

        Raises:
            IllegalMoveError: If the move is not legal.
        """
        player = self.state.current_player
        old_state = self.state
        self.state = execute_move(self.state, cards)

        events = transition_events(old_state, self.state, cards)
        move_record = {
            "turn": old_state.current_turn,
            "round": old_state.round_number,
            "player": player,
            "cards": [card.to_dict() for card in cards],
            "combination": get_combination_type(cards).value if cards else None,
            "events": [event.type.value for event in events],
            "timestamp": datetime.now().isoformat(),
        }
        self.move_history.append(move_record)

        if self.state.is_game_over:
            logger.info(f"Game {self.id} won by player {self.state.winner} on turn {old_state.current_turn}")

        return self.state

    def play(self, cards: Sequence[Card]) -> GameState:
        """Play ``cards`` for the current player."""
        if not cards:
            raise IllegalMoveError("Select at least one card, or pass")
        return self.execute_move(cards)

    def pass_turn(self) -> GameState:
        """Pass for the current player."""
        return self.execute_move([])

    def to_client_state(self, viewer: int | None = 0) -> dict:
        """Convert game state to client-friendly format.

        Args:
            viewer: Seat whose hand is revealed. Other hands show only counts.
        """
        state = self.state

        return {
            "game_id": self.id,
            "current_player": state.current_player,
            "current_turn": state.current_turn,
            "round_number": state.round_number,
            "consecutive_passes": state.consecutive_passes,
            "last_player_to_play": state.last_player_to_play,
            "play_pile": [_card_to_dict(c) for c in state.play_pile],
            "pile_type": get_combination_type(state.play_pile).value if state.play_pile else None,
            "winner": state.winner,
            "is_game_over": state.is_game_over,
            "can_pass": self.can_pass,
            "players": [
                {
                    "index": i,
                    "type": config.player_type.value,
                    "persona": config.persona,
                    "persona_name": get_persona(config.persona).name if config.persona else None,
                    "hand": (
                        [_card_to_dict(c) for c in state.hands[i]]
                        if i == viewer
                        else None
                    ),
                    "hand_count": len(state.hands[i]),
                    "rounds_won": state.rounds_won[i],
                    "turns": state.player_turns[i],
                }
                for i, config in enumerate(self.player_configs)
            ],
        }

    def moves_to_client(self, moves: list[list[Card]]) -> list[dict]:
        """Convert candidate plays to client-friendly format."""
        return [
            {
                "index": i,
                "type": get_combination_type(move).value,
                "cards": [_card_to_dict(c) for c in move],
                "description": " ".join(str(c) for c in move),
            }
            for i, move in enumerate(moves)
        ]


def _card_to_dict(card: Card) -> dict:
    """Convert a Card to a dictionary."""
    return {
        **card.to_dict(),
        "value": card.value,
        "rank_name": card.rank.name,
        "suit_name": card.suit.name,
        "display": str(card),
    }


class GameSessionManager:
    """Manages all active game sessions."""

    def __init__(self, ai_delay: float = 0.0):
        """Initialize the manager.

        Args:
            ai_delay: Seconds to pause between consecutive AI moves.
        """
        self._sessions: dict[str, GameSession] = {}
        self._strategy_factory = StrategyFactory()
        self.ai_delay = ai_delay

    def create_session(
        self,
        player_configs: Sequence[PlayerConfig],
        seed: int | None = None,
    ) -> GameSession:
        """Create a new game session.

        Raises:
            ValueError: For a bad seat count, more than one human, or an
                unknown persona.
        """
        configs = tuple(
            replace(c, persona=(c.persona or "random").lower())
            if c.player_type == PlayerType.AI
            else replace(c, persona=None)
            for c in player_configs
        )
        if not MIN_PLAYERS <= len(configs) <= MAX_PLAYERS:
            raise ValueError(f"A game needs {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(configs)}")
        if sum(1 for c in configs if c.player_type == PlayerType.HUMAN) > 1:
            raise ValueError("Only one human player is supported per game")

        session_id = str(uuid.uuid4())

        strategies = tuple(
            self._strategy_factory.create(config.persona, config.strategy_params)
            if config.player_type == PlayerType.AI
            else None
            for config in configs
        )

        state = create_initial_state(num_players=len(configs), seed=seed)

        session = GameSession(
            id=session_id,
            player_configs=configs,
            state=state,
            strategies=strategies,
            created_at=datetime.now(),
        )

        self._sessions[session_id] = session
        logger.info(f"Created game {session_id} with {len(configs)} players")
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def delete_session(self, session_id: str) -> bool:
        """Delete a session."""
        if session_id in self._sessions:
            del self._sessions[session_id]
            return True
        return False

    def list_sessions(self) -> list[dict]:
        """List all active sessions."""
        return [
            {
                "id": s.id,
                "created_at": s.created_at.isoformat(),
                "current_turn": s.state.current_turn,
                "round_number": s.state.round_number,
                "is_game_over": s.state.is_game_over,
                "winner": s.state.winner,
                "players": [
                    {"type": config.player_type.value, "persona": config.persona}
                    for config in s.player_configs
                ],
            }
            for s in self._sessions.values()
        ]

    def run_ai_turn(self, session: GameSession) -> list[Card] | None:
        """Play one move for the AI whose turn it is.

        Returns:
            The cards played (empty for a pass), or None if no AI is to act.
        """
        if session.state.is_game_over or session.is_human_turn:
            return None

        state = session.state
        player = state.current_player
        strategy = session.strategies[player]
        if strategy is None:
            return None

        cards = strategy.take_turn(list(state.current_hand), list(state.play_pile), state.current_turn, state.all_hands)
        logger.debug(f"AI turn: player={player}, strategy={strategy.name}, cards={[str(c) for c in cards]}")

        try:
            session.execute_move(cards)
        except IllegalMoveError as e:
            logger.warning(f"{strategy.name} (player {player}) made an illegal move: {e}")
            cards = fallback_move(state)
            session.execute_move(cards)

        return cards

    async def run_ai_turns_until_human(self, session: GameSession) -> list[list[Card]]:
        """Run AI turns until it's a human's turn or the game ends.

        Returns:
            The moves played, in order.
        """
        results = []
        while not session.state.is_game_over and not session.is_human_turn:
            cards = self.run_ai_turn(session)
            if cards is None:
                break
            results.append(cards)
            await asyncio.sleep(self.ai_delay)
        return results


class StrategyFactory:
    """Builds AI strategies from persona keys."""

    def create(self, name: str, params: dict[str, Any] | None = None) -> Strategy:
        """Create a strategy for persona ``name``.

        Raises:
            ValueError: If ``name`` is not a known persona.
        """
        params = params or {}
        try:
            persona = get_persona(name.lower())
        except UnknownPersonaError:
            raise ValueError(f"Unknown persona: {name}") from None
        return persona.create(seed=params.get("seed"))

    def list_strategies(self) -> dict[str, str]:
        """Persona keys with descriptions."""
        return {persona.key: persona.description for persona in list_personas()}


# Global session manager instance
session_manager = GameSessionManager()

"""Base strategy interface for Thirteen players."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any, Sequence

from thirteen_engine import move_generator

if TYPE_CHECKING:
    from thirteen_engine.cards import Card
    from thirteen_engine.rules import CombinationType


class Strategy:
    """Base class for AI players.

    Subclasses choose one move from the legal candidates; the base class
    supplies candidate generation. A strategy holds no game state, so one
    instance may be reused across turns and games.
    """

    strategy_type: str = "base"

    def __init__(self, persona: str | None = None):
        """Initialize the strategy.

        Args:
            persona: Optional persona key this strategy plays as.
        """
        self.persona = persona
        self.id = str(uuid.uuid4())

    @property
    def name(self) -> str:
        """Human-readable name for this strategy."""
        return self.persona or self.strategy_type

    def take_turn(
        self,
        hand: Sequence[Card],
        pile: Sequence[Card],
        current_turn: int,
        all_hands: Sequence[Sequence[Card]],
    ) -> list[Card]:
        """Choose the cards to play.

        Args:
            hand: This player's hand.
            pile: The combination on the table, empty when leading.
            current_turn: Global turn counter.
            all_hands: Every player's hand.

        Returns:
            Cards to play, or an empty list to pass.
        """
        raise NotImplementedError("Subclasses must implement take_turn")

    def find_all_valid_moves(
        self,
        hand: Sequence[Card],
        pile: Sequence[Card],
        current_turn: int,
        all_hands: Sequence[Sequence[Card]],
    ) -> list[list[Card]]:
        return move_generator.find_all_valid_moves(hand, pile, current_turn, all_hands)

    def find_valid_moves(
        self,
        hand: Sequence[Card],
        pile: Sequence[Card],
        combination_type: CombinationType,
        current_turn: int,
        all_hands: Sequence[Sequence[Card]],
    ) -> list[list[Card]]:
        return move_generator.find_valid_moves(hand, pile, combination_type, current_turn, all_hands)

    def generate_combinations(self, hand: Sequence[Card], combination_type: CombinationType) -> list[list[Card]]:
        return move_generator.generate_combinations(hand, combination_type)

    def data(self) -> dict[str, Any]:
        """Identifying details for logs and API responses."""
        return {"id": self.id, "type": self.strategy_type, "persona": self.persona}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(persona={self.persona!r})"

"""Strategies composed from other strategies."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from strategies.base import Strategy

if TYPE_CHECKING:
    from thirteen_engine.cards import Card


class ComboStrategy(Strategy):
    """Delegates each turn to one of several sub-strategies.

    Subclasses decide which sub-strategy plays by implementing ``select``.
    When ``select`` returns None the combo passes.
    """

    strategy_type = "combo"

    def __init__(self, strategies: Sequence[Strategy] = (), persona: str | None = None):
        super().__init__(persona)
        self.strategies = list(strategies)

    def select(
        self,
        hand: Sequence[Card],
        pile: Sequence[Card],
        current_turn: int,
        all_hands: Sequence[Sequence[Card]],
    ) -> Strategy | None:
        """Pick the sub-strategy that plays this turn."""
        raise NotImplementedError("Subclasses must implement select")

    def take_turn(self, hand, pile, current_turn, all_hands):
        selected = self.select(hand, pile, current_turn, all_hands)
        if selected is None:
            return []
        return selected.take_turn(hand, pile, current_turn, all_hands)

    def data(self):
        return {**super().data(), "strategies": [s.strategy_type for s in self.strategies]}

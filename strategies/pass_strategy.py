"""Strategy that passes whenever the rules allow it."""

from __future__ import annotations

from strategies.base import Strategy
from strategies.random_strategy import RandomStrategy


class PassStrategy(Strategy):
    """Passes unless forced to lead, then defers to a fallback strategy.

    Leading is forced on the opening turn of the game and whenever the pile
    is empty at the start of a round.
    """

    strategy_type = "pass"

    def __init__(self, fallback: Strategy | None = None, persona: str | None = None):
        super().__init__(persona)
        self.fallback = fallback if fallback is not None else RandomStrategy()

    def take_turn(self, hand, pile, current_turn, all_hands):
        if current_turn == 0 or not pile:
            return self.fallback.take_turn(hand, pile, current_turn, all_hands)
        return []

    def data(self):
        return {**super().data(), "fallback": self.fallback.strategy_type}

"""Combo strategy that tries sub-strategies in priority order."""

from __future__ import annotations

from strategies.combo import ComboStrategy


class PrioritizedComboStrategy(ComboStrategy):
    """Plays the move of the first sub-strategy that does not pass.

    Each sub-strategy is consulted at most once per turn; the winning move
    is returned as-is rather than asked for a second time.
    """

    strategy_type = "prioritized_combo"

    def _first_move(self, hand, pile, current_turn, all_hands):
        for strategy in self.strategies:
            move = strategy.take_turn(hand, pile, current_turn, all_hands)
            if move:
                return strategy, move
        return None, []

    def select(self, hand, pile, current_turn, all_hands):
        strategy, _ = self._first_move(hand, pile, current_turn, all_hands)
        return strategy

    def take_turn(self, hand, pile, current_turn, all_hands):
        _, move = self._first_move(hand, pile, current_turn, all_hands)
        return move

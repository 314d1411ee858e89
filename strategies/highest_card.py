"""Strategy that leads with its strongest cards."""

from __future__ import annotations

from strategies.base import Strategy


class HighestCardStrategy(Strategy):
    """Plays the legal combination whose lowest card is highest."""

    strategy_type = "highest_card"

    def take_turn(self, hand, pile, current_turn, all_hands):
        moves = self.find_all_valid_moves(hand, pile, current_turn, all_hands)
        if not moves:
            return []
        return max(moves, key=lambda move: move[0].value)

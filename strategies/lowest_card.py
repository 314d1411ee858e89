"""Strategy that sheds its lowest cards first."""

from __future__ import annotations

from strategies.base import Strategy


class LowestCardStrategy(Strategy):
    """Plays the legal combination whose lowest card is lowest."""

    strategy_type = "lowest_card"

    def take_turn(self, hand, pile, current_turn, all_hands):
        moves = self.find_all_valid_moves(hand, pile, current_turn, all_hands)
        if not moves:
            return []
        return min(moves, key=lambda move: move[0].value)

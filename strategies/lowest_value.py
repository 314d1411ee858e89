"""Strategy minimizing the total value of each play."""

from __future__ import annotations

from strategies.base import Strategy


class LowestValueStrategy(Strategy):
    """Plays the legal combination with the smallest summed card value."""

    strategy_type = "lowest_value"

    def take_turn(self, hand, pile, current_turn, all_hands):
        moves = self.find_all_valid_moves(hand, pile, current_turn, all_hands)
        if not moves:
            return []
        return min(moves, key=lambda move: sum(card.value for card in move))

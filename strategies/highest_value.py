"""Strategy maximizing the total value of each play."""

from __future__ import annotations

from strategies.base import Strategy


class HighestValueStrategy(Strategy):
    """Plays the legal combination with the largest summed card value.

    Bigger combinations carry more value, so this tends to dump long
    straights and consecutive pairs as soon as they are legal.
    """

    strategy_type = "highest_value"

    def take_turn(self, hand, pile, current_turn, all_hands):
        moves = self.find_all_valid_moves(hand, pile, current_turn, all_hands)
        if not moves:
            return []
        return max(moves, key=lambda move: sum(card.value for card in move))

"""Combo strategy that hands each turn to a random sub-strategy."""

from __future__ import annotations

import random
from typing import Sequence

from strategies.base import Strategy
from strategies.combo import ComboStrategy


class RandomComboStrategy(ComboStrategy):
    """Picks a sub-strategy uniformly at random and plays whatever it plays.

    The pick is unconditional: if the chosen strategy passes, so does the
    combo, even when another sub-strategy had a move.
    """

    strategy_type = "random_combo"

    def __init__(
        self,
        strategies: Sequence[Strategy] = (),
        seed: int | None = None,
        rng: random.Random | None = None,
        persona: str | None = None,
    ):
        super().__init__(strategies, persona)
        self._rng = rng if rng is not None else random.Random(seed)

    def select(self, hand, pile, current_turn, all_hands):
        if not self.strategies:
            return None
        return self._rng.choice(self.strategies)

"""Random strategy for baseline testing."""

from __future__ import annotations

import random

from strategies.base import Strategy


class RandomStrategy(Strategy):
    """Strategy that selects legal plays uniformly at random.

    Useful as a baseline and for smoke testing. It never passes voluntarily.
    """

    strategy_type = "random"

    def __init__(
        self,
        seed: int | None = None,
        rng: random.Random | None = None,
        persona: str | None = None,
    ):
        """Initialize the random strategy.

        Args:
            seed: Optional random seed for reproducibility.
            rng: Shared generator to draw from instead of seeding a new one.
            persona: Optional persona key.
        """
        super().__init__(persona)
        self._seed = seed
        self._rng = rng if rng is not None else random.Random(seed)

    def take_turn(self, hand, pile, current_turn, all_hands):
        moves = self.find_all_valid_moves(hand, pile, current_turn, all_hands)
        if not moves:
            return []
        return self._rng.choice(moves)

    def reset_seed(self, seed: int | None = None) -> None:
        """Reset the random number generator with a new seed."""
        self._seed = seed
        self._rng = random.Random(seed)

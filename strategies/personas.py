"""Named AI personas offered to players.

Each persona pairs a display name and description with a factory that
builds a configured strategy. Factories take a seed so that any random
component of the persona is reproducible.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable

from strategies.base import Strategy
from strategies.highest_card import HighestCardStrategy
from strategies.highest_value import HighestValueStrategy
from strategies.lowest_card import LowestCardStrategy
from strategies.lowest_value import LowestValueStrategy
from strategies.pass_strategy import PassStrategy
from strategies.prioritized_combo import PrioritizedComboStrategy
from strategies.random_combo import RandomComboStrategy
from strategies.random_strategy import RandomStrategy

StrategyFactory = Callable[[int | None], Strategy]


class UnknownPersonaError(KeyError):
    """Raised when a persona key is not registered."""

    pass


@dataclass(frozen=True, slots=True)
class Persona:
    """A selectable AI opponent.

    Attributes:
        key: Registry key, e.g. "lowest_card"
        name: Display name, e.g. "Cautious"
        description: One-line summary of how it plays
        factory: Builds a fresh strategy from an optional seed
    """

    key: str
    name: str
    description: str
    factory: StrategyFactory

    def create(self, seed: int | None = None) -> Strategy:
        """Build a strategy for this persona, tagged with its key."""
        strategy = self.factory(seed)
        strategy.persona = self.key
        return strategy

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "name": self.name, "description": self.description}


def _unpredictable(seed: int | None) -> Strategy:
    rng = random.Random(seed)
    return RandomComboStrategy(
        [HighestCardStrategy(), LowestCardStrategy(), RandomStrategy(rng=rng)],
        rng=rng,
    )


PERSONAS: dict[str, Persona] = {
    persona.key: persona
    for persona in (
        Persona(
            "random",
            "Random",
            "Plays a random valid move.",
            lambda seed: RandomStrategy(seed=seed),
        ),
        Persona(
            "lowest_card",
            "Cautious",
            "Plays a combination with the lowest card.",
            lambda seed: LowestCardStrategy(),
        ),
        Persona(
            "highest_card",
            "Aggressive",
            "Plays a combination with the highest card.",
            lambda seed: HighestCardStrategy(),
        ),
        Persona(
            "lowest_value",
            "Low Stakes",
            "Plays the combination with the lowest total value.",
            lambda seed: LowestValueStrategy(),
        ),
        Persona(
            "highest_value",
            "High Stakes",
            "Plays the combination with the highest total value.",
            lambda seed: HighestValueStrategy(),
        ),
        Persona(
            "passer",
            "Passer",
            "Passes whenever possible. When forced to play, plays the lowest card.",
            lambda seed: PassStrategy(fallback=LowestCardStrategy()),
        ),
        Persona(
            "opportunist",
            "Opportunist",
            "Tries to play high-value combos, otherwise plays low-value cards.",
            lambda seed: PrioritizedComboStrategy(
                [HighestValueStrategy(), HighestCardStrategy(), LowestCardStrategy()]
            ),
        ),
        Persona(
            "unpredictable",
            "Unpredictable",
            "Randomly chooses between different strategies.",
            _unpredictable,
        ),
    )
}


def get_persona(key: str) -> Persona:
    """Look up a persona by key.

    Raises:
        UnknownPersonaError: If no persona is registered under ``key``.
    """
    try:
        return PERSONAS[key]
    except KeyError:
        raise UnknownPersonaError(key) from None


def create_strategy(key: str, seed: int | None = None) -> Strategy:
    """Build the strategy for persona ``key``."""
    return get_persona(key).create(seed)


def list_personas() -> list[Persona]:
    """All personas in registration order."""
    return list(PERSONAS.values())

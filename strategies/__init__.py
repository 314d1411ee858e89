"""AI strategies for Thirteen."""

from strategies.base import Strategy
from strategies.combo import ComboStrategy
from strategies.highest_card import HighestCardStrategy
from strategies.highest_value import HighestValueStrategy
from strategies.lowest_card import LowestCardStrategy
from strategies.lowest_value import LowestValueStrategy
from strategies.pass_strategy import PassStrategy
from strategies.personas import (
    PERSONAS,
    Persona,
    UnknownPersonaError,
    create_strategy,
    get_persona,
    list_personas,
)
from strategies.prioritized_combo import PrioritizedComboStrategy
from strategies.random_combo import RandomComboStrategy
from strategies.random_strategy import RandomStrategy

__all__ = [
    "Strategy",
    "ComboStrategy",
    "HighestCardStrategy",
    "HighestValueStrategy",
    "LowestCardStrategy",
    "LowestValueStrategy",
    "PassStrategy",
    "PrioritizedComboStrategy",
    "RandomComboStrategy",
    "RandomStrategy",
    "PERSONAS",
    "Persona",
    "UnknownPersonaError",
    "create_strategy",
    "get_persona",
    "list_personas",
]

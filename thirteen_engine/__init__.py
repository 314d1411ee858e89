"""Thirteen (Tien Len) card game engine."""

from thirteen_engine.cards import Card, Rank, Suit, create_deck, deal, find_lowest, sort_cards
from thirteen_engine.rules import CombinationType, get_combination_type, is_valid_play
from thirteen_engine.move_generator import find_all_valid_moves, generate_combinations
from thirteen_engine.state import GameState, create_initial_state
from thirteen_engine.executor import IllegalMoveError, execute_move

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "create_deck",
    "deal",
    "find_lowest",
    "sort_cards",
    "CombinationType",
    "get_combination_type",
    "is_valid_play",
    "find_all_valid_moves",
    "generate_combinations",
    "GameState",
    "create_initial_state",
    "IllegalMoveError",
    "execute_move",
]

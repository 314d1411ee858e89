"""Combination classification and play validation for Thirteen.

Everything here is a pure function of its arguments. Hands, piles and turn
counters are read, never mutated, and an illegal play is reported as
``False`` rather than raised.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from thirteen_engine.cards import Card, Rank, find_lowest, sort_cards


class CombinationType(str, Enum):
    """Kinds of card combination that can be played."""

    SINGLE = "single"
    PAIR = "pair"
    TRIPLE = "triple"
    STRAIGHT = "straight"
    CONSECUTIVE_PAIRS = "consecutive_pairs"
    FOUR_OF_A_KIND = "four_of_a_kind"
    INVALID = "invalid"

    def __str__(self) -> str:
        return self.value


BOMB_TYPES = frozenset({CombinationType.FOUR_OF_A_KIND, CombinationType.CONSECUTIVE_PAIRS})


def _all_same_rank(cards: Sequence[Card]) -> bool:
    return len({card.rank for card in cards}) == 1


def is_single(cards: Sequence[Card]) -> bool:
    return len(cards) == 1


def is_pair(cards: Sequence[Card]) -> bool:
    return len(cards) == 2 and _all_same_rank(cards)


def is_triple(cards: Sequence[Card]) -> bool:
    return len(cards) == 3 and _all_same_rank(cards)


def is_four_of_a_kind(cards: Sequence[Card]) -> bool:
    return len(cards) == 4 and _all_same_rank(cards)


def is_straight(cards: Sequence[Card]) -> bool:
    """Three or more cards of consecutive rank, with no 2 among them."""
    if len(cards) < 3:
        return False
    ordered = sort_cards(cards)
    if any(card.rank == Rank.TWO for card in ordered):
        return False
    return all(b.rank - a.rank == 1 for a, b in zip(ordered, ordered[1:]))


def is_consecutive_pairs(cards: Sequence[Card]) -> bool:
    """Three or more pairs whose ranks climb by exactly one.

    The cards are sorted and then read two at a time, so each pair must sit
    next to its partner in value order.
    """
    if len(cards) < 6 or len(cards) % 2 != 0:
        return False
    ordered = sort_cards(cards)
    pairs = [ordered[i : i + 2] for i in range(0, len(ordered), 2)]
    if not all(is_pair(pair) for pair in pairs):
        return False
    return all(b[0].rank - a[0].rank == 1 for a, b in zip(pairs, pairs[1:]))


def get_combination_type(cards: Sequence[Card]) -> CombinationType:
    """Classify ``cards`` into exactly one combination type.

    The checks run in a fixed precedence and the first match wins. Anything
    that matches nothing, including an empty selection, is ``INVALID``.
    """
    if is_single(cards):
        return CombinationType.SINGLE
    if is_pair(cards):
        return CombinationType.PAIR
    if is_triple(cards):
        return CombinationType.TRIPLE
    if is_straight(cards):
        return CombinationType.STRAIGHT
    if is_consecutive_pairs(cards):
        return CombinationType.CONSECUTIVE_PAIRS
    if is_four_of_a_kind(cards):
        return CombinationType.FOUR_OF_A_KIND
    return CombinationType.INVALID


def is_bomb_for_single_two(cards: Sequence[Card]) -> bool:
    """Four of a kind or three consecutive pairs."""
    combination_type = get_combination_type(cards)
    if combination_type == CombinationType.FOUR_OF_A_KIND:
        return True
    return combination_type == CombinationType.CONSECUTIVE_PAIRS and len(cards) == 6


def is_bomb_for_pair_of_twos(cards: Sequence[Card]) -> bool:
    """Four consecutive pairs. Four of a kind does not qualify."""
    return get_combination_type(cards) == CombinationType.CONSECUTIVE_PAIRS and len(cards) == 8


def is_valid_play(
    selected: Sequence[Card],
    pile: Sequence[Card],
    hand: Sequence[Card],
    current_turn: int,
    all_hands: Sequence[Sequence[Card]],
) -> bool:
    """Check whether ``selected`` may be played from ``hand`` onto ``pile``.

    Args:
        selected: Cards the player wants to play.
        pile: The combination currently on top of the table (may be empty).
        hand: The acting player's hand.
        current_turn: Global turn counter; 0 is the opening play of the game.
        all_hands: Every player's hand, used to find the lowest card on turn 0.

    Returns:
        True if the play is legal.
    """
    if len(set(selected)) != len(selected):
        return False
    if any(card not in hand for card in selected):
        return False

    selected_type = get_combination_type(selected)
    if selected_type == CombinationType.INVALID:
        return False

    # Bombs only ever answer a lone 2 or a pair of 2s
    if selected_type in BOMB_TYPES:
        if not pile or pile[-1].rank != Rank.TWO:
            return False
        if len(pile) == 1:
            return is_bomb_for_single_two(selected)
        if len(pile) == 2:
            return is_bomb_for_pair_of_twos(selected)
        return False

    if not pile:
        if current_turn == 0:
            lowest = find_lowest(all_hands)
            return lowest is None or lowest in selected
        return True

    if selected_type != get_combination_type(pile):
        return False
    if len(selected) != len(pile):
        return False

    return max(card.value for card in selected) > max(card.value for card in pile)

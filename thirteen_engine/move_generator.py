"""Combination enumeration and legal move generation for Thirteen."""

from __future__ import annotations

from itertools import combinations, product
from typing import Sequence

from thirteen_engine.cards import Card, Rank, sort_cards
from thirteen_engine.rules import CombinationType, is_valid_play

# Order in which find_all_valid_moves concatenates candidates
MOVE_ORDER = (
    CombinationType.SINGLE,
    CombinationType.PAIR,
    CombinationType.TRIPLE,
    CombinationType.STRAIGHT,
    CombinationType.FOUR_OF_A_KIND,
    CombinationType.CONSECUTIVE_PAIRS,
)

MIN_STRAIGHT = 3
MIN_RUN_PAIRS = 3
MAX_RUN_PAIRS = 4


def generate_combinations(hand: Sequence[Card], combination_type: CombinationType) -> list[list[Card]]:
    """Enumerate every combination of ``combination_type`` that ``hand`` can form.

    Each combination is sorted by card value, and the list is stably sorted
    by the value of each combination's lowest card.

    Args:
        hand: Cards to draw from.
        combination_type: The kind of combination wanted.

    Returns:
        List of combinations (empty for ``INVALID``).
    """
    match combination_type:
        case CombinationType.SINGLE:
            found = [[card] for card in hand]
        case CombinationType.PAIR:
            found = _generate_same_rank(hand, 2)
        case CombinationType.TRIPLE:
            found = _generate_same_rank(hand, 3)
        case CombinationType.FOUR_OF_A_KIND:
            found = _generate_same_rank(hand, 4)
        case CombinationType.STRAIGHT:
            found = _generate_straights(hand)
        case CombinationType.CONSECUTIVE_PAIRS:
            found = _generate_consecutive_pairs(hand)
        case _:
            found = []

    ordered = [sort_cards(combo) for combo in found]
    ordered.sort(key=lambda combo: combo[0].value)
    return ordered


def _generate_same_rank(hand: Sequence[Card], size: int) -> list[list[Card]]:
    """All ``size``-card subsets (in index order) whose cards share one rank."""
    return [
        list(group)
        for group in combinations(hand, size)
        if len({card.rank for card in group}) == 1
    ]


def _generate_straights(hand: Sequence[Card]) -> list[list[Card]]:
    eligible = [card for card in hand if card.rank != Rank.TWO]
    if len(eligible) < MIN_STRAIGHT:
        return []

    ranks = sorted({card.rank for card in eligible})
    by_rank = {rank: [card for card in eligible if card.rank == rank] for rank in ranks}

    straights: list[list[Card]] = []
    for start in range(len(ranks)):
        for end in range(start + MIN_STRAIGHT, len(ranks) + 1):
            window = ranks[start:end]
            if window[-1] - window[0] != len(window) - 1:
                # Ranks are distinct and sorted, so a gap here means every
                # longer window from this start is broken too.
                break
            straights.extend(list(choice) for choice in product(*(by_rank[r] for r in window)))
    return straights


def _generate_consecutive_pairs(hand: Sequence[Card]) -> list[list[Card]]:
    by_rank: dict[Rank, list[Card]] = {}
    for card in sort_cards(hand):
        by_rank.setdefault(card.rank, []).append(card)

    pairs = [cards[:2] for cards in by_rank.values() if len(cards) >= 2]
    pairs.sort(key=lambda pair: pair[0].value)
    if len(pairs) < MIN_RUN_PAIRS:
        return []

    runs: list[list[list[Card]]] = [[pairs[0]]]
    for pair in pairs[1:]:
        if pair[0].rank == runs[-1][-1][0].rank + 1:
            runs[-1].append(pair)
        else:
            runs.append([pair])

    found: list[list[Card]] = []
    for run in runs:
        found.extend(derive_sub_consecutive_pairs(run))
    return found


def derive_sub_consecutive_pairs(pairs: Sequence[Sequence[Card]]) -> list[list[Card]]:
    """Extract every 3-pair and 4-pair window from a run of consecutive pairs.

    Longer windows are never produced, however long the run is.

    Args:
        pairs: Consecutive-rank pairs, lowest rank first.

    Returns:
        Flattened windows, ordered by start position then length.
    """
    windows: list[list[Card]] = []
    for start in range(len(pairs) - MIN_RUN_PAIRS + 1):
        for end in range(start + MIN_RUN_PAIRS, min(start + MAX_RUN_PAIRS, len(pairs)) + 1):
            windows.append([card for pair in pairs[start:end] for card in pair])
    return windows


def find_valid_moves(
    hand: Sequence[Card],
    pile: Sequence[Card],
    combination_type: CombinationType,
    current_turn: int,
    all_hands: Sequence[Sequence[Card]],
) -> list[list[Card]]:
    """Generated combinations of one type that are legal to play right now."""
    return [
        combo
        for combo in generate_combinations(hand, combination_type)
        if is_valid_play(combo, pile, hand, current_turn, all_hands)
    ]


def find_all_valid_moves(
    hand: Sequence[Card],
    pile: Sequence[Card],
    current_turn: int,
    all_hands: Sequence[Sequence[Card]],
) -> list[list[Card]]:
    """Every legal play across all combination types.

    Candidates are grouped by type in ``MOVE_ORDER``; within a group they
    keep generation order. Passing is not included.
    """
    moves: list[list[Card]] = []
    for combination_type in MOVE_ORDER:
        moves.extend(find_valid_moves(hand, pile, combination_type, current_turn, all_hands))
    return moves

"""Tests for strategies composed from other strategies."""

import pytest

from strategies.base import Strategy
from strategies.combo import ComboStrategy
from strategies.highest_card import HighestCardStrategy
from strategies.lowest_card import LowestCardStrategy
from strategies.pass_strategy import PassStrategy
from strategies.prioritized_combo import PrioritizedComboStrategy
from strategies.random_combo import RandomComboStrategy
from thirteen_engine.cards import parse_cards


class FixedStrategy(Strategy):
    """Always returns the same move and counts how often it is asked."""

    strategy_type = "fixed"

    def __init__(self, move):
        super().__init__()
        self.move = move
        self.calls = 0

    def take_turn(self, hand, pile, current_turn, all_hands):
        self.calls += 1
        return list(self.move)


HAND = parse_cards("3♠ 4♦ 5♣ 6♥")
PILE = parse_cards("3♥")


class TestComboStrategy:
    def test_select_not_implemented(self):
        with pytest.raises(NotImplementedError, match="Subclasses must implement select"):
            ComboStrategy([LowestCardStrategy()]).take_turn(HAND, PILE, 2, [HAND])

    def test_data_lists_substrategies(self):
        combo = PrioritizedComboStrategy([HighestCardStrategy(), LowestCardStrategy()])
        data = combo.data()
        assert data["type"] == "prioritized_combo"
        assert data["strategies"] == ["highest_card", "lowest_card"]


class TestPrioritizedCombo:
    def test_first_non_empty_move_wins(self):
        passer = FixedStrategy([])
        player = FixedStrategy(parse_cards("6♥"))
        combo = PrioritizedComboStrategy([passer, player])
        assert combo.take_turn(HAND, PILE, 2, [HAND]) == parse_cards("6♥")

    def test_each_strategy_asked_once(self):
        passer = FixedStrategy([])
        player = FixedStrategy(parse_cards("6♥"))
        unused = FixedStrategy(parse_cards("5♣"))
        PrioritizedComboStrategy([passer, player, unused]).take_turn(HAND, PILE, 2, [HAND])
        assert (passer.calls, player.calls, unused.calls) == (1, 1, 0)

    def test_passes_when_all_pass(self):
        combo = PrioritizedComboStrategy([PassStrategy(), FixedStrategy([])])
        assert combo.take_turn(HAND, PILE, 2, [HAND]) == []

    def test_select_returns_strategy(self):
        player = FixedStrategy(parse_cards("6♥"))
        combo = PrioritizedComboStrategy([FixedStrategy([]), player])
        assert combo.select(HAND, PILE, 2, [HAND]) is player

    def test_select_none_when_all_pass(self):
        combo = PrioritizedComboStrategy([FixedStrategy([])])
        assert combo.select(HAND, PILE, 2, [HAND]) is None


class TestRandomCombo:
    def test_no_strategies_passes(self):
        assert RandomComboStrategy([]).take_turn(HAND, PILE, 2, [HAND]) == []

    def test_delegates_even_when_chosen_strategy_passes(self):
        combo = RandomComboStrategy([FixedStrategy([])], seed=1)
        assert combo.take_turn(HAND, PILE, 2, [HAND]) == []

    def test_picks_from_strategies(self):
        low = FixedStrategy(parse_cards("4♦"))
        high = FixedStrategy(parse_cards("6♥"))
        combo = RandomComboStrategy([low, high], seed=3)
        moves = {tuple(combo.take_turn(HAND, PILE, 2, [HAND])) for _ in range(50)}
        assert moves == {tuple(parse_cards("4♦")), tuple(parse_cards("6♥"))}

    def test_seeded_is_reproducible(self):
        def picks(seed):
            combo = RandomComboStrategy([HighestCardStrategy(), LowestCardStrategy()], seed=seed)
            return [combo.select(HAND, PILE, 2, [HAND]).strategy_type for _ in range(10)]

        assert picks(12) == picks(12)

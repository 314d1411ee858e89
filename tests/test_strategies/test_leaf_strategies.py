"""Tests for the base strategy and single-policy strategies."""

import random

import pytest

from strategies.base import Strategy
from strategies.highest_card import HighestCardStrategy
from strategies.highest_value import HighestValueStrategy
from strategies.lowest_card import LowestCardStrategy
from strategies.lowest_value import LowestValueStrategy
from strategies.pass_strategy import PassStrategy
from strategies.random_strategy import RandomStrategy
from thirteen_engine.cards import parse_cards
from thirteen_engine.rules import CombinationType, is_valid_play


def cards(text):
    return parse_cards(text)


LEAD_HAND = cards("3♠ 4♦ 5♣ 6♥")


class TestBaseStrategy:
    def test_take_turn_not_implemented(self):
        with pytest.raises(NotImplementedError, match="Subclasses must implement take_turn"):
            Strategy().take_turn(LEAD_HAND, [], 1, [LEAD_HAND])

    def test_find_all_valid_moves(self):
        hand = cards("3♠ 3♦ 4♣ 5♠")
        assert len(Strategy().find_all_valid_moves(hand, [], 1, [hand])) == 7

    def test_find_valid_moves_by_type(self):
        hand = cards("3♠ 3♦ 4♣ 5♠")
        moves = Strategy().find_valid_moves(hand, [], CombinationType.PAIR, 1, [hand])
        assert moves == [cards("3♠ 3♦")]

    def test_data(self):
        strategy = LowestCardStrategy(persona="lowest_card")
        data = strategy.data()
        assert data["type"] == "lowest_card"
        assert data["persona"] == "lowest_card"
        assert data["id"] == strategy.id

    def test_name_prefers_persona(self):
        assert LowestCardStrategy().name == "lowest_card"
        assert LowestCardStrategy(persona="cautious").name == "cautious"


class TestLowestCard:
    def test_leads_lowest(self):
        assert LowestCardStrategy().take_turn(LEAD_HAND, [], 1, [LEAD_HAND]) == cards("3♠")

    def test_passes_without_moves(self):
        hand = cards("3♠ 4♦")
        assert LowestCardStrategy().take_turn(hand, cards("2♥"), 4, [hand]) == []

    def test_respects_opening_rule(self):
        hand = cards("4♦ 5♣ 6♥ 7♠")
        other = cards("3♠ 9♦")
        assert LowestCardStrategy().take_turn(hand, [], 0, [hand, other]) == []


class TestHighestCard:
    def test_leads_highest_single(self):
        assert HighestCardStrategy().take_turn(LEAD_HAND, [], 1, [LEAD_HAND]) == cards("6♥")

    def test_bombs_a_two_with_highest_pairs(self):
        hand = cards("3♠ 3♦ 4♠ 4♦ 5♠ 5♦ 6♠ 6♦")
        move = HighestCardStrategy().take_turn(hand, cards("2♠"), 4, [hand])
        assert move == cards("4♠ 4♦ 5♠ 5♦ 6♠ 6♦")


class TestValueStrategies:
    def test_lowest_value(self):
        assert LowestValueStrategy().take_turn(LEAD_HAND, [], 1, [LEAD_HAND]) == cards("3♠")

    def test_highest_value_tie_goes_to_first_candidate(self):
        # 3♠4♦5♣6♥ and 4♦5♣6♥ both sum to 30
        move = HighestValueStrategy().take_turn(LEAD_HAND, [], 1, [LEAD_HAND])
        assert move == cards("3♠ 4♦ 5♣ 6♥")


class TestRandom:
    def test_returns_valid_move(self):
        hand = cards("3♠ 3♦ 7♣ 8♥ 9♠ K♦")
        strategy = RandomStrategy(seed=1)
        for _ in range(20):
            move = strategy.take_turn(hand, cards("5♥"), 4, [hand])
            assert is_valid_play(move, cards("5♥"), hand, 4, [hand])

    def test_seeded_is_reproducible(self):
        hand = cards("3♠ 3♦ 7♣ 8♥ 9♠ K♦")
        first = [RandomStrategy(seed=9).take_turn(hand, [], 1, [hand]) for _ in range(3)]
        second = [RandomStrategy(seed=9).take_turn(hand, [], 1, [hand]) for _ in range(3)]
        assert first == second

    def test_shared_rng(self):
        rng = random.Random(4)
        strategy = RandomStrategy(rng=rng)
        assert strategy._rng is rng

    def test_passes_without_moves(self):
        hand = cards("3♠")
        assert RandomStrategy(seed=0).take_turn(hand, cards("2♥"), 3, [hand]) == []


class TestPass:
    def test_passes_when_allowed(self):
        hand = cards("3♠ 9♦")
        assert PassStrategy(fallback=LowestCardStrategy()).take_turn(hand, cards("5♥"), 3, [hand]) == []

    def test_leads_when_pile_empty(self):
        strategy = PassStrategy(fallback=LowestCardStrategy())
        assert strategy.take_turn(LEAD_HAND, [], 7, [LEAD_HAND]) == cards("3♠")

    def test_plays_on_opening_turn(self):
        strategy = PassStrategy(fallback=LowestCardStrategy())
        assert strategy.take_turn(LEAD_HAND, [], 0, [LEAD_HAND]) == cards("3♠")

    def test_default_fallback_is_random(self):
        assert isinstance(PassStrategy().fallback, RandomStrategy)

"""Tests for combination classification and play validation."""

from thirteen_engine.cards import parse_cards
from thirteen_engine.rules import (
    CombinationType,
    get_combination_type,
    is_bomb_for_pair_of_twos,
    is_bomb_for_single_two,
    is_consecutive_pairs,
    is_four_of_a_kind,
    is_pair,
    is_single,
    is_straight,
    is_triple,
    is_valid_play,
)


def cards(text):
    return parse_cards(text)


class TestClassification:
    def test_basic_types(self):
        assert get_combination_type(cards("7♦")) == CombinationType.SINGLE
        assert get_combination_type(cards("7♦ 7♠")) == CombinationType.PAIR
        assert get_combination_type(cards("7♦ 7♠ 7♥")) == CombinationType.TRIPLE
        assert get_combination_type(cards("7♦ 7♠ 7♥ 7♣")) == CombinationType.FOUR_OF_A_KIND

    def test_straight(self):
        assert get_combination_type(cards("3♠ 4♦ 5♣")) == CombinationType.STRAIGHT
        assert get_combination_type(cards("J♠ Q♦ K♣ A♥")) == CombinationType.STRAIGHT

    def test_straight_order_independent(self):
        assert get_combination_type(cards("5♣ 3♠ 4♦")) == CombinationType.STRAIGHT

    def test_straight_cannot_contain_two(self):
        assert not is_straight(cards("K♠ A♦ 2♣"))
        assert get_combination_type(cards("K♠ A♦ 2♣")) == CombinationType.INVALID

    def test_straight_rejects_gaps_and_duplicates(self):
        assert not is_straight(cards("3♠ 4♦ 6♣"))
        assert not is_straight(cards("3♠ 4♦ 4♣ 5♥"))

    def test_consecutive_pairs(self):
        assert get_combination_type(cards("3♠ 3♦ 4♣ 4♥ 5♠ 5♦")) == CombinationType.CONSECUTIVE_PAIRS
        assert is_consecutive_pairs(cards("3♠ 3♦ 4♣ 4♥ 5♠ 5♦ 6♣ 6♥"))

    def test_consecutive_pairs_unsorted_input(self):
        assert is_consecutive_pairs(cards("5♦ 3♠ 4♥ 3♦ 5♠ 4♣"))

    def test_consecutive_pairs_may_include_twos(self):
        assert is_consecutive_pairs(cards("K♠ K♦ A♣ A♥ 2♠ 2♦"))

    def test_consecutive_pairs_rejects_bad_shapes(self):
        assert not is_consecutive_pairs(cards("3♠ 3♦ 4♣ 4♥"))
        assert not is_consecutive_pairs(cards("3♠ 3♦ 4♣ 4♥ 6♠ 6♦"))
        assert not is_consecutive_pairs(cards("3♠ 3♦ 3♣ 4♥ 5♠ 5♦"))

    def test_same_rank_predicates_are_exclusive(self):
        predicates = (is_single, is_pair, is_triple, is_four_of_a_kind, is_straight, is_consecutive_pairs)
        for text, expected in [
            ("7♦", is_single),
            ("7♦ 7♠", is_pair),
            ("7♦ 7♠ 7♥", is_triple),
            ("7♦ 7♠ 7♥ 7♣", is_four_of_a_kind),
        ]:
            matching = [p for p in predicates if p(cards(text))]
            assert matching == [expected], text

    def test_classification_is_repeatable(self):
        combo = cards("5♦ 3♠ 4♥ 3♦ 5♠ 4♣")
        snapshot = list(combo)
        first = get_combination_type(combo)
        assert get_combination_type(combo) == first == CombinationType.CONSECUTIVE_PAIRS
        assert combo == snapshot

    def test_invalid(self):
        assert get_combination_type([]) == CombinationType.INVALID
        assert get_combination_type(cards("3♠ 4♦")) == CombinationType.INVALID
        assert get_combination_type(cards("3♠ 3♦ 4♣ 4♥ 5♠")) == CombinationType.INVALID


class TestBombs:
    def test_four_of_a_kind_beats_single_two_only(self):
        quad = cards("9♠ 9♣ 9♦ 9♥")
        assert is_bomb_for_single_two(quad)
        assert not is_bomb_for_pair_of_twos(quad)

    def test_three_pairs_beat_single_two(self):
        assert is_bomb_for_single_two(cards("3♠ 3♦ 4♣ 4♥ 5♠ 5♦"))
        assert not is_bomb_for_pair_of_twos(cards("3♠ 3♦ 4♣ 4♥ 5♠ 5♦"))

    def test_four_pairs_beat_pair_of_twos(self):
        four_pairs = cards("3♠ 3♦ 4♣ 4♥ 5♠ 5♦ 6♣ 6♥")
        assert is_bomb_for_pair_of_twos(four_pairs)
        assert not is_bomb_for_single_two(four_pairs)


class TestIsValidPlay:
    def test_card_not_in_hand(self):
        hand = cards("3♠ 4♦")
        assert not is_valid_play(cards("5♣"), [], hand, 1, [hand])

    def test_invalid_combination(self):
        hand = cards("3♠ 4♦ 9♣")
        assert not is_valid_play(cards("3♠ 9♣"), [], hand, 1, [hand])

    def test_first_turn_requires_lowest_card(self):
        hand = cards("3♠ 3♦ 4♣")
        other = cards("5♠ 6♦")
        assert is_valid_play(cards("3♠"), [], hand, 0, [hand, other])
        assert is_valid_play(cards("3♠ 3♦"), [], hand, 0, [hand, other])
        assert not is_valid_play(cards("4♣"), [], hand, 0, [hand, other])

    def test_repeated_card_rejected(self):
        hand = cards("2♠ 5♦ 9♣")
        assert not is_valid_play(cards("2♠ 2♠"), cards("A♥ A♦"), hand, 5, [hand])

    def test_first_turn_rule_lifts_after_opening(self):
        hand = cards("3♠ 3♦ 4♣")
        other = cards("5♠ 6♦")
        assert not is_valid_play(cards("4♣"), [], hand, 0, [hand, other])
        assert is_valid_play(cards("4♣"), [], hand, 1, [hand, other])

    def test_first_turn_lowest_card_across_all_hands(self):
        hand = cards("4♠ 5♦")
        other = cards("3♥ 9♦")
        assert not is_valid_play(cards("4♠"), [], hand, 0, [hand, other])

    def test_lead_later_round_accepts_anything(self):
        hand = cards("8♠ 9♦ 10♣")
        assert is_valid_play(cards("8♠ 9♦ 10♣"), [], hand, 12, [hand])

    def test_beat_single(self):
        hand = cards("5♦ 6♣")
        assert is_valid_play(cards("6♣"), cards("5♠"), hand, 3, [hand])
        assert is_valid_play(cards("5♦"), cards("5♠"), hand, 3, [hand])
        assert not is_valid_play(cards("5♦"), cards("5♥"), hand, 3, [hand])

    def test_type_and_length_must_match(self):
        hand = cards("7♠ 7♦ 8♣ 9♥ 10♠")
        assert not is_valid_play(cards("7♠ 7♦"), cards("5♠"), hand, 3, [hand])
        assert not is_valid_play(cards("8♣ 9♥ 10♠"), cards("3♠ 4♦ 5♣ 6♥"), hand, 3, [hand])
        assert is_valid_play(cards("8♣ 9♥ 10♠"), cards("3♠ 4♦ 5♣"), hand, 3, [hand])

    def test_four_of_a_kind_on_single_two(self):
        hand = cards("9♠ 9♣ 9♦ 9♥")
        assert is_valid_play(hand, cards("2♥"), hand, 5, [hand])

    def test_four_of_a_kind_does_not_beat_pair_of_twos(self):
        hand = cards("9♠ 9♣ 9♦ 9♥")
        assert not is_valid_play(hand, cards("2♠ 2♥"), hand, 5, [hand])

    def test_four_pairs_on_pair_of_twos(self):
        hand = cards("3♠ 3♦ 4♣ 4♥ 5♠ 5♦ 6♣ 6♥")
        assert is_valid_play(hand, cards("2♠ 2♥"), hand, 5, [hand])

    def test_bomb_on_non_two_is_rejected(self):
        hand = cards("9♠ 9♣ 9♦ 9♥")
        assert not is_valid_play(hand, cards("A♥"), hand, 5, [hand])

    def test_bomb_cannot_lead(self):
        hand = cards("9♠ 9♣ 9♦ 9♥")
        assert not is_valid_play(hand, [], hand, 5, [hand])

    def test_bomb_cannot_beat_bomb(self):
        hand = cards("10♠ 10♣ 10♦ 10♥")
        assert not is_valid_play(hand, cards("9♠ 9♣ 9♦ 9♥"), hand, 5, [hand])

    def test_bomb_on_triple_twos_is_rejected(self):
        hand = cards("9♠ 9♣ 9♦ 9♥")
        assert not is_valid_play(hand, cards("2♠ 2♣ 2♥"), hand, 5, [hand])

    def test_two_beats_ace(self):
        hand = cards("2♠")
        assert is_valid_play(hand, cards("A♥"), hand, 5, [hand])

"""Card, Suit, and Rank models for Thirteen."""

from __future__ import annotations

import random
from enum import IntEnum
from functools import total_ordering
from typing import ClassVar, Iterable, Sequence

HAND_SIZE = 13


class Suit(IntEnum):
    """Card suits ordered by Thirteen tiebreak precedence (Spades lowest)."""

    SPADES = 0
    CLUBS = 1
    DIAMONDS = 2
    HEARTS = 3

    def __str__(self) -> str:
        return self.symbol

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]

    @property
    def letter(self) -> str:
        return self.name[0]

    @classmethod
    def from_symbol(cls, symbol: str) -> Suit:
        """Look up a suit by symbol (``♠``) or letter (``S``/``s``)."""
        for suit, sym in _SUIT_SYMBOLS.items():
            if symbol == sym or symbol.upper() == suit.letter:
                return suit
        raise ValueError(f"Unknown suit: {symbol!r}")


_SUIT_SYMBOLS = {
    Suit.SPADES: "♠",
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
}


class Rank(IntEnum):
    """Card ranks in Thirteen order: 3 is lowest, 2 is highest."""

    THREE = 0
    FOUR = 1
    FIVE = 2
    SIX = 3
    SEVEN = 4
    EIGHT = 5
    NINE = 6
    TEN = 7
    JACK = 8
    QUEEN = 9
    KING = 10
    ACE = 11
    TWO = 12

    def __str__(self) -> str:
        return self.symbol

    @property
    def symbol(self) -> str:
        return _RANK_SYMBOLS[self.value]

    @classmethod
    def from_symbol(cls, symbol: str) -> Rank:
        """Look up a rank by its symbol (``"10"``, ``"J"``, ``"2"``...)."""
        try:
            return cls(_RANK_SYMBOLS.index(symbol.upper()))
        except ValueError:
            raise ValueError(f"Unknown rank: {symbol!r}") from None


_RANK_SYMBOLS = ("3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A", "2")


@total_ordering
class Card:
    """A playing card.

    Cards are immutable and interned. ``value`` is always derived from
    ``(rank, suit)`` and gives a total order over the deck with no ties.
    """

    __slots__ = ("_rank", "_suit")

    _instances: ClassVar[dict[tuple[Rank, Suit], Card]] = {}

    def __new__(cls, rank: Rank, suit: Suit) -> Card:
        key = (Rank(rank), Suit(suit))
        if key not in cls._instances:
            instance = object.__new__(cls)
            instance._rank = key[0]
            instance._suit = key[1]
            cls._instances[key] = instance
        return cls._instances[key]

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def value(self) -> int:
        """Numeric card value: ``rank_index * 4 + suit_index``."""
        return self._rank.value * 4 + self._suit.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self._rank == other._rank and self._suit == other._suit

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.value < other.value

    def __hash__(self) -> int:
        return hash((self._rank, self._suit))

    def __reduce__(self) -> tuple:
        """Support pickling for multiprocessing."""
        return (Card, (self._rank, self._suit))

    def __repr__(self) -> str:
        return f"Card({self._rank.name}, {self._suit.name})"

    def __str__(self) -> str:
        return f"{self._rank.symbol}{self._suit.symbol}"

    def to_dict(self) -> dict[str, str]:
        """Serialized form ``{"rank": "3", "suit": "♠"}``."""
        return {"rank": self._rank.symbol, "suit": self._suit.symbol}

    @staticmethod
    def from_dict(data: dict) -> Card:
        """Rebuild a card from its serialized form.

        Any ``value`` key in ``data`` is ignored; the value is recomputed.
        """
        return Card(Rank.from_symbol(str(data["rank"])), Suit.from_symbol(str(data["suit"])))


def create_deck() -> list[Card]:
    """Create a standard 52-card deck."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def shuffle_deck(deck: list[Card], seed: int | None = None) -> list[Card]:
    """Return a shuffled copy of the deck."""
    rng = random.Random(seed)
    shuffled = deck.copy()
    rng.shuffle(shuffled)
    return shuffled


def sort_cards(cards: Iterable[Card]) -> list[Card]:
    """Return ``cards`` sorted by value, lowest first."""
    return sorted(cards, key=lambda c: c.value)


def deal(
    deck: list[Card] | None = None,
    num_players: int = 4,
    seed: int | None = None,
    hand_size: int = HAND_SIZE,
) -> list[list[Card]]:
    """Shuffle and deal ``hand_size`` cards to each player.

    Cards are dealt one at a time round-robin from the end of the shuffled
    deck. Dealing stops early if the deck runs out. Each hand is returned
    sorted by value.
    """
    cards = shuffle_deck(deck if deck is not None else create_deck(), seed)
    hands: list[list[Card]] = [[] for _ in range(num_players)]
    for _ in range(hand_size):
        for hand in hands:
            if cards:
                hand.append(cards.pop())
    return [sort_cards(hand) for hand in hands]


def find_lowest(hands: Sequence[Sequence[Card]]) -> Card | None:
    """Return the lowest-value card across all hands, or None if all are empty."""
    lowest = None
    for hand in hands:
        for card in hand:
            if lowest is None or card.value < lowest.value:
                lowest = card
    return lowest


def parse_card(text: str) -> Card:
    """Parse short notation such as ``"3♠"``, ``"10d"`` or ``"AH"``."""
    text = text.strip()
    if len(text) < 2:
        raise ValueError(f"Invalid card: {text!r}")
    return Card(Rank.from_symbol(text[:-1]), Suit.from_symbol(text[-1]))


def parse_cards(text: str) -> list[Card]:
    """Parse whitespace- or comma-separated card notation."""
    return [parse_card(part) for part in text.replace(",", " ").split()]

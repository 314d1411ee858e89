"""Immutable game state models for Thirteen."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from thirteen_engine.cards import Card

MIN_PLAYERS = 2
MAX_PLAYERS = 4


@dataclass(frozen=True, slots=True)
class GameState:
    """Complete immutable game state.

    Attributes:
        hands: One sorted tuple of cards per seat
        play_pile: Combination currently on the table (empty at round start)
        current_player: Seat whose turn it is
        current_turn: Global turn counter, 0 for the opening play
        consecutive_passes: Passes since the last play
        last_player_to_play: Seat that made the last play (leads the next round)
        round_number: Current round, starting at 1
        rounds_won: Rounds taken per seat
        player_turns: Turns taken per seat (plays and passes)
        winner: Seat that emptied its hand, or None while the game runs
    """

    hands: tuple[tuple[Card, ...], ...]
    play_pile: tuple[Card, ...]
    current_player: int
    current_turn: int = 0
    consecutive_passes: int = 0
    last_player_to_play: int = -1
    round_number: int = 1
    rounds_won: tuple[int, ...] = ()
    player_turns: tuple[int, ...] = ()
    winner: int | None = None

    @property
    def num_players(self) -> int:
        return len(self.hands)

    @property
    def current_hand(self) -> tuple[Card, ...]:
        """Hand of the player to act."""
        return self.hands[self.current_player]

    @property
    def is_game_over(self) -> bool:
        """Whether the game has ended."""
        return self.winner is not None

    @property
    def all_hands(self) -> list[list[Card]]:
        """Mutable-shaped copy of every hand, as the rules functions expect."""
        return [list(hand) for hand in self.hands]

    @property
    def next_player(self) -> int:
        return (self.current_player + 1) % self.num_players

    def with_hand(self, player: int, hand: tuple[Card, ...]) -> GameState:
        """Return new state with one seat's hand replaced."""
        hands = list(self.hands)
        hands[player] = hand
        return replace(self, hands=tuple(hands))

    def with_play_pile(self, play_pile: tuple[Card, ...]) -> GameState:
        """Return new state with updated play pile."""
        return replace(self, play_pile=play_pile)

    def with_current_player(self, current_player: int) -> GameState:
        """Return new state with updated current player."""
        return replace(self, current_player=current_player)

    def with_consecutive_passes(self, consecutive_passes: int) -> GameState:
        """Return new state with updated consecutive passes."""
        return replace(self, consecutive_passes=consecutive_passes)

    def with_turn_taken(self) -> GameState:
        """Return new state with the acting seat's turn counted."""
        turns = list(self.player_turns)
        turns[self.current_player] += 1
        return replace(self, player_turns=tuple(turns), current_turn=self.current_turn + 1)

    def with_round_won(self, player: int) -> GameState:
        """Return new state with a round credited to ``player``."""
        won = list(self.rounds_won)
        won[player] += 1
        return replace(self, rounds_won=tuple(won))

    def with_last_player_to_play(self, player: int) -> GameState:
        """Return new state recording ``player`` as the last to play."""
        return replace(self, last_player_to_play=player)

    def with_new_round(self, leader: int) -> GameState:
        """Return new state for the next round, credited to and led by ``leader``."""
        return replace(
            self.with_round_won(leader),
            play_pile=(),
            consecutive_passes=0,
            current_player=leader,
            round_number=self.round_number + 1,
        )

    def with_winner(self, winner: int | None) -> GameState:
        """Return new state with winner set."""
        return replace(self, winner=winner)


def find_starting_player(hands: Sequence[Sequence[Card]]) -> int:
    """Seat holding the globally lowest card, or 0 if every hand is empty.

    Hands are expected sorted, so only each hand's first card is compared.
    """
    from thirteen_engine.cards import find_lowest

    lowest = find_lowest(hands)
    starting = 0
    if lowest is not None:
        for seat, hand in enumerate(hands):
            if hand and hand[0].value == lowest.value:
                starting = seat
    return starting


def create_initial_state(
    num_players: int = 4,
    seed: int | None = None,
    deck: list[Card] | None = None,
) -> GameState:
    """Create the initial game state.

    Args:
        num_players: Number of seats, 2 to 4.
        seed: Random seed for shuffling.
        deck: Optional deck to deal from. It is still shuffled with ``seed``.

    Returns:
        Initial game state with hands dealt and the lowest card's holder to act.

    Raises:
        ValueError: If ``num_players`` is out of range.
    """
    from thirteen_engine.cards import deal

    if not MIN_PLAYERS <= num_players <= MAX_PLAYERS:
        raise ValueError(f"Thirteen needs {MIN_PLAYERS}-{MAX_PLAYERS} players, got {num_players}")

    hands = tuple(tuple(hand) for hand in deal(deck, num_players, seed))
    starting = find_starting_player(hands)

    return GameState(
        hands=hands,
        play_pile=(),
        current_player=starting,
        last_player_to_play=starting,
        rounds_won=(0,) * num_players,
        player_turns=(0,) * num_players,
    )

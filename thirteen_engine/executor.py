"""Turn execution for Thirteen."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from thirteen_engine.cards import Card, sort_cards
from thirteen_engine.rules import is_valid_play
from thirteen_engine.state import GameState

logger = logging.getLogger(__name__)


class IllegalMoveError(Exception):
    """Raised when an illegal move is attempted."""

    pass


class EventType(str, Enum):
    """Notable transitions between two game states."""

    PLAYER_MOVED = "player_moved"
    PLAYER_PASSED = "player_passed"
    ROUND_PLAYED = "round_played"
    GAME_WON = "game_won"


@dataclass(frozen=True, slots=True)
class GameEvent:
    """Something that happened during one move.

    Attributes:
        type: What kind of transition this was
        player: Seat the event concerns (mover, passer, round or game winner)
        cards: Cards played, empty for passes and round ends
    """

    type: EventType
    player: int
    cards: tuple[Card, ...] = ()


def remove_cards(hand: Sequence[Card], cards: Sequence[Card]) -> tuple[Card, ...]:
    """Return ``hand`` without ``cards``, preserving order."""
    removing = set(cards)
    return tuple(card for card in hand if card not in removing)


def execute_move(state: GameState, cards: Sequence[Card]) -> GameState:
    """Execute a move and return the new game state.

    Args:
        state: Current game state.
        cards: Cards to play. An empty sequence is a pass.

    Returns:
        New game state after the move.

    Raises:
        IllegalMoveError: If the move is not legal or the game is over.
    """
    if state.is_game_over:
        raise IllegalMoveError("Game is already over")

    if not cards:
        return execute_pass(state)
    return execute_play(state, cards)


def execute_play(state: GameState, cards: Sequence[Card]) -> GameState:
    """Move ``cards`` from the current hand onto the pile."""
    if state.is_game_over:
        raise IllegalMoveError("Game is already over")

    player = state.current_player
    hand = state.current_hand
    if not is_valid_play(cards, state.play_pile, hand, state.current_turn, state.all_hands):
        raise IllegalMoveError(
            f"Player {player} cannot play {' '.join(str(c) for c in cards)} "
            f"on {' '.join(str(c) for c in state.play_pile) or 'an empty pile'}"
        )

    new_hand = remove_cards(hand, cards)
    new_state = (
        state.with_hand(player, new_hand)
        .with_play_pile(tuple(sort_cards(cards)))
        .with_consecutive_passes(0)
        .with_turn_taken()
        .with_last_player_to_play(player)
    )

    if not new_hand:
        logger.debug(f"Player {player} emptied their hand and wins")
        return new_state.with_play_pile(()).with_round_won(player).with_winner(player)

    return new_state.with_current_player(new_state.next_player)


def execute_pass(state: GameState) -> GameState:
    """Pass the current player's turn, ending the round if everyone else passed."""
    if state.is_game_over:
        raise IllegalMoveError("Game is already over")
    if not state.play_pile:
        raise IllegalMoveError("Cannot pass on the first play of a round")

    new_state = state.with_turn_taken().with_consecutive_passes(state.consecutive_passes + 1)

    if new_state.consecutive_passes >= state.num_players - 1:
        leader = state.last_player_to_play
        logger.debug(f"Player {leader} wins round {state.round_number}")
        return new_state.with_new_round(leader)

    return new_state.with_current_player(new_state.next_player)


def transition_events(before: GameState, after: GameState, cards: Sequence[Card]) -> list[GameEvent]:
    """Describe what happened between two consecutive states.

    Args:
        before: State before the move.
        after: State returned by ``execute_move``.
        cards: The move that was executed (empty for a pass).

    Returns:
        Events in the order they occurred.
    """
    player = before.current_player
    events: list[GameEvent] = []

    if cards:
        events.append(GameEvent(EventType.PLAYER_MOVED, player, tuple(sort_cards(cards))))
    else:
        events.append(GameEvent(EventType.PLAYER_PASSED, player))

    if after.round_number > before.round_number:
        events.append(GameEvent(EventType.ROUND_PLAYED, after.current_player))

    if after.is_game_over and not before.is_game_over:
        events.append(GameEvent(EventType.GAME_WON, after.winner))

    return events

"""Command-line interface for Thirteen."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING, Sequence

from thirteen_engine.cards import Card, parse_cards
from thirteen_engine.executor import IllegalMoveError, execute_move
from thirteen_engine.state import create_initial_state

if TYPE_CHECKING:
    from thirteen_engine.state import GameState
    from strategies.base import Strategy

HUMAN = 0


def _cards(cards: Sequence[Card]) -> str:
    return " ".join(str(c) for c in cards)


def format_state(state: GameState, viewer: int | None = HUMAN, names: Sequence[str] | None = None) -> str:
    """Format game state for display.

    Args:
        state: State to render.
        viewer: Seat whose hand is shown face up, or None to show every hand.
        names: Optional label per seat.
    """
    lines = []

    lines.append("=" * 60)
    lines.append(f"Round {state.round_number} | Turn {state.current_turn}")
    lines.append("=" * 60)

    for i, hand in enumerate(state.hands):
        prefix = "→ " if i == state.current_player and not state.is_game_over else "  "
        label = f"Player {i}" + (f" ({names[i]})" if names else "")
        lines.append(f"{prefix}{label}: {len(hand)} cards, {state.rounds_won[i]} rounds won")
        if viewer is None or i == viewer:
            numbered = "  ".join(f"{n}:{card}" for n, card in enumerate(hand, 1))
            lines.append(f"    {numbered or '(empty)'}")

    lines.append(f"\nPile: {_cards(state.play_pile) or '(empty - lead any combination)'}")

    if state.is_game_over:
        lines.append("\n" + "=" * 60)
        lines.append(f"GAME OVER - Player {state.winner} wins!")
        lines.append("=" * 60)

    return "\n".join(lines)


def parse_move(text: str, hand: Sequence[Card]) -> list[Card]:
    """Turn player input into the cards to play.

    Accepts ``pass``, card notation (``"3♠ 3d"``) or 1-based positions in
    ``hand`` (``"1 2"``). An empty result means pass.

    Raises:
        ValueError: If the input names unknown cards or positions.
    """
    text = text.strip()
    if text.lower() == "pass":
        return []

    tokens = text.replace(",", " ").split()
    if not tokens:
        raise ValueError("Enter cards, positions, 'pass', 'hint' or 'q'")

    if all(token.isdigit() for token in tokens):
        positions = [int(token) for token in tokens]
        if any(not 1 <= p <= len(hand) for p in positions):
            raise ValueError(f"Positions must be between 1 and {len(hand)}")
        if len(set(positions)) != len(positions):
            raise ValueError("Each position may only be chosen once")
        return [hand[p - 1] for p in positions]

    return parse_cards(text)


def _ai_move(strategy: Strategy, state: GameState) -> list[Card]:
    return strategy.take_turn(list(state.current_hand), list(state.play_pile), state.current_turn, state.all_hands)


def play_interactive(persona: str = "lowest_card", players: int = 4, seed: int | None = None) -> None:
    """Play an interactive game against AI personas."""
    from strategies.personas import create_strategy, get_persona

    opponents = {seat: create_strategy(persona, seed=None if seed is None else seed + seat) for seat in range(1, players)}
    advisor = create_strategy("lowest_card")
    names = ["You"] + [get_persona(persona).name] * (players - 1)
    state = create_initial_state(num_players=players, seed=seed)

    print("\nWelcome to Thirteen!")
    print("You are Player 0. Enter cards (3♠ 3d), hand positions (1 2), 'pass', 'hint' or 'q'.\n")

    while not state.is_game_over:
        if state.current_player == HUMAN:
            print(format_state(state, viewer=HUMAN, names=names))
            choice = input("\nYour move: ").strip()
            if choice.lower() == "q":
                print("Goodbye!")
                return
            if choice.lower() == "hint":
                suggestion = _ai_move(advisor, state)
                print(f"Hint: {_cards(suggestion) or 'pass'}")
                continue
            try:
                cards = parse_move(choice, state.current_hand)
                state = execute_move(state, cards)
            except (ValueError, IllegalMoveError) as e:
                print(f"Invalid move: {e}")
                continue
            print(f"\nYou {'play ' + _cards(cards) if cards else 'pass'}")
        else:
            player = state.current_player
            cards = _ai_move(opponents[player], state)
            state = execute_move(state, cards)
            print(f"Player {player} ({names[player]}) {'plays ' + _cards(cards) if cards else 'passes'}")

    print(format_state(state, viewer=None, names=names))


def watch_game(persona: str = "random", players: int = 4, seed: int | None = None, delay: float = 0.5) -> None:
    """Watch AI personas play each other."""
    import time

    from strategies.personas import create_strategy, get_persona

    seats = [create_strategy(persona, seed=None if seed is None else seed + seat) for seat in range(players)]
    names = [get_persona(persona).name] * players
    state = create_initial_state(num_players=players, seed=seed)

    print(f"\nWatching {players} x {names[0]}")
    print("Press Ctrl+C to stop.\n")

    try:
        while not state.is_game_over:
            player = state.current_player
            cards = _ai_move(seats[player], state)
            state = execute_move(state, cards)
            print(f"Player {player} {'plays ' + _cards(cards) if cards else 'passes'}")
            time.sleep(delay)
    except KeyboardInterrupt:
        print("\nStopped.")

    print(format_state(state, viewer=None, names=names))


def run_tournament(num_games: int = 100, seed: int = 42) -> None:
    """Run a round robin between every persona and print the standings."""
    from simulation.tournament import run_tournament as run_round_robin
    from strategies.personas import create_strategy, list_personas

    strategies = [create_strategy(p.key, seed=seed) for p in list_personas()]
    print(f"\nRunning {num_games} games per pairing across {len(strategies)} personas...")
    print(run_round_robin(strategies, games_per_match=num_games, start_seed=seed))


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point for the CLI."""
    from strategies.personas import PERSONAS

    parser = argparse.ArgumentParser(description="Thirteen card game")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    play_parser = subparsers.add_parser("play", help="Play against AI personas")
    play_parser.add_argument("--persona", choices=sorted(PERSONAS), default="lowest_card", help="Opponent persona")
    play_parser.add_argument("--players", type=int, choices=(2, 3, 4), default=4, help="Number of seats")
    play_parser.add_argument("--seed", type=int, help="Random seed")

    watch_parser = subparsers.add_parser("watch", help="Watch AI vs AI")
    watch_parser.add_argument("--persona", choices=sorted(PERSONAS), default="random", help="Persona for every seat")
    watch_parser.add_argument("--players", type=int, choices=(2, 3, 4), default=4, help="Number of seats")
    watch_parser.add_argument("--seed", type=int, help="Random seed")
    watch_parser.add_argument("--delay", type=float, default=0.5, help="Delay between moves (seconds)")

    tournament_parser = subparsers.add_parser("tournament", help="Round robin between all personas")
    tournament_parser.add_argument("--games", type=int, default=100, help="Games per pairing")
    tournament_parser.add_argument("--seed", type=int, default=42, help="Random seed")

    args = parser.parse_args(argv)

    if args.command == "play":
        play_interactive(persona=args.persona, players=args.players, seed=args.seed)
    elif args.command == "watch":
        watch_game(persona=args.persona, players=args.players, seed=args.seed, delay=args.delay)
    elif args.command == "tournament":
        run_tournament(num_games=args.games, seed=args.seed)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()

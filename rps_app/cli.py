"""Command-line interface for playing Rock-Paper-Scissors against the computer."""
from __future__ import annotations
import argparse
from typing import Callable, Optional

from .config import Config, ROUND_OPTIONS, DEFAULT_ROUNDS, DEFAULT_PLAYER_NAME, LEADERBOARD_DISPLAY_SIZE, HISTORY_LIMIT
from .models.game import MatchResult
from .services.game_service import GameService
from .services.leaderboard_store import create_file_leaderboard_store

SHORTCUTS = {"r": "rock", "p": "paper", "s": "scissors"}

GAME_OVER_MESSAGES = {
    MatchResult.PLAYER_WON: "Congratulations! You won the game!",
    MatchResult.COMPUTER_WON: "Game over! Computer won the game!",
    MatchResult.DRAWN: "Game ended in a draw!",
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="rps-play", description="Play Rock-Paper-Scissors against the computer.")
    p.add_argument("--leaderboard-file", default=Config.LEADERBOARD_FILE,
                   help=f"Leaderboard file (default: {Config.LEADERBOARD_FILE})")
    return p.parse_args(argv)


def prompt_config(read: Callable[[str], str]) -> tuple[str, str, str]:
    """Ask for name, rounds and difficulty. Blank answers take the defaults."""
    name = read(f"Enter your name [{DEFAULT_PLAYER_NAME}]: ").strip()
    options = "/".join(str(o) for o in ROUND_OPTIONS)
    rounds = read(f"Select number of rounds ({options}) [{DEFAULT_ROUNDS}]: ").strip()
    difficulty = read("Select difficulty level (easy/medium/hard) [easy]: ").strip()
    return name, rounds, difficulty


def format_leaderboard(service: GameService) -> str:
    lines = [f"Top {LEADERBOARD_DISPLAY_SIZE} Players:"]
    for rank, entry in enumerate(service.get_top_players(LEADERBOARD_DISPLAY_SIZE), start=1):
        lines.append(
            f"{rank}. {entry.name} - Wins: {entry.wins}, Losses: {entry.losses}, "
            f"Draws: {entry.draws}, Win Rate: {entry.win_rate:.2f}%"
        )
    if len(lines) == 1:
        lines.append("No games have been recorded yet.")
    return "\n".join(lines)


def format_history(service: GameService, session_id: str) -> str:
    history = service.get_recent_history(session_id, HISTORY_LIMIT)
    if not history:
        return f"Last {HISTORY_LIMIT} Rounds:\nNo rounds have been played yet."
    lines = [f"Last {HISTORY_LIMIT} Rounds:"]
    lines.extend(f"{i}. {record}" for i, record in enumerate(history, start=1))
    return "\n".join(lines)


def interactive_session(service: GameService,
                        session_id: str,
                        read: Callable[[str], str] = input,
                        write: Callable[[str], None] = print) -> int:
    """Play rounds until the player quits. Returns the number of matches completed."""
    write("Enter rock/paper/scissors (or r/p/s), 'leaderboard', 'history' or 'quit'.")
    matches = 0
    while True:
        try:
            user = read("Your move: ").strip().lower()
        except EOFError:
            break

        if user == "quit":
            break
        if user == "leaderboard":
            write(format_leaderboard(service))
            continue
        if user == "history":
            write(format_history(service, session_id))
            continue

        move = SHORTCUTS.get(user, user)
        is_valid, error = service.is_valid_move(session_id, move)
        if not is_valid:
            write(f"Invalid move. {error}")
            continue

        result = service.submit_player_move(session_id, move)
        write(f"You: {result.player_move.value}  Computer: {result.computer_move.value} -> {result.outcome.value}")
        write(f"Score: Player {result.player_score_after} - Computer {result.computer_score_after}")

        if result.match_over:
            matches += 1
            write(GAME_OVER_MESSAGES[result.match_result])
            write("A new game has started.")

    return matches


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    service = GameService(create_file_leaderboard_store(args.leaderboard_file))

    name, rounds, difficulty = prompt_config(input)
    session_id = service.configure_match(name, rounds, difficulty)
    config = service.get_session_state(session_id)["config"]
    print(f"Hello {config['player_name']}! Best of {config['rounds_target']}, "
          f"difficulty {config['difficulty'].title()}.")

    try:
        matches = interactive_session(service, session_id)
    except KeyboardInterrupt:
        print("\nExiting early.")
        matches = 0
    finally:
        service.shutdown()

    print(f"\nMatches completed: {matches}")
    print(format_leaderboard(service))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""Tests for the interactive terminal client."""
from rps_app import cli
from rps_app.services.game_service import GameService

from conftest import scripted_strategy


def scripted_input(answers):
    remaining = iter(answers)

    def read(prompt):
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError

    return read


def test_prompt_config_passes_answers_through():
    assert cli.prompt_config(scripted_input(['Alice', '5', 'hard'])) == ('Alice', '5', 'hard')


def test_interactive_session_plays_a_match(store):
    service = GameService(store)
    session_id = service.configure_match('Alice', 3, 'easy', strategy=scripted_strategy(['scissors', 'paper', 'rock']))
    output = []

    matches = cli.interactive_session(
        service, session_id,
        read=scripted_input(['lizard', 'r', 'rock', 'history', 'p', 'leaderboard', 'quit']),
        write=output.append
    )

    text = '\n'.join(output)
    assert matches == 1
    assert 'Invalid move.' in text
    assert 'You: ROCK  Computer: SCISSORS -> WIN' in text
    assert 'Score: Player 1 - Computer 1' in text
    assert 'Congratulations! You won the game!' in text
    assert '1. Alice - Wins: 1, Losses: 0, Draws: 0, Win Rate: 100.00%' in text
    assert 'Last 10 Rounds:' in text


def test_empty_history_and_leaderboard(store):
    service = GameService(store)
    session_id = service.configure_match('Alice')

    assert 'No rounds have been played yet.' in cli.format_history(service, session_id)
    assert 'No games have been recorded yet.' in cli.format_leaderboard(service)


def test_parse_args_leaderboard_file(tmp_path):
    path = str(tmp_path / 'board.txt')
    assert cli.parse_args(['--leaderboard-file', path]).leaderboard_file == path

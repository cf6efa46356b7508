"""Unit tests for the leaderboard store and its flat-file storage."""
from rps_app.models import PlayerLeaderboardEntry
from rps_app.services.leaderboard_store import (
    FileLeaderboardStorage, LeaderboardStorage, LeaderboardStore, format_entry, parse_entry
)


def write_lines(path, lines):
    with open(path, 'w', encoding='utf-8') as f:
        f.write('\n'.join(lines) + '\n')


def test_missing_file_loads_empty(store):
    assert store.entries() == []
    assert store.top(5) == []


def test_malformed_lines_are_skipped(leaderboard_path, clock):
    write_lines(leaderboard_path, [
        'Alice|4|3|1|0|1700000000000',
        'TooShort|1|1|0',
        'Bob|x|1|0|0|1700000000000',
        'Carol|2|1|1|0|notatime',
        'Neg|1|-1|0|0|1700000000000',
        '|1|1|0|0|1700000000000',
        '',
        'Dave|2|2|0|0|1700000000001',
    ])

    store = LeaderboardStore(FileLeaderboardStorage(leaderboard_path), clock=clock)
    entries = store.load()

    assert [e.name for e in entries] == ['Alice', 'Dave']


def test_undecodable_line_is_skipped_without_losing_the_board(leaderboard_path, clock):
    good = [f'P{i}|{i + 1}|{i}|1|0|1700000000000'.encode('utf-8') for i in range(5)]
    with open(leaderboard_path, 'wb') as f:
        f.write(b'\n'.join(good[:3] + [b'Bad\xff|1|1|0|0|1'] + good[3:]) + b'\n')

    store = LeaderboardStore(FileLeaderboardStorage(leaderboard_path), clock=clock)
    assert len(store.load()) == 5

    store.update('New', 1, 0, 1, 0)

    with open(leaderboard_path, encoding='utf-8') as f:
        names = [line.split('|')[0] for line in f.read().splitlines()]
    assert sorted(names) == ['New', 'P0', 'P1', 'P2', 'P3', 'P4']


def test_numeric_fields_must_be_plain_decimals():
    assert parse_entry('Alice|5_0|1|0|0|1700000000000') is None
    assert parse_entry('Alice|٥|1|0|0|1700000000000') is None
    assert parse_entry('Alice|+5|1|0|0|1700000000000').total_games == 5


def test_unreadable_file_loads_empty(tmp_path, clock):
    directory = tmp_path / 'board'
    directory.mkdir()
    store = LeaderboardStore(FileLeaderboardStorage(str(directory)), clock=clock)
    assert store.load() == []


def test_save_then_load_round_trip(store, leaderboard_path, clock):
    store.update('Alice', 3, 2, 1, 0)
    store.update('Bob', 5, 1, 2, 2)
    store.update('Carol', 1, 0, 0, 1)

    reloaded = LeaderboardStore(FileLeaderboardStorage(leaderboard_path), clock=clock)
    reloaded.load()

    assert {e.stats_tuple() for e in reloaded.entries()} == {e.stats_tuple() for e in store.entries()}


def test_persisted_format_is_pipe_delimited(store, leaderboard_path):
    store.update('Alice', 3, 2, 1, 0)

    with open(leaderboard_path, encoding='utf-8') as f:
        lines = f.read().splitlines()

    assert len(lines) == 1
    name, total, wins, losses, draws, timestamp = lines[0].split('|')
    assert (name, total, wins, losses, draws) == ('Alice', '3', '2', '1', '0')
    assert int(timestamp) == store.find('Alice').last_updated


def test_format_and_parse_entry():
    entry = PlayerLeaderboardEntry('Zoe', 10, 6, 3, 1, 42)
    assert format_entry(entry) == 'Zoe|10|6|3|1|42'
    assert parse_entry('Zoe|10|6|3|1|42\n') == entry
    assert parse_entry('Zoe|10|6|3|1') is None


def test_ranking_by_wins_then_win_rate(store):
    store.update('Steady', 10, 5, 5, 0)
    store.update('Sharp', 6, 5, 1, 0)
    store.update('Leader', 20, 7, 13, 0)
    store.update('Newbie', 0, 0, 0, 0)

    assert [e.name for e in store.entries()] == ['Leader', 'Sharp', 'Steady', 'Newbie']

    entries = store.entries()
    for higher, lower in zip(entries, entries[1:]):
        assert (higher.wins, higher.win_rate) >= (lower.wins, lower.win_rate)


def test_win_rate():
    assert PlayerLeaderboardEntry('A', 4, 1, 3, 0).win_rate == 25.0
    assert PlayerLeaderboardEntry('A', 0, 0, 0, 0).win_rate == 0.0


def test_update_existing_name_does_not_duplicate(store, clock):
    store.update('Alice', 1, 1, 0, 0)
    first_stamp = store.find('Alice').last_updated

    store.update('Alice', 2, 1, 1, 0)

    assert len(store) == 1
    entry = store.find('Alice')
    assert entry.stats_tuple() == ('Alice', 2, 1, 1, 0)
    assert entry.last_updated > first_stamp


def test_update_first_duplicate_wins(leaderboard_path, clock):
    write_lines(leaderboard_path, [
        'Alice|3|3|0|0|1',
        'Alice|1|1|0|0|2',
    ])
    store = LeaderboardStore(FileLeaderboardStorage(leaderboard_path), clock=clock)
    store.load()

    store.update('Alice', 4, 4, 0, 0)

    assert [e.stats_tuple() for e in store.entries()] == [('Alice', 4, 4, 0, 0), ('Alice', 1, 1, 0, 0)]


def test_capacity_is_never_exceeded(store):
    for i in range(15):
        store.update(f'P{i}', i + 1, i, 1, 0)
        assert len(store) <= 10

    names = [e.name for e in store.entries()]
    assert names == [f'P{i}' for i in range(14, 4, -1)]


def test_new_player_below_cutoff_is_dropped(store):
    for i in range(10):
        store.update(f'P{i}', 10, 5 + i, 5 - i if i < 5 else 0, 0)

    store.update('Late', 1, 0, 1, 0)

    assert len(store) == 10
    assert store.find('Late') is None


def test_add_sorts_truncates_and_persists(store, leaderboard_path, clock):
    for i in range(10):
        store.add(PlayerLeaderboardEntry(f'P{i}', 5, 1, 4, 0, clock()))

    store.add(PlayerLeaderboardEntry('Champion', 5, 5, 0, 0, clock()))

    assert len(store) == 10
    assert store.top(1)[0].name == 'Champion'

    reloaded = LeaderboardStore(FileLeaderboardStorage(leaderboard_path))
    assert reloaded.load()[0].name == 'Champion'


def test_top_n_larger_than_board_returns_everything(store):
    store.update('Alice', 1, 1, 0, 0)
    store.update('Bob', 1, 0, 1, 0)

    assert [e.name for e in store.top(50)] == ['Alice', 'Bob']
    assert [e.name for e in store.top(1)] == ['Alice']
    assert store.top(0) == []


class BrokenStorage(LeaderboardStorage):
    def read(self):
        raise OSError('disk on fire')

    def write(self, entries):
        raise OSError('read-only file system')


def test_storage_failures_are_not_fatal(clock):
    store = LeaderboardStore(BrokenStorage(), clock=clock)

    assert store.load() == []
    store.update('Alice', 1, 1, 0, 0)

    assert store.save() is False
    assert store.find('Alice').stats_tuple() == ('Alice', 1, 1, 0, 0)

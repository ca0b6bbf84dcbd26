import builtins
import errno
import json
import os
import threading
from datetime import date

import pytest

from daily_wordle.models.stats import GameStats
from daily_wordle.services import stats_store as stats_store_module
from daily_wordle.services.stats_store import StatsStore


def read_file(path):
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def test_snapshot_with_no_players(stats_store):
    snapshot = stats_store.snapshot()
    assert snapshot.num_players == 0
    assert snapshot.winners_percentage == 0
    assert snapshot.average_guesses == 0
    assert snapshot.guess_distribution == {}


def test_record_results_and_snapshot(stats_store, stats_file):
    stats_store.record_result(True, 3)
    stats_store.record_result(True, 4)
    stats_store.record_result(False, 6)

    snapshot = stats_store.snapshot()
    assert snapshot.num_players == 3
    assert snapshot.winners_percentage == pytest.approx(200 / 3)
    assert snapshot.average_guesses == pytest.approx(3.5)
    assert snapshot.guess_distribution == {3: 1, 4: 1}

    assert read_file(stats_file) == {
        'date': '2026-10-19',
        'total_players': 3,
        'total_winners': 2,
        'total_guesses_by_winners': 7,
        'guess_distribution': {'3': 1, '4': 1},
    }


def test_no_winners_means_zero_average(stats_store):
    stats_store.record_result(False, 6)
    stats_store.record_result(False, 2)
    snapshot = stats_store.snapshot()
    assert snapshot.num_players == 2
    assert snapshot.winners_percentage == 0
    assert snapshot.average_guesses == 0


def test_invalid_winning_guess_count(stats_store):
    with pytest.raises(ValueError):
        stats_store.record_result(True, 0)
    with pytest.raises(ValueError):
        stats_store.record_result(True, 7)
    assert stats_store.snapshot().num_players == 0


def test_stats_survive_restart(stats_file, fake_today):
    StatsStore(stats_file, today=fake_today).record_result(True, 2)

    restarted = StatsStore(stats_file, today=fake_today)
    restarted.record_result(False, 6)

    snapshot = restarted.snapshot()
    assert snapshot.num_players == 2
    assert snapshot.guess_distribution == {2: 1}


def test_stale_file_is_reset_before_use(stats_file, fake_today):
    with open(stats_file, 'w', encoding='utf-8') as f:
        json.dump({
            'date': '2026-10-18',
            'total_players': 10,
            'total_winners': 4,
            'total_guesses_by_winners': 16,
            'guess_distribution': {'4': 4},
        }, f)

    store = StatsStore(stats_file, today=fake_today)
    assert store.snapshot().num_players == 0
    assert read_file(stats_file)['date'] == '2026-10-19'
    assert read_file(stats_file)['total_players'] == 0

    store.record_result(True, 5)
    assert read_file(stats_file)['total_players'] == 1
    assert read_file(stats_file)['guess_distribution'] == {'5': 1}


def test_day_rollover_while_running(stats_store, stats_file, fake_today):
    stats_store.record_result(True, 3)
    fake_today.value = date(2026, 10, 20)

    stats_store.record_result(False, 6)

    snapshot = stats_store.snapshot()
    assert snapshot.num_players == 1
    assert snapshot.guess_distribution == {}
    assert read_file(stats_file)['date'] == '2026-10-20'


def test_full_timestamp_date_is_accepted(stats_file, fake_today):
    with open(stats_file, 'w', encoding='utf-8') as f:
        json.dump({
            'date': '2026-10-19T00:00:00',
            'total_players': 1,
            'total_winners': 0,
            'total_guesses_by_winners': 0,
            'guess_distribution': {},
        }, f)

    assert StatsStore(stats_file, today=fake_today).snapshot().num_players == 1


def test_concurrent_updates_are_not_lost(stats_store, stats_file):
    players, winners = 60, 25
    barrier = threading.Barrier(players)

    def play(i):
        barrier.wait()
        won = i < winners
        stats_store.record_result(won, (i % 6) + 1 if won else 6)

    threads = [threading.Thread(target=play, args=(i,)) for i in range(players)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    snapshot = stats_store.snapshot()
    assert snapshot.num_players == players
    assert sum(snapshot.guess_distribution.values()) == winners

    on_disk = read_file(stats_file)
    assert on_disk['total_players'] == players
    assert on_disk['total_winners'] == winners
    assert sum(on_disk['guess_distribution'].values()) == winners


def test_unwritable_file_keeps_serving(tmp_path, fake_today):
    blocker = tmp_path / 'blocker'
    blocker.write_text('', encoding='utf-8')
    store = StatsStore(str(blocker / 'gamestats.json'), today=fake_today)

    updated = store.record_result(True, 4)
    assert updated.total_players == 1

    snapshot = store.snapshot()
    assert snapshot.num_players == 1
    assert snapshot.average_guesses == 4


def test_corrupt_file_starts_fresh(stats_file, fake_today):
    with open(stats_file, 'w', encoding='utf-8') as f:
        f.write('{not json')

    store = StatsStore(stats_file, today=fake_today)
    assert store.snapshot().num_players == 0

    store.record_result(False, 6)
    assert read_file(stats_file)['total_players'] == 1


def test_reset(stats_store, stats_file):
    stats_store.record_result(True, 1)
    stats_store.reset()
    assert stats_store.snapshot().num_players == 0
    assert read_file(stats_file)['total_players'] == 0


def write_record(path, **overrides):
    record = {
        'date': '2026-10-19',
        'total_players': 10,
        'total_winners': 4,
        'total_guesses_by_winners': 16,
        'guess_distribution': {'4': 4},
    }
    record.update(overrides)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(record, f)


def test_failed_read_does_not_overwrite_file(stats_file, fake_today, monkeypatch):
    write_record(stats_file)
    calls = []

    def flaky_open(*args, **kwargs):
        calls.append(args)
        if len(calls) == 1:
            raise OSError(errno.EIO, 'Input/output error')
        return builtins.open(*args, **kwargs)

    monkeypatch.setattr(stats_store_module, 'open', flaky_open, raising=False)
    store = StatsStore(stats_file, today=fake_today)

    # Served from a throwaway record while the file cannot be read
    assert store.record_result(True, 3).total_players == 1
    assert read_file(stats_file)['total_players'] == 10

    updated = store.record_result(True, 3)
    assert updated.total_players == 11
    assert read_file(stats_file) == {
        'date': '2026-10-19',
        'total_players': 11,
        'total_winners': 5,
        'total_guesses_by_winners': 19,
        'guess_distribution': {'3': 1, '4': 4},
    }


def test_malformed_file_is_moved_aside(stats_file, fake_today):
    with open(stats_file, 'w', encoding='utf-8') as f:
        f.write('{not json')

    store = StatsStore(stats_file, today=fake_today)
    assert store.snapshot().num_players == 0

    corrupt_path = stats_file + '.corrupt'
    assert os.path.exists(corrupt_path)
    with open(corrupt_path, 'r', encoding='utf-8') as f:
        assert f.read() == '{not json'


INCONSISTENT_RECORDS = {
    'guess_count_above_limit': dict(total_players=5, total_winners=1, total_guesses_by_winners=9,
                                    guess_distribution={'9': 1}),
    'guess_count_zero': dict(total_players=5, total_winners=1, total_guesses_by_winners=0,
                             guess_distribution={'0': 1}),
    'distribution_exceeds_winners': dict(total_players=5, total_winners=1, total_guesses_by_winners=45,
                                         guess_distribution={'9': 5}),
    'negative_distribution_count': dict(total_players=5, total_winners=0, total_guesses_by_winners=1,
                                        guess_distribution={'3': -1, '4': 1}),
    'distribution_short_of_winners': dict(total_players=5, total_winners=2, total_guesses_by_winners=4,
                                          guess_distribution={'4': 1}),
    'guess_total_mismatch': dict(total_players=5, total_winners=1, total_guesses_by_winners=3,
                                 guess_distribution={'4': 1}),
    'more_winners_than_players': dict(total_players=1, total_winners=2, total_guesses_by_winners=8,
                                      guess_distribution={'4': 2}),
    'negative_players': dict(total_players=-1, total_winners=0, total_guesses_by_winners=0,
                             guess_distribution={}),
}


@pytest.mark.parametrize('fields', INCONSISTENT_RECORDS.values(), ids=list(INCONSISTENT_RECORDS))
def test_inconsistent_record_is_rejected(fields):
    with pytest.raises(ValueError):
        GameStats.from_dict(dict(date='2026-10-19', **fields))


@pytest.mark.parametrize('fields', INCONSISTENT_RECORDS.values(), ids=list(INCONSISTENT_RECORDS))
def test_inconsistent_file_starts_fresh(stats_file, fake_today, fields):
    write_record(stats_file, **fields)

    store = StatsStore(stats_file, today=fake_today)
    snapshot = store.snapshot()
    assert snapshot.num_players == 0
    assert snapshot.guess_distribution == {}
    assert os.path.exists(stats_file + '.corrupt')


def test_consistent_record_is_accepted():
    stats = GameStats.from_dict({
        'date': '2026-10-19',
        'total_players': 10,
        'total_winners': 4,
        'total_guesses_by_winners': 13,
        'guess_distribution': {'1': 1, '4': 3},
    })
    assert stats.guess_distribution == {1: 1, 4: 3}
    assert stats.date == date(2026, 10, 19)

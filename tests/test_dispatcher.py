import time
import threading
from types import SimpleNamespace

import dispatcher
from dispatcher import WorkDispatcher, pool_size
from data_handler import ResultSink
from models import RowsOutcome, FailureOutcome


class RecordingSink:
    def __init__(self, fail_for=()):
        self.outcomes = []
        self.fail_for = set(fail_for)
        self._lock = threading.Lock()

    def record(self, outcome):
        if outcome.username in self.fail_for:
            raise OSError('disk full')
        with self._lock:
            self.outcomes.append(outcome)


class SlowCrawler:
    """Tracks how many process() calls run at once"""

    def __init__(self, delay=0.01, failing=()):
        self.delay = delay
        self.failing = set(failing)
        self.active = 0
        self.max_active = 0
        self.seen = []
        self._lock = threading.Lock()

    def process(self, username):
        with self._lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
            self.seen.append(username)
        time.sleep(self.delay)
        with self._lock:
            self.active -= 1
        if username in self.failing:
            return FailureOutcome(username, 'User not found')
        return RowsOutcome(username, [{'username': username}])


class CountingProgress:
    def __init__(self):
        self.n = 0

    def update(self, n):
        self.n += n


def test_pool_size_is_capped_by_cpu_count_and_config(monkeypatch):
    monkeypatch.setattr(dispatcher.os, 'cpu_count', lambda: 32)
    assert pool_size(16) == 16
    assert pool_size(4) == 4

    monkeypatch.setattr(dispatcher.os, 'cpu_count', lambda: 2)
    assert pool_size(16) == 2

    monkeypatch.setattr(dispatcher.os, 'cpu_count', lambda: None)
    assert pool_size(16) == 1


def test_every_username_yields_exactly_one_outcome(monkeypatch):
    monkeypatch.setattr(dispatcher.os, 'cpu_count', lambda: 8)
    usernames = [f'user{i}' for i in range(50)]
    crawler = SlowCrawler(delay=0.001, failing={'user3', 'user17'})
    sink = RecordingSink()

    summary = WorkDispatcher(crawler, sink, max_workers=16).run(usernames)

    assert sorted(crawler.seen) == sorted(usernames)
    assert sorted(o.username for o in sink.outcomes) == sorted(usernames)
    assert summary.total == summary.completed == 50
    assert summary.succeeded == 48
    assert summary.failed == 2


def test_concurrency_never_exceeds_pool_size(monkeypatch):
    monkeypatch.setattr(dispatcher.os, 'cpu_count', lambda: 32)
    crawler = SlowCrawler(delay=0.02)
    work = WorkDispatcher(crawler, RecordingSink(), max_workers=4)

    work.run([f'user{i}' for i in range(20)])

    assert work.worker_count == 4
    assert 1 <= crawler.max_active <= 4


def test_completion_is_signalled_once(monkeypatch):
    monkeypatch.setattr(dispatcher.os, 'cpu_count', lambda: 4)
    work = WorkDispatcher(SlowCrawler(delay=0.001), RecordingSink(), max_workers=4)
    signals = []
    original = work._signal_done
    monkeypatch.setattr(work, '_signal_done', lambda: (signals.append(1), original()))

    work.run(['a', 'b', 'c', 'd', 'e'])

    assert work.done.is_set()
    assert signals == [1]


def test_empty_input_completes_immediately():
    crawler = SlowCrawler()
    work = WorkDispatcher(crawler, RecordingSink(), max_workers=4)

    summary = work.run([])

    assert work.done.is_set()
    assert summary.total == summary.completed == 0
    assert crawler.seen == []


def test_sink_failure_still_counts_the_user(monkeypatch):
    monkeypatch.setattr(dispatcher.os, 'cpu_count', lambda: 2)
    sink = RecordingSink(fail_for={'b'})
    work = WorkDispatcher(SlowCrawler(delay=0.001), sink, max_workers=2)

    summary = work.run(['a', 'b', 'c'])

    assert work.done.is_set()
    assert summary.completed == 3
    assert summary.failed == 1
    assert sorted(o.username for o in sink.outcomes) == ['a', 'c']


def test_progress_advances_once_per_user(monkeypatch):
    monkeypatch.setattr(dispatcher.os, 'cpu_count', lambda: 3)
    progress = CountingProgress()

    WorkDispatcher(SlowCrawler(delay=0.001), RecordingSink(), max_workers=3, progress=progress).run(
        ['a', 'b', 'c', 'd']
    )

    assert progress.n == 4


def test_crawler_is_called_with_each_username_once(monkeypatch):
    monkeypatch.setattr(dispatcher.os, 'cpu_count', lambda: 4)
    calls = []
    lock = threading.Lock()

    def process(username):
        with lock:
            calls.append(username)
        return RowsOutcome(username, [])

    WorkDispatcher(SimpleNamespace(process=process), RecordingSink(), max_workers=4).run(
        ['x', 'y', 'z']
    )

    assert sorted(calls) == ['x', 'y', 'z']


def test_row_write_failure_lands_in_error_log(tmp_path, monkeypatch):
    monkeypatch.setattr(dispatcher.os, 'cpu_count', lambda: 2)
    output = tmp_path / 'out.csv'
    error_log = tmp_path / 'errors.txt'
    sink = ResultSink(str(output), str(error_log))
    sink.prepare()

    def broken_append(outcome):
        raise OSError('disk full')

    monkeypatch.setattr(sink, '_append_rows', broken_append)

    summary = WorkDispatcher(SlowCrawler(delay=0.001), sink, max_workers=2).run(['alice'])

    assert summary.completed == 1
    assert summary.failed == 1
    assert error_log.read_text(encoding='utf-8') == 'alice: Failed to write results: disk full\n'


def test_failing_error_log_does_not_stop_the_run(monkeypatch):
    monkeypatch.setattr(dispatcher.os, 'cpu_count', lambda: 2)
    sink = RecordingSink(fail_for={'a', 'b', 'c'})
    work = WorkDispatcher(SlowCrawler(delay=0.001), sink, max_workers=2)

    summary = work.run(['a', 'b', 'c'])

    assert work.done.is_set()
    assert summary.completed == summary.failed == 3

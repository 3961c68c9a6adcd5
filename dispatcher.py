"""
Worker pool that drains the username queue through the fetch pipeline
"""

import os
import queue
import logging
import threading
from dataclasses import dataclass

from config import LOGGER_NAME
from models import FailureOutcome


@dataclass
class DispatchSummary:
    total: int
    completed: int
    succeeded: int
    failed: int


def pool_size(max_workers):
    """Number of worker threads: CPU count, capped by max_workers"""
    return max(1, min(os.cpu_count() or 1, max_workers))


class WorkDispatcher:
    """
    Runs a fixed pool of worker threads. Each worker pulls one username at a
    time, runs it through the crawler and hands the outcome to the sink,
    until the queue is empty.
    """

    def __init__(self, crawler, sink, max_workers, progress=None):
        self.crawler = crawler
        self.sink = sink
        self.worker_count = pool_size(max_workers)
        self.progress = progress
        self.logger = logging.getLogger(LOGGER_NAME)

        self.done = threading.Event()
        self._queue = queue.Queue()
        self._lock = threading.Lock()
        self.total_count = 0
        self.completed_count = 0
        self.succeeded_count = 0
        self.failed_count = 0

    def run(self, usernames):
        """Process every username once and block until all workers exit"""
        for username in usernames:
            self._queue.put(username)
        self.total_count = self._queue.qsize()

        if self.total_count == 0:
            self.logger.warning("No usernames to process.")
            self._signal_done()
            return self.summary()

        self.logger.info(f"Starting {self.worker_count} worker threads...")

        workers = [
            threading.Thread(target=self._work, name=f'scraper-worker-{i + 1}', daemon=True)
            for i in range(self.worker_count)
        ]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()

        return self.summary()

    def summary(self):
        with self._lock:
            return DispatchSummary(
                total=self.total_count,
                completed=self.completed_count,
                succeeded=self.succeeded_count,
                failed=self.failed_count,
            )

    def _work(self):
        while True:
            try:
                username = self._queue.get_nowait()
            except queue.Empty:
                return

            outcome = self.crawler.process(username)
            succeeded = outcome.succeeded
            try:
                self.sink.record(outcome)
            except Exception as e:
                # Still counted below, otherwise the run never completes
                self.logger.error(f"Failed to write results for {username}: {e}")
                succeeded = False
                if outcome.succeeded:
                    self._record_write_failure(username, e)
            self._mark_completed(succeeded)

    def _record_write_failure(self, username, error):
        try:
            self.sink.record(FailureOutcome(username, f"Failed to write results: {error}"))
        except Exception as e:
            self.logger.error(f"Failed to log the error for {username}: {e}")

    def _mark_completed(self, succeeded):
        with self._lock:
            self.completed_count += 1
            if succeeded:
                self.succeeded_count += 1
            else:
                self.failed_count += 1
            completed = self.completed_count
            if self.progress is not None:
                self.progress.update(1)

        self.logger.info(f"Processed {completed}/{self.total_count} users")
        if completed == self.total_count:
            self._signal_done()

    def _signal_done(self):
        # Only the worker that brings completed_count to total gets here
        self.done.set()
        self.logger.info("All tasks completed.")

"""
Input reading and result output for GitHub Profile Scraper
"""

import os
import logging
import threading

import pandas as pd

from config import (
    ConfigurationError, DEFAULT_INPUT_COLUMN, DEFAULT_ERROR_LOG, LOGGER_NAME
)
from models import OUTPUT_HEADERS, RowsOutcome


class DataHandler:
    def __init__(self):
        self.logger = logging.getLogger(LOGGER_NAME)

    def read_usernames(self, input_file, column=DEFAULT_INPUT_COLUMN):
        """Read the unique logins from one column of the input CSV"""
        if not os.path.exists(input_file):
            raise ConfigurationError(f"Input file not found: {input_file}")

        try:
            df = pd.read_csv(input_file, dtype=str, skip_blank_lines=True)
        except pd.errors.EmptyDataError as e:
            raise ConfigurationError(f"Input file is empty: {input_file}") from e
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Could not parse {input_file}: {e}") from e

        if column not in df.columns:
            raise ConfigurationError(
                f"Column '{column}' not found in {input_file}. "
                f"Available columns: {', '.join(map(str, df.columns))}"
            )

        logins = df[column].dropna().str.strip()
        logins = logins[logins != '']

        initial_count = len(logins)
        logins = logins.drop_duplicates(keep='first')
        removed = initial_count - len(logins)
        if removed > 0:
            self.logger.info(f"Removed {removed} duplicate usernames from input")

        self.logger.info(f"Loaded {len(logins)} unique usernames from {input_file}")
        return logins.tolist()


class ResultSink:
    """
    Appends outcomes to the output CSV and the error log. A lock keeps each
    user's rows together when several workers finish at the same time.
    """

    def __init__(self, output_file, error_log=DEFAULT_ERROR_LOG):
        self.output_file = output_file
        self.error_log = error_log
        self.rows_written = 0
        self.errors_written = 0
        self._lock = threading.Lock()
        self.logger = logging.getLogger(LOGGER_NAME)

    def prepare(self):
        """Start a fresh output file with the header row and an empty error log"""
        with self._lock:
            pd.DataFrame(columns=OUTPUT_HEADERS).to_csv(self.output_file, index=False)
            with open(self.error_log, 'w', encoding='utf-8'):
                pass
        self.logger.info(f"Writing results to {self.output_file}, errors to {self.error_log}")

    def record(self, outcome):
        if isinstance(outcome, RowsOutcome):
            self._append_rows(outcome)
        else:
            self._append_error(outcome)

    def _append_rows(self, outcome):
        block = pd.DataFrame(outcome.rows, columns=OUTPUT_HEADERS)
        # Rendered up front; the block reaches the file in a single write
        text = block.to_csv(header=False, index=False)
        with self._lock:
            with open(self.output_file, 'a', newline='', encoding='utf-8') as f:
                f.write(text)
            self.rows_written += len(block)
        self.logger.debug(f"Wrote {len(block)} rows for {outcome.username}")

    def _append_error(self, outcome):
        self.logger.error(f"Error processing {outcome.username}: {outcome.reason}")
        with self._lock:
            with open(self.error_log, 'a', encoding='utf-8') as f:
                f.write(f"{outcome.username}: {outcome.reason}\n")
            self.errors_written += 1

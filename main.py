"""
Main script to run the GitHub Profile Scraper
"""

import sys
import logging
import argparse

from tqdm import tqdm

from config import (
    ConfigurationError, load_config,
    DEFAULT_OUTPUT_FILE, DEFAULT_ERROR_LOG, DEFAULT_INPUT_COLUMN, DEFAULT_LOG_LEVEL
)
from crawler import ProfileCrawler
from data_handler import DataHandler, ResultSink
from dispatcher import WorkDispatcher
from utils import setup_logging


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='gh-profile-scraper',
        description='Fetch GitHub profiles, repositories and latest commits for a list of users.'
    )
    parser.add_argument('input_file', help='CSV file with a column of GitHub logins')
    parser.add_argument('output_file', nargs='?', default=DEFAULT_OUTPUT_FILE,
                        help=f'output CSV (default: {DEFAULT_OUTPUT_FILE})')
    parser.add_argument('--error-log', default=DEFAULT_ERROR_LOG,
                        help=f'file listing users that failed (default: {DEFAULT_ERROR_LOG})')
    parser.add_argument('--column', default=DEFAULT_INPUT_COLUMN,
                        help=f'input column holding the logins (default: {DEFAULT_INPUT_COLUMN})')
    parser.add_argument('--max-workers', type=int, help='cap on concurrent worker threads')
    parser.add_argument('--retry-delay', type=float, help='seconds to wait after a rate-limited response')
    parser.add_argument('--max-retries', type=int, help='retries per request when rate limited')
    parser.add_argument('--timeout', type=float, help='per-request timeout in seconds')
    parser.add_argument('--log-level', default=logging.getLevelName(DEFAULT_LOG_LEVEL),
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return parser.parse_args(argv)


def main(argv=None):
    """Run the scraper and return the process exit code"""
    args = parse_args(argv)
    logger = setup_logging(getattr(logging, args.log_level))

    try:
        config = load_config(
            max_workers=args.max_workers,
            retry_delay=args.retry_delay,
            max_retries=args.max_retries,
            request_timeout=args.timeout,
        )
        usernames = DataHandler().read_usernames(args.input_file, args.column)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    logger.info("Configuration:")
    logger.info(f"- Input file: {args.input_file}")
    logger.info(f"- Output file: {args.output_file}")
    logger.info(f"- Max workers: {config.max_workers}")
    logger.info(f"- Retry delay: {config.retry_delay}s, max retries: {config.max_retries}")

    sink = ResultSink(args.output_file, args.error_log)
    sink.prepare()

    with tqdm(total=len(usernames), desc="Scraping users", unit="user") as pbar:
        dispatcher = WorkDispatcher(ProfileCrawler(config), sink, config.max_workers, progress=pbar)
        summary = dispatcher.run(usernames)

    logger.info("SUMMARY:")
    logger.info(f"- Users processed: {summary.completed}/{summary.total}")
    logger.info(f"- Succeeded: {summary.succeeded}, failed: {summary.failed}")
    logger.info(f"- Rows written: {sink.rows_written}")
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()

"""
processing.py

High-level completeness checks for DAS file-count data.
Walks the observed calendar range, collects data gaps and computes
the percent completeness against the expected files per day.
"""

import pandas as pd
from datetime import timedelta
from pathlib import Path
import completeness_DAS.data_io as io
import logging
import traceback

DEFAULT_SETTINGS = {
    'expected_per_day': 1440,   # one file per minute
    'input_file': 'rainier_count.txt'
}

logging.getLogger(__name__).addHandler(logging.NullHandler())


class InvalidDateRangeError(ValueError):
    """
    Raised when the last date of the count file comes before the first one.
    """


def init_logger(log_dir=None):
    if log_dir is not None:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        logging.basicConfig(
            filename=str(Path(log_dir) / 'check_data_gaps.log'),
            level=logging.ERROR,  # Only log ERROR and above
            format='%(message)s',
            filemode='w'
        )
    logger = logging.getLogger(__name__)
    return logger

def log_error(logger, error_text, exception, include_traceback=False):
    error_message = f"{error_text}; {str(exception)}"
    if include_traceback:
        error_message += f"\nTraceback: {traceback.format_exc()}"
    logger.error(error_message)
    return error_message

def walk_dates(first_date, last_date):
    """
    Calendar days from first_date up to, but not including, last_date.
    """
    if first_date is None or last_date is None:
        return []
    if last_date < first_date:
        raise InvalidDateRangeError(
            f"last date {last_date} is before first date {first_date}; "
            "count file lines must be sorted by date")
    if last_date == first_date:
        return []
    days = pd.date_range(first_date, last_date - timedelta(days=1), freq='D')
    return [d.date() for d in days]

def analyze_file_counts(file_counts, first_date, last_date, expected_per_day=1440):
    """
    Find data gaps and percent completeness over the walked date range.

    The walk starts at first_date and stops before last_date, so the final
    date of the count file is never counted, even when it has missing files.
    Days absent from file_counts count as 0 observed files.

    Parameters:
    -----------
    file_counts : dict
        datetime.date -> observed file count
    first_date, last_date : datetime.date or None
        Range as read from the count file (file order)
    expected_per_day : int
        Number of files expected for a complete day

    Returns:
    --------
    gaps : list of (datetime.date, int)
        (day, missing file count) for every walked day below expected_per_day,
        in chronological order
    summary : dict
        total_expected, total_observed, percent, walked_days, first_date, last_date
    """
    days = walk_dates(first_date, last_date)
    total_expected = 0
    total_observed = 0
    gaps = []
    for day in days:
        observed = file_counts.get(day, 0)
        total_expected += expected_per_day
        total_observed += observed
        if observed < expected_per_day:
            gaps.append((day, expected_per_day - observed))

    if total_expected > 0:
        percent = round(total_observed / total_expected * 100, 2)
    else:
        percent = 0.0

    summary = {
        'total_expected': total_expected,
        'total_observed': total_observed,
        'percent': percent,
        'walked_days': len(days),
        'first_date': first_date,
        'last_date': last_date
    }
    return gaps, summary

def check_data_gaps(filepath=None, settings=None, verbose=False, log_dir=None):
    """
    Load a daily file-count file and analyze it for data gaps.
    Errors are logged and re-raised to the caller.
    """
    settings = {**DEFAULT_SETTINGS, **(settings or {})}
    if filepath is None:
        filepath = settings['input_file']
    logger = init_logger(log_dir)

    try:
        if verbose:
            print(f"Reading file counts: {filepath}")
        file_counts, first_date, last_date = io.load_file_counts(filepath)
        if verbose:
            print(f"  {len(file_counts)} days with records, range {first_date} -> {last_date}")

        gaps, summary = analyze_file_counts(
            file_counts, first_date, last_date,
            expected_per_day=settings['expected_per_day']
        )
        if verbose:
            print(f"  walked {summary['walked_days']} days, {len(gaps)} with missing files")

    except (FileNotFoundError, io.MalformedRecordError, InvalidDateRangeError) as e:
        log_error(logger, f"error checking data gaps in {filepath}", e)
        raise

    return {
        'gaps': gaps,
        'summary': summary,
        'file_counts': file_counts,
        'input_file': str(filepath),
        'settings': settings
    }

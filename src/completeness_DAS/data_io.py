"""
data_io.py

Input functions for DAS file-count completeness checks.
Reads the per-day count file written by the directory counting step
(one "YYYY-MM-DD <count> files" line per day).
"""

import re
from pathlib import Path
import numpy as np
import pandas as pd

_DATE_PATTERN = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}')
_COUNT_PATTERN = re.compile(r'[0-9]+')

# counts are held in int64 arrays for the per-day table
MAX_COUNT = np.iinfo(np.int64).max


class MalformedRecordError(ValueError):
    """
    Raised when a line of the count file can't be read as (date, count).
    """

    def __init__(self, message, filepath=None, line_number=None, line=None):
        self.filepath = filepath
        self.line_number = line_number
        self.line = line
        if filepath is not None and line_number is not None:
            message = f"{filepath}, line {line_number}: {message} ({line!r})"
        super().__init__(message)


def parse_date(date_str):
    """
    Parse a YYYY-MM-DD token into a datetime.date.
    """
    if not _DATE_PATTERN.fullmatch(date_str):
        raise MalformedRecordError(f"invalid date '{date_str}', expected YYYY-MM-DD")
    try:
        ts = pd.to_datetime(date_str, format='%Y-%m-%d')
    except (ValueError, TypeError) as e:
        raise MalformedRecordError(f"invalid date '{date_str}'") from e
    return ts.date()


def parse_count_line(line):
    """
    Parse one non-blank line of a count file.

    Parameters:
    -----------
    line : str
        Line of the form '<date> <count> [ignored extra fields]'

    Returns:
    --------
    date : datetime.date
    count : int
        Non-negative number of files observed on that day
    """
    fields = line.split()
    if len(fields) < 2:
        raise MalformedRecordError("expected '<date> <count>'")
    date_str, count_str = fields[0], fields[1]

    day = parse_date(date_str)
    if not _COUNT_PATTERN.fullmatch(count_str):
        raise MalformedRecordError(f"count '{count_str}' is not a non-negative integer")
    count = int(count_str)
    if count > MAX_COUNT:
        raise MalformedRecordError(f"count '{count_str}' is too large")
    return day, count


def load_file_counts(filepath):
    """
    Load a daily file-count text file.

    Later lines for the same date overwrite earlier ones. The date range is
    taken from file order: first_date is the date on the first record line
    and last_date the date on the last one, whichever is chronologically
    earlier.

    Parameters:
    -----------
    filepath : str or Path
        Path to the count file (UTF-8 text)

    Returns:
    --------
    file_counts : dict
        datetime.date -> observed file count
    first_date : datetime.date or None
        None if the file holds no records
    last_date : datetime.date or None
    """
    filepath = Path(filepath)
    if not filepath.is_file():
        raise FileNotFoundError(f"File '{filepath}' not found.")
    try:
        f = open(filepath, 'rb')
    except OSError as e:
        raise FileNotFoundError(f"File '{filepath}' could not be read: {e.strerror}") from e

    file_counts = {}
    first_date = None
    last_date = None
    with f:
        for line_number, raw in enumerate(f, start=1):
            try:
                line = raw.decode('utf-8')
            except UnicodeDecodeError as e:
                raise MalformedRecordError("line is not valid UTF-8 text", filepath,
                                           line_number, raw.rstrip(b'\r\n')) from e
            if not line.strip():
                continue
            try:
                day, count = parse_count_line(line)
            except MalformedRecordError as e:
                raise MalformedRecordError(str(e), filepath, line_number, line.rstrip('\r\n')) from e
            file_counts[day] = count
            if first_date is None:
                first_date = day
            last_date = day

    return file_counts, first_date, last_date

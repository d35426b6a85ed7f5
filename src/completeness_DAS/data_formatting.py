"""
data_formatting.py

Formatting of completeness results: the plain text gap report and a
per-day table for export.
"""

import numpy as np
import pandas as pd
from completeness_DAS.processing import walk_dates


def format_gap_report(gaps, summary):
    """
    Build the gap report as a list of lines.

    Parameters:
    -----------
    gaps : list of (datetime.date, int)
        Days with missing files, as returned by analyze_file_counts
    summary : dict
        Completeness summary, as returned by analyze_file_counts

    Returns:
    --------
    lines : list of str
        'Data Gaps:' header, one '<date> <n> files missing' line per gap,
        then 'Percent Completeness: <pp.pp>%'
    """
    lines = ["Data Gaps:"]
    for day, missing in gaps:
        lines.append(f"{day.isoformat()} {missing} files missing")
    lines.append(f"Percent Completeness: {summary['percent']:.2f}%")
    return lines

def daily_table(file_counts, first_date, last_date, expected_per_day=1440):
    """
    One row per walked day with observed, expected and missing file counts.
    Follows the same range rules as analyze_file_counts (last date excluded).
    """
    days = walk_dates(first_date, last_date)
    observed = np.array([file_counts.get(day, 0) for day in days], dtype=np.int64)
    missing = np.clip(expected_per_day - observed, 0, None)

    table = pd.DataFrame({
        'date': pd.to_datetime(days),
        'observed': observed,
        'expected': np.full(len(days), expected_per_day, dtype=np.int64),
        'missing': missing,
    })
    table['percent'] = (table['observed'] / expected_per_day * 100).round(2)
    return table

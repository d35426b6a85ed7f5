"""
Command line interface for the data gap finder and completeness calculator.

Reads a daily file-count text file ("YYYY-MM-DD <count> files" per line),
prints each day with missing files and the percent completeness.
"""

import argparse
import sys
from completeness_DAS import processing
from completeness_DAS.data_io import MalformedRecordError
from completeness_DAS.data_formatting import format_gap_report, daily_table


def build_parser():
    description = "Find data gaps and percent completeness in daily DAS file counts"
    parser = argparse.ArgumentParser(prog = "check_data_gaps",
                                     description = description)
    parser.add_argument("file",
                        nargs = '?',
                        default = processing.DEFAULT_SETTINGS['input_file'],
                        help = 'Daily file-count text file (default: %(default)s).')
    parser.add_argument("--expected-per-day",
                        type = int,
                        default = processing.DEFAULT_SETTINGS['expected_per_day'],
                        help = 'Files expected for a complete day (default: %(default)s).')
    parser.add_argument("--csv",
                        type = str,
                        default = None,
                        help = 'Also write the per-day table to this CSV file.')
    parser.add_argument("--log-dir",
                        type = str,
                        default = None,
                        help = 'Directory for check_data_gaps.log.')
    parser.add_argument("-v", "--verbose",
                        action = 'store_true',
                        help = 'Print progress information.')
    return parser


def main(argv = None):
    """Run the gap check and return the process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.expected_per_day <= 0:
        parser.error("--expected-per-day must be a positive integer")

    settings = {'expected_per_day': args.expected_per_day}
    try:
        results = processing.check_data_gaps(args.file, settings,
                                             verbose = args.verbose,
                                             log_dir = args.log_dir)
    except (FileNotFoundError, MalformedRecordError, processing.InvalidDateRangeError) as e:
        print(f"Error: {e}", file = sys.stderr)
        return 1

    for line in format_gap_report(results['gaps'], results['summary']):
        print(line)

    if args.csv is not None:
        summary = results['summary']
        table = daily_table(results['file_counts'], summary['first_date'],
                            summary['last_date'], args.expected_per_day)
        table.to_csv(args.csv, index = False, date_format = '%Y-%m-%d')
        if args.verbose:
            print(f"Per-day table saved to {args.csv}")
    return 0


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()

import io
import unittest
import tempfile
from contextlib import redirect_stdout, redirect_stderr
from pathlib import Path
from unittest.mock import patch

import pandas as pd

from completeness_DAS.cli import main


class TestCli(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def run_cli(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main([str(a) for a in argv])
        return code, out.getvalue(), err.getvalue()

    def write(self, text, name="counts.txt"):
        path = self.dir / name
        path.write_text(text)
        return path

    def test_partial_day_report(self):
        path = self.write("2023-11-01 1440 files\n2023-11-02 1200 files\n2023-11-03 1440 files\n")
        code, out, err = self.run_cli(path)
        self.assertEqual(code, 0)
        self.assertEqual(out, "Data Gaps:\n2023-11-02 240 files missing\nPercent Completeness: 91.67%\n")
        self.assertEqual(err, "")

    def test_missing_day_report(self):
        path = self.write("2023-01-01 1440 files\n2023-01-03 1440 files\n")
        code, out, _ = self.run_cli(path)
        self.assertEqual(code, 0)
        self.assertEqual(out, "Data Gaps:\n2023-01-02 1440 files missing\nPercent Completeness: 50.00%\n")

    def test_empty_file(self):
        path = self.write("")
        code, out, _ = self.run_cli(path)
        self.assertEqual(code, 0)
        self.assertEqual(out, "Data Gaps:\nPercent Completeness: 0.00%\n")

    def test_single_line(self):
        path = self.write("2023-01-01 10 files\n")
        code, out, _ = self.run_cli(path)
        self.assertEqual(code, 0)
        self.assertEqual(out, "Data Gaps:\nPercent Completeness: 0.00%\n")

    def test_nonexistent_file(self):
        missing = self.dir / "rainier_count.txt"
        code, out, err = self.run_cli(missing)
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn(str(missing), err)

    def test_unreadable_file(self):
        path = self.write("2023-01-01 1440 files\n")
        with patch("completeness_DAS.data_io.open", create=True,
                   side_effect=PermissionError(13, "Permission denied")):
            code, out, err = self.run_cli(path)
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn(str(path), err)

    def test_undecodable_file(self):
        path = self.dir / "counts.txt"
        path.write_bytes(b"\xff 1440 files\n")
        code, out, err = self.run_cli(path)
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("line 1", err)

    def test_non_date_token(self):
        path = self.write("now 1440 files\n2023-01-02 1440 files\n")
        code, out, err = self.run_cli(path)
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("line 1", err)

    def test_oversized_count(self):
        path = self.write("2023-01-01 99999999999999999999 files\n2023-01-02 1440 files\n")
        code, out, err = self.run_cli(path)
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("too large", err)

    def test_malformed_count(self):
        path = self.write("2023-01-01 1440 files\n2023-01-02 ?? files\n")
        code, out, err = self.run_cli(path)
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("line 2", err)

    def test_reversed_dates(self):
        path = self.write("2023-01-05 1440 files\n2023-01-01 1440 files\n")
        code, out, err = self.run_cli(path)
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("before first date", err)

    def test_expected_per_day_and_csv(self):
        path = self.write("2023-01-01 24 files\n2023-01-02 12 files\n2023-01-03 24 files\n")
        csv_path = self.dir / "daily.csv"
        code, out, _ = self.run_cli(path, "--expected-per-day", 24, "--csv", csv_path)
        self.assertEqual(code, 0)
        self.assertEqual(out, "Data Gaps:\n2023-01-02 12 files missing\nPercent Completeness: 75.00%\n")
        table = pd.read_csv(csv_path)
        self.assertEqual(list(table['date']), ['2023-01-01', '2023-01-02'])
        self.assertEqual(list(table['missing']), [0, 12])

    def test_rejects_non_positive_expected(self):
        path = self.write("2023-01-01 24 files\n")
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main([str(path), "--expected-per-day", "0"])
        self.assertEqual(ctx.exception.code, 2)


if __name__ == '__main__':
    unittest.main()

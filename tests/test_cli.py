"""
Tests for CLI entry points.

These tests focus on:
- check/show on a timetable file given on the command line
- exit codes for invalid data and missing credentials
- fetch with the HTTP client mocked out, writing to a temporary file
"""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from datetime import date
from pathlib import Path
from unittest.mock import patch

from cmstimetable.cli import _default_year, main


def write_json(directory: str, name: str, data) -> str:
    p = Path(directory) / name
    p.write_text(json.dumps(data), encoding="utf-8")
    return str(p)


def document(first_period_events):
    periods = [{"events": first_period_events}, {"events": []}]
    return {"week_type": "A", "weekdays": [{"periods": periods} for _ in range(5)]}


PERIODS = [["08:00", "08:40"], ["08:50", "09:30"]]

VALID = document(
    [
        {"type": 1, "id": 1, "name": "Math", "room": "101", "week_type": "A"},
        {"type": 2, "id": 2, "name": "Chess", "room": "Hall", "week_type": "B"},
    ]
)

INVALID = document(
    [
        {"type": 1, "id": 1, "name": "Math", "room": "101", "week_type": "B"},
        {"type": 2, "id": 2, "name": "Chess", "room": "Hall", "week_type": "B"},
    ]
)


def run(argv):
    out = io.StringIO()
    with redirect_stdout(out):
        try:
            main(argv)
        except SystemExit as exc:
            return exc.code, out.getvalue()
    raise AssertionError("main() did not exit")


class TestCLI(unittest.TestCase):
    def test_check_valid(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            code, out = run(["check", write_json(d, "t.json", VALID), "--periods", write_json(d, "p.json", PERIODS)])
        self.assertEqual(code, 0)
        self.assertIn("OK: week A, 2 periods per day", out)

    def test_check_invalid(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            code, out = run(["check", write_json(d, "t.json", INVALID), "--periods", write_json(d, "p.json", PERIODS)])
        self.assertEqual(code, 1)
        self.assertIn("Invalid timetable: Monday, period 0", out)

    def test_check_wrong_table_size(self) -> None:
        # default table has more periods than the document
        with tempfile.TemporaryDirectory() as d:
            code, out = run(["check", write_json(d, "t.json", VALID)])
        self.assertEqual(code, 1)
        self.assertIn("Invalid timetable", out)

    def test_check_bad_period_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            periods = write_json(d, "p.json", [["09:00", "08:00"]])
            code, out = run(["check", write_json(d, "t.json", VALID), "--periods", periods])
        self.assertEqual(code, 1)
        self.assertIn("Error:", out)

    def test_show_week_b(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            code, out = run(
                ["show", write_json(d, "t.json", VALID), "--periods", write_json(d, "p.json", PERIODS), "--week", "B"]
            )
        self.assertEqual(code, 0)
        self.assertIn("Week B", out)
        self.assertIn("Chess", out)
        self.assertNotIn("Math", out)

    def test_show_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            code, out = run(["show", str(Path(d) / "nope.json")])
        self.assertEqual(code, 1)
        self.assertIn("Cannot read", out)

    def test_fetch_requires_credentials(self) -> None:
        with patch.dict(os.environ, {"CMS_USERNAME": "", "CMS_PASSWORD": ""}):
            code, out = run(["fetch"])
        self.assertEqual(code, 1)
        self.assertIn("CMS_USERNAME", out)

    def test_fetch_saves_document(self) -> None:
        env = {"CMS_USERNAME": "s22901", "CMS_PASSWORD": "secret"}
        with tempfile.TemporaryDirectory() as d, patch.dict(os.environ, env), patch("cmstimetable.cli.CMSClient") as cls:
            client = cls.return_value
            client.fetch_timetable_json.return_value = VALID
            out_path = Path(d) / "cache.json"

            code, out = run(["fetch", "--year", "2023", "--out", str(out_path)])

            self.assertEqual(code, 0)
            client.login.assert_called_once_with("s22901", "secret")
            client.fetch_timetable_json.assert_called_once_with(2023)
            self.assertEqual(json.loads(out_path.read_text(encoding="utf-8")), VALID)

    def test_default_year(self) -> None:
        self.assertEqual(_default_year(date(2024, 9, 1)), 2024)
        self.assertEqual(_default_year(date(2025, 3, 1)), 2024)


if __name__ == "__main__":
    unittest.main()

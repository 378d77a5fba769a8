import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

import matplotlib
matplotlib.use("Agg")

from panelpack.cli import main


def run_cli(*argv):
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        status = main(list(argv))
    return status, out.getvalue(), err.getvalue()


class TestCommandLine(unittest.TestCase):
    def test_defaults_pack_hexagonal_tight(self):
        status, out, _ = run_cli()
        self.assertEqual(status, 0)
        self.assertIn("Number of circles: 51", out)
        self.assertIn("Pattern: triangular (60.0°)", out)

    def test_rectangular_spread(self):
        status, out, _ = run_cli("--pattern", "rectangular", "--spread")
        self.assertEqual(status, 0)
        self.assertIn("Bounding box width: 600.00 mm", out)
        self.assertIn("Vertical clearance: 10.50 mm", out)

    def test_optimize_json(self):
        status, out, _ = run_cli("--optimize", "--json")
        self.assertEqual(status, 0)
        data = json.loads(out)
        self.assertEqual(data["count"], 64)
        self.assertEqual(data["num_rows"], 4)
        self.assertTrue(data["spread"])

    def test_custom_dimensions_and_unit(self):
        status, out, _ = run_cli(
            "--diameter", "10", "--clearance", "2", "--width", "100", "--height", "50",
            "--pattern", "rectangular", "--unit", "in",
        )
        self.assertEqual(status, 0)
        self.assertIn("Circles per row: 8", out)
        self.assertIn("Horizontal clearance: 2.00 in", out)

    def test_invalid_input_exits_with_error(self):
        status, out, err = run_cli("--diameter", "0")
        self.assertEqual(status, 2)
        self.assertEqual(out, "")
        self.assertIn("diameter must be positive", err)

    def test_negative_rows_rejected(self):
        status, _, err = run_cli("--rows", "-1")
        self.assertEqual(status, 2)
        self.assertIn("forced_rows", err)

    def test_rows_beyond_panel_rejected(self):
        status, _, err = run_cli("--rows", "6", "--spread")
        self.assertEqual(status, 2)
        self.assertIn("6 rows", err)

    def test_conflicting_flags_are_usage_errors(self):
        combos = [
            ("--pattern", "rectangular", "--optimize"),
            ("--pattern", "rectangular", "--rows", "2"),
            ("--pattern", "rectangular", "--angle", "45"),
            ("--optimize", "--rows", "3"),
            ("--optimize", "--angle", "50"),
        ]
        for argv in combos:
            with self.subTest(argv=argv):
                with self.assertRaises(SystemExit) as ctx:
                    run_cli(*argv)
                self.assertEqual(ctx.exception.code, 2)

    def test_spread_with_optimize_is_accepted(self):
        status, out, _ = run_cli("--optimize", "--spread")
        self.assertEqual(status, 0)
        self.assertIn("Number of circles: 64", out)

    def test_plot_written(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "out.png")
            status, _, _ = run_cli("--plot", path)
            self.assertEqual(status, 0)
            self.assertTrue(os.path.exists(path))


if __name__ == '__main__':
    unittest.main()

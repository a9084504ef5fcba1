"""CLI option parsing, exit status, and default-path behavior tests.

Verifies how ``pdir.cli.main`` merges options over config defaults.
Prevents regressions in command-line entrypoint ergonomics.
"""

from __future__ import annotations

import io
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from pdir import cli
from pdir.about import PROGRAM_NAME, PROGRAM_VERSION
from pdir.errors import ACCESS_FAILURE, ALLOCATION_FAILURE, CMDLINE_FAILURE
from pdir.listing import TIME_ATIME, TIME_CTIME, VISIBILITY_ALL, VISIBILITY_ALMOST_ALL, ListingOptions, SlotBuffer


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        config_dir = tempfile.TemporaryDirectory()
        self.addCleanup(config_dir.cleanup)
        self.config_path = Path(config_dir.name) / "config.json"
        config_patch = mock.patch("pdir.config.CONFIG_PATH", self.config_path)
        config_patch.start()
        self.addCleanup(config_patch.stop)

    def _main(self, argv: list[str], cwd: Path | None = None) -> tuple[int, str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        previous_cwd = Path.cwd()
        status = 0
        try:
            if cwd is not None:
                os.chdir(cwd)
            with mock.patch("sys.stdout", stdout), mock.patch("sys.stderr", stderr):
                try:
                    cli.main(argv)
                except SystemExit as exc:
                    status = exc.code if isinstance(exc.code, int) else 1
        finally:
            os.chdir(previous_cwd)
        return status, stdout.getvalue(), stderr.getvalue()

    def test_main_defaults_to_current_working_directory_when_no_path_arg(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "visible.txt").write_text("x", encoding="utf-8")
            (root / ".hidden").write_text("x", encoding="utf-8")

            status, out, err = self._main([], cwd=root)

            self.assertEqual(status, 0)
            self.assertEqual(out, "visible.txt\n")
            self.assertEqual(err, "")

    def test_combined_short_flags_enable_all_and_long_format(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "f").write_text("x", encoding="utf-8")

            status, out, _err = self._main(["-la", "."], cwd=root)

            rows = out.splitlines()
            self.assertEqual(status, 0)
            self.assertEqual([row.split()[-1] for row in rows], [".", "..", "f"])
            self.assertTrue(rows[0].startswith("d"))
            self.assertTrue(rows[2].startswith("-"))

    def test_missing_path_exits_with_access_failure_and_no_output(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            status, out, err = self._main(["nonexistent"], cwd=Path(tmp))

        self.assertEqual(status, ACCESS_FAILURE)
        self.assertEqual(out, "")
        self.assertIn("pdir: cannot access 'nonexistent'", err)

    def test_unknown_option_prints_usage_to_stderr(self) -> None:
        status, out, err = self._main(["--bogus"])

        self.assertEqual(status, CMDLINE_FAILURE)
        self.assertEqual(out, "")
        self.assertIn("usage: pdir [OPTION]... [FILE]...", err)
        self.assertIn("Try 'pdir --help'", err)

    def test_invalid_time_word_is_command_line_misuse(self) -> None:
        status, _out, err = self._main(["--time=yesterday"])

        self.assertEqual(status, CMDLINE_FAILURE)
        self.assertIn("invalid argument 'yesterday'", err)

    def test_help_prints_usage_to_stdout_and_exits_zero(self) -> None:
        status, out, _err = self._main(["--help"])

        self.assertEqual(status, 0)
        self.assertIn("usage: pdir [OPTION]... [FILE]...", out)
        self.assertIn("--almost-all", out)

    def test_version_prints_name_version_and_license_notice(self) -> None:
        status, out, _err = self._main(["--version"])

        self.assertEqual(status, 0)
        lines = out.splitlines()
        self.assertEqual(lines[0], "pdir 0.1")
        self.assertEqual(lines[1], "Copyright (C) 2019 LeavaTail")
        self.assertIn("free software", out)

    def test_allocation_failure_exits_immediately(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch.object(SlotBuffer, "_new_slots", side_effect=MemoryError):
                status, out, err = self._main(["."], cwd=Path(tmp))

        self.assertEqual(status, ALLOCATION_FAILURE)
        self.assertEqual(out, "")
        self.assertEqual(err, "pdir: memory exhausted\n")

    def test_config_defaults_apply_until_overridden_on_command_line(self) -> None:
        self.config_path.write_text('{"visibility": "almost-all"}', encoding="utf-8")
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / ".dot").write_text("x", encoding="utf-8")

            _status, from_config, _err = self._main([], cwd=root)
            _status, overridden, _err = self._main(["-a"], cwd=root)

        self.assertEqual(from_config, ".dot\n")
        self.assertEqual(overridden, ".\n..\n.dot\n")


class ResolveOptionsTests(unittest.TestCase):
    def test_parser_and_diagnostics_share_program_identity(self) -> None:
        self.assertEqual(cli.build_parser().prog, PROGRAM_NAME)
        self.assertTrue(cli.version_text().startswith(f"{PROGRAM_NAME} {PROGRAM_VERSION}\n"))

    def test_last_visibility_flag_wins_and_time_words_map_to_sources(self) -> None:
        parser = cli.build_parser()

        args = parser.parse_args(["-a", "-A", "--time", "status"])
        options = cli.resolve_options(args, ListingOptions())
        self.assertEqual(options.visibility, VISIBILITY_ALMOST_ALL)
        self.assertEqual(options.time_source, TIME_CTIME)
        self.assertFalse(options.long_format)

        args = parser.parse_args(["-A", "-a", "-u"])
        options = cli.resolve_options(args, ListingOptions(long_format=True))
        self.assertEqual(options.visibility, VISIBILITY_ALL)
        self.assertEqual(options.time_source, TIME_ATIME)
        self.assertTrue(options.long_format)

    def test_positional_arguments_after_double_dash_are_files(self) -> None:
        args = cli.build_parser().parse_args(["--", "-l"])
        self.assertEqual(args.files, ["-l"])
        self.assertIsNone(args.long_format)


if __name__ == "__main__":
    unittest.main()

"""
Unit tests for the console logger module.
"""
from __future__ import annotations

import io
import re
import unittest

from rich.console import Console
from rich.table import Table

from lbconfig.console.logger import LBCONFIG_THEME, Logger, get_logger


def strip_ansi(text: str) -> str:
    """Remove ANSI escape codes from text."""
    ansi_escape = re.compile(r'\x1b\[[0-9;]*m')
    return ansi_escape.sub('', text)


class TestLogger(unittest.TestCase):
    """Tests for the logger's output methods."""

    def setUp(self) -> None:
        """Set up a logger writing to a captured console."""
        self.output = io.StringIO()
        self.logger = Logger(
            console=Console(file=self.output, force_terminal=True, theme=LBCONFIG_THEME)
        )

    def text(self) -> str:
        return strip_ansi(self.output.getvalue())

    def test_warning_includes_icon(self) -> None:
        """warning() includes the warning icon."""
        self.logger.warning("Policy x not found in the LB registry, skipping")
        self.assertIn("⚠", self.text())
        self.assertIn("skipping", self.text())

    def test_table_with_data_prints(self) -> None:
        """table() with columns and rows prints immediately."""
        self.logger.table(
            title="Providers",
            columns=["name"],
            rows=[["round_robin"], ["wrr_locality"]],
        )
        out = self.text()
        self.assertIn("Providers", out)
        self.assertIn("round_robin", out)
        self.assertIn("wrr_locality", out)

    def test_table_without_data_returns_table(self) -> None:
        """table() without data returns a Table object and prints nothing."""
        table = self.logger.table(title="Empty")
        self.assertIsInstance(table, Table)
        self.assertEqual(self.output.getvalue(), "")


class TestLoggerSingleton(unittest.TestCase):
    """Tests for singleton pattern."""

    def test_get_logger_returns_same_instance(self) -> None:
        """get_logger() returns the same instance on multiple calls."""
        self.assertIsInstance(get_logger(), Logger)
        self.assertIs(get_logger(), get_logger())

    def test_default_console_writes_to_stderr(self) -> None:
        """The default console keeps stdout free for resolved configs."""
        self.assertTrue(Logger().console.stderr)


if __name__ == "__main__":
    unittest.main()

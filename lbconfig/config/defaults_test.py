"""
Unit tests for process-level defaults.
"""
from __future__ import annotations

import unittest

from lbconfig.config.defaults import (
    ENABLE_LEAST_REQUEST_ENV,
    EXTRA_PROVIDERS_ENV,
    Defaults,
)
from lbconfig.lb.registry import BUILTIN_PROVIDERS


class TestDefaults(unittest.TestCase):
    """Tests for Defaults and Defaults.from_env."""

    def test_plain_defaults(self) -> None:
        """Least request is off and only built-in providers are known."""
        d = Defaults()
        self.assertFalse(d.enable_least_request)
        self.assertEqual(d.providers, list(BUILTIN_PROVIDERS))

    def test_empty_environment(self) -> None:
        """An empty environment gives the plain defaults."""
        self.assertEqual(Defaults.from_env({}), Defaults())

    def test_least_request_flag_values(self) -> None:
        """Common truthy spellings enable least request; others do not."""
        for value in ("1", "true", "TRUE", " yes ", "on"):
            d = Defaults.from_env({ENABLE_LEAST_REQUEST_ENV: value})
            self.assertTrue(d.enable_least_request, value)
        for value in ("", "0", "false", "off", "maybe"):
            d = Defaults.from_env({ENABLE_LEAST_REQUEST_ENV: value})
            self.assertFalse(d.enable_least_request, value)

    def test_extra_providers(self) -> None:
        """Extra providers are appended once, after the built-ins."""
        d = Defaults.from_env(
            {EXTRA_PROVIDERS_ENV: "myPolicy, round_robin,,other,myPolicy"}
        )
        self.assertEqual(d.providers, [*BUILTIN_PROVIDERS, "myPolicy", "other"])


if __name__ == "__main__":
    unittest.main()

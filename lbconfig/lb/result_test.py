"""
Unit tests for resolution result values.
"""
from __future__ import annotations

import unittest

from lbconfig.lb.result import Err, ErrorKind, Ok, ResourceInvalidError


class TestResults(unittest.TestCase):
    """Tests for Ok and Err."""

    def test_ok(self) -> None:
        """Ok unwraps to its config and names its policy."""
        result = Ok({"round_robin": {}})
        self.assertTrue(result.ok)
        self.assertEqual(result.policy_name, "round_robin")
        self.assertEqual(result.unwrap(), {"round_robin": {}})

    def test_err_unwrap_raises(self) -> None:
        """Err unwraps by raising ResourceInvalidError with its kind."""
        result = Err(ErrorKind.RECURSION_EXCEEDED, "too deep")
        self.assertFalse(result.ok)
        with self.assertRaises(ResourceInvalidError) as ctx:
            result.unwrap()
        self.assertEqual(ctx.exception.kind, ErrorKind.RECURSION_EXCEEDED)
        self.assertEqual(str(ctx.exception), "too deep")

    def test_results_are_immutable(self) -> None:
        """Results cannot be reassigned after construction."""
        result = Err(ErrorKind.CONFIG_INVALID, "x")
        with self.assertRaises(AttributeError):
            result.message = "y"  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()

# tests/unit/core/test_configuration.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Unit tests for the Configuration and Metadata values."""

import dataclasses
import unittest

from nestedfst.core.configuration import Configuration, Metadata, create_config
from nestedfst.core.types import INVALID


class TestConfiguration(unittest.TestCase):
    """Test cases for the Configuration class.

    Tests verify:
    1. Defaults
    2. Copy-on-write builders
    3. Child management
    4. Parallel configurations
    5. Immutability
    """

    def setUp(self):
        """Set up test fixtures."""
        self.config = create_config("idle", data={"count": 0})

    def test_defaults(self):
        """Test a fresh configuration.

        Verifies:
        1. State defaults to INVALID
        2. No data, no children, no parallel configurations
        """
        config = create_config()
        self.assertIs(config.state, INVALID)
        self.assertIsNone(config.data)
        self.assertEqual(dict(config.children), {})
        self.assertEqual(config.parallel, ())
        self.assertFalse(config.is_initialized)

    def test_with_state_returns_copy(self):
        """Test that with_state leaves the receiver untouched."""
        moved = self.config.with_state("running")
        self.assertEqual(moved.state, "running")
        self.assertEqual(self.config.state, "idle")
        self.assertEqual(moved.data, {"count": 0})
        self.assertTrue(moved.is_initialized)

    def test_with_data(self):
        """Test replacing the data payload."""
        updated = self.config.with_data({"count": 1})
        self.assertEqual(updated.data, {"count": 1})
        self.assertEqual(self.config.data, {"count": 0})

    def test_with_child(self):
        """Test instantiating children.

        Verifies:
        1. Child is stored under its name
        2. Other children are carried over
        3. The receiver is unchanged
        """
        first = self.config.with_child("a", create_config("a0"))
        second = first.with_child("b", create_config("b0"))

        self.assertTrue(second.has_child("a"))
        self.assertTrue(second.has_child("b"))
        self.assertEqual(second.child("a").state, "a0")
        self.assertFalse(first.has_child("b"))
        self.assertFalse(self.config.has_child("a"))

    def test_with_child_replaces_existing(self):
        """Test that a child name is a unique key."""
        config = self.config.with_child("a", create_config("a0")).with_child("a", create_config("a1"))
        self.assertEqual(len(config.children), 1)
        self.assertEqual(config.child("a").state, "a1")

    def test_with_child_rejects_non_configuration(self):
        """Test that children must be configurations."""
        with self.assertRaises(TypeError):
            self.config.with_child("a", "a0")

    def test_without_child(self):
        """Test discarding children."""
        config = self.config.with_child("a", create_config("a0")).with_child("b", create_config("b0"))
        trimmed = config.without_child("a")
        self.assertFalse(trimmed.has_child("a"))
        self.assertTrue(trimmed.has_child("b"))
        self.assertIs(self.config.without_child("missing"), self.config)

    def test_child_missing_returns_none(self):
        """Test looking up an uninstantiated child."""
        self.assertIsNone(self.config.child("missing"))

    def test_children_view_is_read_only(self):
        """Test that children cannot be mutated through the view."""
        config = self.config.with_child("a", create_config("a0"))
        with self.assertRaises(TypeError):
            config.children["b"] = create_config("b0")

    def test_with_parallel(self):
        """Test parallel sibling configurations keep their order."""
        left = create_config("left")
        right = create_config("right")
        config = self.config.with_parallel(left, right)
        self.assertEqual(config.parallel, (left, right))
        self.assertEqual(self.config.parallel, ())

    def test_frozen(self):
        """Test that fields cannot be reassigned."""
        with self.assertRaises(dataclasses.FrozenInstanceError):
            self.config.state = "other"

    def test_value_equality(self):
        """Test that configurations compare by value."""
        a = create_config("s").with_child("c", create_config("x"))
        b = create_config("s").with_child("c", create_config("x"))
        self.assertEqual(a, b)
        self.assertNotEqual(a, b.with_child("c", create_config("y")))

    def test_unhashable(self):
        """Test configurations compare by value but cannot be hashed."""
        self.assertIsNone(Configuration.__hash__)
        with self.assertRaises(TypeError):
            hash(create_config("a"))
        with self.assertRaises(TypeError):
            {create_config("a").with_child("c", create_config("x"))}


class TestMetadata(unittest.TestCase):
    """Test cases for the Metadata class."""

    def test_copies_input_mapping(self):
        """Test that later changes to the source dict do not leak in."""
        source = {"a": Configuration(state="a0")}
        metadata = Metadata(children=source)
        source["b"] = Configuration(state="b0")
        self.assertNotIn("b", metadata.children)

    def test_without_missing_child_is_identity(self):
        """Test removing an absent child returns the same metadata."""
        metadata = Metadata()
        self.assertIs(metadata.without_child("x"), metadata)

    def test_parallel_coerced_to_tuple(self):
        """Test that parallel configurations are stored as a tuple."""
        metadata = Metadata(parallel=[Configuration(state="p")])
        self.assertIsInstance(metadata.parallel, tuple)

    def test_unhashable(self):
        """Test metadata cannot be used as a dict key."""
        with self.assertRaises(TypeError):
            hash(Metadata())


if __name__ == "__main__":
    unittest.main()

# tests/unit/core/test_errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from nestedfst.core.errors import (
    DuplicateTransitionError,
    GenerationError,
    TableError,
    TransducerError,
    UnknownChildError,
)


def test_error_hierarchy():
    assert issubclass(TableError, TransducerError)
    assert issubclass(DuplicateTransitionError, TableError)
    assert issubclass(UnknownChildError, TransducerError)
    assert issubclass(GenerationError, TransducerError)
    assert issubclass(TransducerError, Exception)


def test_error_messages():
    assert str(TransducerError("Custom base")) == "Custom base"
    assert str(TableError("Bad table")) == "Bad table"
    assert str(UnknownChildError("No child")) == "No child"
    assert str(GenerationError("Cannot generate")) == "Cannot generate"


def test_duplicate_transition_error_attributes():
    error = DuplicateTransitionError("idle", "start")
    assert error.state == "idle"
    assert error.input == "start"
    assert "idle" in str(error)
    assert "start" in str(error)
    assert isinstance(error, TableError)

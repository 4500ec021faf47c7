# nestedfst/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Hashable


class TransducerError(Exception):
    """
    Base exception class for errors within the transducer library.
    """


class TableError(TransducerError):
    """
    Raised when a transition table or transducer is malformed at construction time.
    """


class DuplicateTransitionError(TableError):
    """
    Raised when two transitions are registered for the same (state, input) key.
    """

    def __init__(self, state: Hashable, input_symbol: Hashable) -> None:
        self.state = state
        self.input = input_symbol
        super().__init__(f"Duplicate transition for state '{state}' on input '{input_symbol}'")


class UnknownChildError(TransducerError):
    """
    Raised when a child transducer name is not registered with its parent.
    """


class GenerationError(TransducerError):
    """
    Raised when an artifact cannot be generated from a transducer.
    """

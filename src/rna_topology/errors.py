from __future__ import annotations


class TopologyError(Exception):
    """Base class for every error raised by the topology engine."""


class InvalidInputError(TopologyError, ValueError):
    """
    Raised when an operation receives data that is missing structurally
    required elements (e.g. positions out of range, a broken matching, or a
    reference to a feature that does not exist).

    Subclasses `ValueError` so callers that already guard loader/parsing code
    with `except ValueError` keep working.
    """

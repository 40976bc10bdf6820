# core/exceptions.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Exceptions raised by the vector clock core


class InvalidArgumentError(ValueError):
    """Raised when a caller passes an argument the clock cannot accept.

    Covers missing nodes or timestamps, negative timestamp values, RECEIVE
    events built without a sender clock, and events addressed to a node the
    clock does not track. These are programming errors and are never
    corrected or retried internally.
    """

    pass

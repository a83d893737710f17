"""Errors raised by the ranking engine."""

from __future__ import annotations


class InvalidInput(ValueError):
    """Host-recoverable input error.

    Raised for malformed or out-of-range item counts, duplicate or empty
    item names, answers that do not match the current pair, and item sets
    that do not match the requested count. The host is expected to report
    the message and re-prompt; nothing here is fatal.
    """

from __future__ import annotations


class StockdeskError(Exception):
    """Base class for errors raised by stockdesk."""


class InvalidQuery(StockdeskError, ValueError):
    """A list query is structurally invalid (caller bug, never bad data)."""


class InvalidThresholds(StockdeskError, ValueError):
    """Alert thresholds or windows are inconsistent with each other."""


class RecordSourceError(StockdeskError):
    """A record snapshot could not be read."""

# src/models/errors.py

"""Exceptions raised by the chart and history engine."""


class InvalidObservation(ValueError):
    """A price observation has a missing or unparseable time or price."""


class InvalidRangeKey(ValueError):
    """A history window key is not one of the configured range options."""

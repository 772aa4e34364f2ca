"""Exceptions raised by the checked entry points of the filter."""

from __future__ import annotations


class InvalidParameterError(ValueError):
    """A filter parameter, smoothing factor or sample violates its constraint.

    These signal misuse or a bad configuration. They are not retried at this
    layer and leave any filter state untouched.
    """

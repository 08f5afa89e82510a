"""Exception and warning types raised by camtrap-insights."""

from __future__ import annotations


class CamtrapError(Exception):
    """Base class for all errors raised by this package."""


class InvalidArgumentError(CamtrapError, ValueError):
    """An argument has a wrong type, arity or a value outside its allowed set."""


class ConflictingArgumentWarning(UserWarning):
    """An argument was supplied that does not apply and has been ignored."""

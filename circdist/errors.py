"""Exceptions raised by circdist."""

__all__ = [
    "CircdistError",
    "InvalidParameterError",
    "DomainError",
    "BesselProviderError",
]


class CircdistError(Exception):
    """Base class for all circdist errors."""


class InvalidParameterError(CircdistError, ValueError):
    """A distribution parameter or evaluation point is NaN or out of range."""


class DomainError(CircdistError, ValueError):
    """The offset ``x - mu`` lies outside one period around the mean direction."""


class BesselProviderError(CircdistError, ArithmeticError):
    """The modified Bessel function values could not be computed."""

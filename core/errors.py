"""
Exception types raised by the sunlight engine.
"""


class SunlightError(Exception):
    """Base class for sunlight engine errors."""


class InvalidInputError(SunlightError, ValueError):
    """Coordinates, instants or parameters that cannot produce a valid result."""


class BuildingDataError(SunlightError):
    """Building data that cannot be read or parsed."""

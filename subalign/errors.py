"""
Error types raised by the alignment engine.
"""


class AlignmentError(ValueError):
    """Base class for alignment input errors."""


class InvalidTimeInput(AlignmentError):
    """A tick count or tick rate that cannot be turned into seconds."""


class InvalidConfiguration(AlignmentError):
    """Alignment options outside their allowed range."""

"""Typed exceptions raised while building track PID network inputs.

This module defines specific exception types for the different ways in
which a track can fail to produce network inputs, making it easier for
a caller to skip a track without hiding genuine problems.
"""


class TrackPIDError(Exception):
    """Base exception for all track PID feature errors."""


class InsufficientDataError(TrackPIDError):
    """Raised when a track does not carry enough points to be classified.

    This is recoverable: the caller is expected to skip the track.
    """

    def __init__(self, num_points: int, min_points: int):
        """Initialize with the number of points found and required.

        Parameters
        ----------
        num_points : int
            Number of dE/dx points recorded along the track
        min_points : int
            Minimum number of points required
        """
        self.num_points = num_points
        self.min_points = min_points
        super().__init__(
            f"Track has too few points for PID ({num_points} < {min_points})"
        )


class InvalidInputError(TrackPIDError, ValueError):
    """Raised when a sequence is too short or degenerate to be processed."""


class ConfigurationError(TrackPIDError, ValueError):
    """Raised when the feature builder is configured inconsistently."""

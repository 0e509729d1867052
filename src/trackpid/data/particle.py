"""Module with the data classes which describe the tracks to classify."""

from dataclasses import dataclass

import numpy as np

from trackpid.utils.globals import SHAPE_LABELS, TRACK_SHP, UNKWN_SHP

__all__ = ["Track", "Particle"]


@dataclass(eq=False)
class Track:
    """Track information needed to build the PID network inputs.

    Attributes
    ----------
    dedx : np.ndarray
        (N) Energy loss measured at each trajectory point
    directions : np.ndarray
        (M, 3) Direction of the track at each trajectory point
    n_track : int
        Number of track-like children of the particle
    n_shower : int
        Number of shower-like children of the particle
    n_grand : int
        Number of grandchildren of the particle
    """

    dedx: np.ndarray = None
    directions: np.ndarray = None
    n_track: int = 0
    n_shower: int = 0
    n_grand: int = 0

    def __post_init__(self):
        """Casts the array attributes to numpy arrays.

        If a default value was provided in the attribute definition, all
        instances of this class would point to the same memory location.
        """
        if self.dedx is None:
            self.dedx = np.empty(0, dtype=np.float32)
        else:
            self.dedx = np.asarray(self.dedx, dtype=np.float32)

        if self.directions is None:
            self.directions = np.empty((0, 3), dtype=np.float32)
        else:
            self.directions = np.asarray(self.directions, dtype=np.float32)

    def __len__(self):
        """Number of dE/dx points recorded along the track."""
        return len(self.dedx)

    @property
    def counts(self):
        """Topology counts of the track.

        Returns
        -------
        Tuple[int, int, int]
            Number of track children, shower children and grandchildren
        """
        return self.n_track, self.n_shower, self.n_grand


@dataclass(eq=False)
class Particle:
    """Reconstructed particle within a particle hierarchy.

    Attributes
    ----------
    id : int
        Index of the particle in the hierarchy
    shape : int
        Semantic type of the particle (shower, track, etc.)
    parent_id : int
        Index of the parent particle, -1 if it is a primary
    children_id : np.ndarray
        (C) Indexes of the children particles
    track : Track, optional
        Track information, only relevant for track-like particles
    """

    id: int = -1
    shape: int = UNKWN_SHP
    parent_id: int = -1
    children_id: np.ndarray = None
    track: Track = None

    def __post_init__(self):
        """Gives a default value to the list of children."""
        if self.children_id is None:
            self.children_id = np.empty(0, dtype=np.int64)
        else:
            self.children_id = np.asarray(self.children_id, dtype=np.int64)

    def __str__(self):
        """Human-readable string representation of the particle object.

        Results
        -------
        str
            Basic information about the particle properties
        """
        shape_label = SHAPE_LABELS.get(self.shape, SHAPE_LABELS[UNKWN_SHP])
        return (
            f"Particle(ID: {self.id:<3} | Shape: {shape_label:<11} "
            f"| Parent: {self.parent_id:<3} | Children: {self.num_children:<3})"
        )

    @property
    def num_children(self):
        """Number of daughters of the particle.

        Returns
        -------
        int
            Number of children
        """
        return len(self.children_id)

    @property
    def is_track(self):
        """Whether the particle is track-like.

        Returns
        -------
        bool
            `True` if the particle shape is a track
        """
        return self.shape == TRACK_SHP

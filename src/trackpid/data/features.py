"""Module with the data classes exchanged with the PID network."""

from dataclasses import astuple, dataclass, fields

import numpy as np

from trackpid.utils.globals import FEATURE_NAMES

__all__ = ["FeatureVector", "TrackPIDInputs", "TrackPIDResult"]


@dataclass(eq=False)
class FeatureVector:
    """Auxiliary variables fed to the network alongside the dE/dx sequence.

    The order of the attributes is the order expected by the network. Only
    :meth:`to_array` and :meth:`to_list` flatten them, so that no other
    part of the code depends on it.

    Attributes
    ----------
    n_track : int
        Number of track-like children of the particle
    n_shower : int
        Number of shower-like children of the particle
    n_grand : int
        Number of grandchildren of the particle
    dedx_mean : float
        Mean dE/dx in the summary window of the track
    dedx_sigma : float
        Standard deviation of the dE/dx in the summary window of the track
    deflection_mean : float
        Mean angle between successive trajectory directions in radians
    deflection_sigma : float
        Standard deviation of the angle between successive directions
    """

    n_track: int = 0
    n_shower: int = 0
    n_grand: int = 0
    dedx_mean: float = 0.0
    dedx_sigma: float = 0.0
    deflection_mean: float = 0.0
    deflection_sigma: float = 0.0

    @classmethod
    def names(cls):
        """Ordered list of the variable names.

        Returns
        -------
        List[str]
            Names of the variables, in network order
        """
        names = [f.name for f in fields(cls)]
        assert tuple(names) == FEATURE_NAMES, "Feature order is out of sync."

        return names

    def to_array(self, dtype=np.float32):
        """Flattens the variables into a network-ready array.

        Parameters
        ----------
        dtype : type, default np.float32
            Data type of the output array

        Returns
        -------
        np.ndarray
            (7) Array of variables
        """
        return np.array(astuple(self), dtype=dtype)

    def to_list(self):
        """Flattens the variables into a list of floats.

        Returns
        -------
        List[float]
            (7) List of variables
        """
        return [float(v) for v in astuple(self)]


@dataclass(eq=False)
class TrackPIDInputs:
    """Pair of network inputs built for one track.

    An empty pair (no dE/dx, no features) signals that the track could
    not be classified.

    Attributes
    ----------
    dedx : np.ndarray
        (L) Fixed-length dE/dx sequence, empty if the track was rejected
    features : FeatureVector
        Auxiliary variables, `None` if the track was rejected
    """

    dedx: np.ndarray = None
    features: FeatureVector = None

    def __post_init__(self):
        """Gives a default value to the dE/dx sequence."""
        if self.dedx is None:
            self.dedx = np.empty(0, dtype=np.float32)

    @property
    def is_valid(self):
        """Whether the inputs were successfully built.

        Returns
        -------
        bool
            `True` if the track can be passed to the network
        """
        return self.features is not None

    @property
    def variables(self):
        """Auxiliary variables as a flat array.

        Returns
        -------
        np.ndarray
            (7) Array of variables, empty if the track was rejected
        """
        if self.features is None:
            return np.empty(0, dtype=np.float32)

        return self.features.to_array()

    def to_list(self):
        """Network inputs as nested lists, the way they are batched.

        Returns
        -------
        List[List[float]]
            `[dedx, variables]`, or an empty list if the track was rejected
        """
        if not self.is_valid:
            return []

        return [self.dedx.tolist(), self.features.to_list()]


@dataclass(eq=False)
class TrackPIDResult:
    """Classification scores returned by the network for one track.

    Attributes
    ----------
    scores : np.ndarray
        (C) Score of each particle class, empty if the track was rejected
    """

    scores: np.ndarray = None

    def __post_init__(self):
        """Casts the scores to a flat array."""
        if self.scores is None:
            self.scores = np.empty(0, dtype=np.float32)
        else:
            self.scores = np.asarray(self.scores, dtype=np.float32).flatten()

    @property
    def is_valid(self):
        """Whether the network was run on this track.

        Returns
        -------
        bool
            `True` if scores are available
        """
        return len(self.scores) > 0

    @property
    def pid(self):
        """Index of the most likely particle class.

        Returns
        -------
        int
            Class index, -1 if the track was rejected
        """
        if not self.is_valid:
            return -1

        return int(np.argmax(self.scores))

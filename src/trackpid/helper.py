"""Builds the inputs of the convolutional track particle identification.

The network takes two inputs for each track:
- A fixed-length dE/dx sequence, smoothed and padded if need be;
- A vector of auxiliary variables which summarize the track topology, its
  energy loss and the wobble of its trajectory.
"""

import os

import numpy as np

from trackpid.data import FeatureVector, TrackPIDInputs, TrackPIDResult
from trackpid.errors import ConfigurationError, InsufficientDataError
from trackpid.utils.dedx import dedx_mean_sigma, dedx_window, pad_dedx, smooth_dedx
from trackpid.utils.deflection import deflection_mean_sigma
from trackpid.utils.globals import (
    DEDX_LENGTH,
    FEATURE_NAMES,
    MAX_CHARGE,
    MAX_CHARGE_JUMP,
    MIN_TRACK_POINTS,
)
from trackpid.utils.logger import logger

__all__ = ["TrackPIDHelper"]


class TrackPIDHelper:
    """Computes the network inputs used to identify the species of a track."""

    # Name of the configuration block which holds the helper parameters
    name = "pid"

    def __init__(
        self,
        network_path="",
        network_name="",
        min_track_points=MIN_TRACK_POINTS,
        dedx_length=DEDX_LENGTH,
        max_charge=MAX_CHARGE,
        max_charge_jump=MAX_CHARGE_JUMP,
        seed=None,
        shared_seed=False,
        hierarchy=None,
    ):
        """Store the feature building parameters.

        Parameters
        ----------
        network_path : str, default ''
            Directory which contains the network. Environment variables
            in the path are expanded.
        network_name : str, default ''
            Name of the network file within `network_path`
        min_track_points : int, default 50
            Minimum number of dE/dx points for a track to be classified
        dedx_length : int, default 100
            Length of the dE/dx sequence passed to the network
        max_charge : float, default 1000.
            Saturation value of the dE/dx sequence
        max_charge_jump : float, default 500.
            Maximum allowed rise between two successive dE/dx points
        seed : int, optional
            Seed of the random number generator used to pad short tracks. If
            specified, every track is padded using the same random sequence.
        shared_seed : bool, default False
            If `True` and a `seed` is provided, a single generator is seeded
            once and shared by all tracks instead
        hierarchy : ParticleHierarchy, optional
            Particle hierarchy used to classify particles by ID
        """
        # Store the network location (only needed to run the inference)
        self.network_path = os.path.expandvars(network_path)
        self.network_name = network_name

        # Store the feature parameters
        self.min_track_points = int(min_track_points)
        self.dedx_length = int(dedx_length)
        self.max_charge = float(max_charge)
        self.max_charge_jump = float(max_charge_jump)
        self.window_size = (self.dedx_length - self.min_track_points) // 3
        self.check_parameters()

        # Initialize the random number generation for the padding
        self.seed = seed
        self.shared_seed = shared_seed
        self._rng = None
        if shared_seed:
            if seed is None:
                raise ConfigurationError("Must provide a `seed` to share it.")
            self._rng = np.random.default_rng(seed)

        # Store the particle hierarchy, if provided
        self.hierarchy = hierarchy

    @classmethod
    def from_config(cls, cfg, **kwargs):
        """Builds the helper from a configuration dictionary.

        Parameters
        ----------
        cfg : dict
            Full configuration (with a `pid` block) or the `pid` block itself
        **kwargs : dict, optional
            Additional arguments to pass to the helper

        Returns
        -------
        TrackPIDHelper
            Configured helper
        """
        block = cfg.get(cls.name, cfg) if cfg is not None else {}
        if block is None:
            block = {}
        try:
            return cls(**block, **kwargs)
        except TypeError as err:
            raise ConfigurationError(
                f"Invalid `{cls.name}` configuration block: {err}"
            ) from err

    @property
    def network_file(self):
        """Full path to the network file.

        Returns
        -------
        str
            Network file path
        """
        return self.network_path + self.network_name

    def check_parameters(self):
        """Checks that the feature parameters are consistent."""
        if self.min_track_points < 3:
            raise ConfigurationError(
                "The minimum number of track points must be at least 3 to "
                f"smooth the dE/dx sequence, got {self.min_track_points}."
            )
        if self.dedx_length < self.min_track_points:
            raise ConfigurationError(
                f"The dE/dx length ({self.dedx_length}) must not be smaller than "
                f"the minimum number of track points ({self.min_track_points})."
            )
        if self.window_size < 1:
            raise ConfigurationError(
                "The dE/dx length must exceed the minimum number of track points "
                "by at least 3 to define a dE/dx summary window, got "
                f"{self.dedx_length} and {self.min_track_points}."
            )
        if 2 * self.window_size > self.min_track_points:
            raise ConfigurationError(
                f"The dE/dx summary window ({self.window_size} points, ending "
                f"{self.window_size} points before the end of the track) does "
                f"not fit in a track of {self.min_track_points} points."
            )
        if self.max_charge <= 0.0:
            raise ConfigurationError(
                f"The maximum charge must be positive, got {self.max_charge}."
            )
        if self.max_charge_jump < 0.0:
            raise ConfigurationError(
                f"The maximum charge jump must not be negative, got {self.max_charge_jump}."
            )

    def get_rng(self):
        """Provides the random number generator used to pad one track.

        Returns
        -------
        np.random.Generator
            Random number generator
        """
        if self._rng is not None:
            return self._rng

        return np.random.default_rng(self.seed)

    def build_inputs(self, dedx, directions, counts=(0, 0, 0), rng=None):
        """Builds the network inputs for one track.

        Parameters
        ----------
        dedx : array_like
            (N) Energy loss at each trajectory point
        directions : array_like
            (M, 3) Direction of the track at each trajectory point
        counts : Tuple[int, int, int], default (0, 0, 0)
            Number of track children, shower children and grandchildren
        rng : np.random.Generator, optional
            Random number generator used to pad short tracks

        Returns
        -------
        TrackPIDInputs
            Network inputs of the track

        Raises
        ------
        InsufficientDataError
            If the track has fewer points than `min_track_points`
        """
        # Check that there are enough points to classify the track
        dedx = np.array(dedx, dtype=np.float32)
        if len(dedx) < self.min_track_points:
            raise InsufficientDataError(len(dedx), self.min_track_points)

        # Clean up the dE/dx sequence
        smooth_dedx(dedx, self.max_charge, self.max_charge_jump)

        # Summarize the dE/dx using the middle third of the last points
        dedx_mean, dedx_sigma = dedx_mean_sigma(dedx_window(dedx, self.window_size))

        # If the track is shorter than the network input, pad it
        if len(dedx) < self.dedx_length:
            if rng is None:
                rng = self.get_rng()
            dedx = pad_dedx(dedx, self.dedx_length, dedx_mean, dedx_sigma, rng)

        # Measure the wobble of the trajectory
        deflection_mean, deflection_sigma = deflection_mean_sigma(directions)

        # Assemble the auxiliary variables
        n_track, n_shower, n_grand = counts
        features = FeatureVector(
            n_track=int(n_track),
            n_shower=int(n_shower),
            n_grand=int(n_grand),
            dedx_mean=dedx_mean,
            dedx_sigma=dedx_sigma,
            deflection_mean=deflection_mean,
            deflection_sigma=deflection_sigma,
        )

        return TrackPIDInputs(dedx=dedx[-self.dedx_length :], features=features)

    def get_network_inputs(self, dedx, directions, counts=(0, 0, 0), rng=None):
        """Builds the network inputs for one track, if it can be classified.

        Parameters
        ----------
        dedx : array_like
            (N) Energy loss at each trajectory point
        directions : array_like
            (M, 3) Direction of the track at each trajectory point
        counts : Tuple[int, int, int], default (0, 0, 0)
            Number of track children, shower children and grandchildren
        rng : np.random.Generator, optional
            Random number generator used to pad short tracks

        Returns
        -------
        TrackPIDInputs
            Network inputs of the track, empty if it has too few points
        """
        try:
            return self.build_inputs(dedx, directions, counts, rng)
        except InsufficientDataError as err:
            logger.info("%s... returning empty inputs.", err)
            return TrackPIDInputs()

    def get_particle_inputs(self, particle_id, hierarchy=None, rng=None):
        """Builds the network inputs for one particle of a hierarchy.

        Parameters
        ----------
        particle_id : int
            ID of the particle to classify
        hierarchy : ParticleHierarchy, optional
            Particle hierarchy, defaults to the one provided at construction
        rng : np.random.Generator, optional
            Random number generator used to pad short tracks

        Returns
        -------
        TrackPIDInputs
            Network inputs of the particle, empty if it cannot be classified
        """
        hierarchy = hierarchy if hierarchy is not None else self.hierarchy
        if hierarchy is None:
            raise ValueError("Must provide a particle hierarchy to classify by ID.")

        # Only track-like particles with a trajectory can be classified
        part = hierarchy[particle_id]
        if not hierarchy.is_track(particle_id) or part.track is None:
            logger.info(
                "Particle %d is not a track with a trajectory... returning empty inputs.",
                particle_id,
            )
            return TrackPIDInputs()

        counts = hierarchy.topology_counts(particle_id)

        return self.get_network_inputs(
            part.track.dedx, part.track.directions, counts, rng
        )

    def get_dedx_vector(self, dedx, directions, counts=(0, 0, 0), rng=None):
        """Fetch the fixed-length dE/dx network input of one track.

        See :meth:`get_network_inputs` for the parameters.

        Returns
        -------
        np.ndarray
            (L) dE/dx sequence, empty if the track is rejected
        """
        return self.get_network_inputs(dedx, directions, counts, rng).dedx

    def get_variable_vector(self, dedx, directions, counts=(0, 0, 0), rng=None):
        """Fetch the auxiliary variables network input of one track.

        See :meth:`get_network_inputs` for the parameters.

        Returns
        -------
        np.ndarray
            (7) Auxiliary variables, empty if the track is rejected
        """
        return self.get_network_inputs(dedx, directions, counts, rng).variables

    def run_pid(self, engine, dedx, directions, counts=(0, 0, 0), rng=None):
        """Runs the network on one track.

        Parameters
        ----------
        engine : callable
            Inference function which takes a (1, L) batch of dE/dx sequences
            and a (1, 7) batch of variables and returns a (1, C) batch of scores
        dedx : array_like
            (N) Energy loss at each trajectory point
        directions : array_like
            (M, 3) Direction of the track at each trajectory point
        counts : Tuple[int, int, int], default (0, 0, 0)
            Number of track children, shower children and grandchildren
        rng : np.random.Generator, optional
            Random number generator used to pad short tracks

        Returns
        -------
        TrackPIDResult
            Network scores, invalid if the track is rejected
        """
        inputs = self.get_network_inputs(dedx, directions, counts, rng)
        if not inputs.is_valid:
            return TrackPIDResult()

        scores = engine(inputs.dedx[None, :], inputs.variables[None, :])

        return TrackPIDResult(np.asarray(scores)[0])

    def process(self, tracks, rng=None):
        """Builds the network inputs for a set of tracks.

        Parameters
        ----------
        tracks : Iterable[Track]
            Tracks to build the inputs for
        rng : np.random.Generator, optional
            Random number generator used to pad short tracks

        Returns
        -------
        np.ndarray
            (T, L) Batch of dE/dx sequences (zeros for rejected tracks)
        np.ndarray
            (T, 7) Batch of variables (zeros for rejected tracks)
        np.ndarray
            (T) Mask of the tracks which could be classified
        """
        dedx_list, var_list, valid_list = [], [], []
        for track in tracks:
            inputs = self.get_network_inputs(
                track.dedx, track.directions, track.counts, rng
            )
            valid_list.append(inputs.is_valid)
            if inputs.is_valid:
                dedx_list.append(inputs.dedx)
                var_list.append(inputs.variables)
            else:
                dedx_list.append(np.zeros(self.dedx_length, dtype=np.float32))
                var_list.append(np.zeros(len(FEATURE_NAMES), dtype=np.float32))

        if not valid_list:
            return (
                np.empty((0, self.dedx_length), dtype=np.float32),
                np.empty((0, len(FEATURE_NAMES)), dtype=np.float32),
                np.empty(0, dtype=bool),
            )

        return np.vstack(dedx_list), np.vstack(var_list), np.array(valid_list)

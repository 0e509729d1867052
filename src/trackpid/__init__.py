"""Top-level module of the track PID input builder."""

# Import main entry point
from .helper import TrackPIDHelper
from .version import __version__

# Import commonly used data structures
from .data import FeatureVector, Particle, Track, TrackPIDInputs, TrackPIDResult
from .utils.topology import ParticleHierarchy

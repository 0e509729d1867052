"""Module which contains the data structures used by the track PID.

- `Track`: dE/dx sequence, trajectory and topology counts of one track
- `Particle`: node of a reconstructed particle hierarchy
- `FeatureVector`: named auxiliary variables fed to the network
- `TrackPIDInputs`: pair of network inputs built for one track
- `TrackPIDResult`: classification scores returned for one track
"""

from .features import FeatureVector, TrackPIDInputs, TrackPIDResult
from .particle import Particle, Track

"""Input/output tools used to read tracks and store their PID inputs."""

from .hdf5 import read_inputs, read_tracks, write_inputs, write_tracks

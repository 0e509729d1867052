"""Utility functions used to build the track PID network inputs."""

"""Command-line entry points of the track PID package."""

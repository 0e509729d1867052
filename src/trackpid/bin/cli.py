#!/usr/bin/env python3
"""Command-line entry point which builds the PID inputs of a track file."""

import argparse
from typing import List

from trackpid.helper import TrackPIDHelper
from trackpid.io import read_tracks, write_inputs
from trackpid.utils.config import apply_overrides, load_config
from trackpid.utils.logger import logger


def main(config: str, source: str, output: str, config_overrides: List[str]):
    """Builds the network inputs of every track in a file.

    Performs these basic functions:
    - Update the configuration with the command-line arguments
    - Load the tracks, build their inputs and store them

    Parameters
    ----------
    config : str
        Path to the configuration file
    source : str
        Path to the input track file
    output : str
        Path to the output file
    config_overrides : List[str]
        List of config overrides in the form "key.path=value"
    """
    # Load the configuration file, if provided
    cfg = load_config(config) if config is not None else {}

    # Apply any generic config overrides from --set arguments
    if config_overrides:
        cfg = apply_overrides(cfg, config_overrides)

    # Initialize the helper
    helper = TrackPIDHelper.from_config(cfg)
    logger.info(
        "Building PID inputs with %d to %d dE/dx points per track",
        helper.min_track_points,
        helper.dedx_length,
    )

    # Process the tracks, store the inputs
    tracks = read_tracks(source)
    dedx, variables, valid = helper.process(tracks)
    write_inputs(output, dedx, variables, valid)


def cli():
    """Parses the command-line arguments and runs :func:`main`."""
    parser = argparse.ArgumentParser(
        description="Build the convolutional track PID network inputs"
    )

    parser.add_argument(
        "--config", "-c", help="Path to the configuration file", type=str
    )

    parser.add_argument(
        "--source", "-s", help="Path to the input track file", type=str, required=True
    )

    parser.add_argument(
        "--output", "-o", help="Path to the output file", type=str, required=True
    )

    parser.add_argument(
        "--set",
        dest="config_overrides",
        action="append",
        help="Override a configuration parameter: key.path=value",
        type=str,
    )

    args = parser.parse_args()

    main(args.config, args.source, args.output, args.config_overrides)


if __name__ == "__main__":
    cli()

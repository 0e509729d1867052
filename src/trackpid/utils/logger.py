"""Simple module which define logging module style and returns it."""

import logging
import sys
import warnings

# Configure the formatting of the logger
logging.basicConfig(format="%(message)s", stream=sys.stdout)

# Capture warning messages and redirect them through the logger
logging.captureWarnings(True)

# Initialize logger
logger = logging.getLogger("trackpid")

# Configure the warnings package to only issue warnings once
warnings.simplefilter("once")

"""Defines constants used throughout the track PID package."""

# Semantic shape classes of reconstructed particles
SHOWR_SHP = 0  # Shower
TRACK_SHP = 1  # Track
MICHL_SHP = 2  # Michel electron
DELTA_SHP = 3  # Delta ray
LOWES_SHP = 4  # Low energy scatter
UNKWN_SHP = -1  # Unknown

# Shape labels
SHAPE_LABELS = {
    SHOWR_SHP: "Shower",
    TRACK_SHP: "Track",
    MICHL_SHP: "Michel",
    DELTA_SHP: "Delta",
    LOWES_SHP: "Low Energy",
    UNKWN_SHP: "Unknown",
}

# Default feature building parameters
MIN_TRACK_POINTS = 50  # Minimum number of dE/dx points to run the PID
DEDX_LENGTH = 100  # Length of the dE/dx sequence fed to the network
MAX_CHARGE = 1000.0  # Saturation value of the dE/dx sequence
MAX_CHARGE_JUMP = 500.0  # Maximum allowed rise between successive points

# Ordered names of the auxiliary variables fed to the network
FEATURE_NAMES = (
    "n_track",
    "n_shower",
    "n_grand",
    "dedx_mean",
    "dedx_sigma",
    "deflection_mean",
    "deflection_sigma",
)

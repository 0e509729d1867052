"""Reads tracks from and writes network inputs to HDF5 files.

Track files store variable-length quantities as flat datasets, along with
the number of elements that belong to each track:
- `dedx` (sum N_i) and `dedx_counts` (T)
- `directions` (sum M_i, 3) and `direction_counts` (T)
- `n_track`, `n_shower` and `n_grand` (T), optional
"""

import h5py
import numpy as np

from trackpid.data import FeatureVector, Track
from trackpid.utils.logger import logger

__all__ = ["read_tracks", "write_tracks", "write_inputs", "read_inputs"]

# Optional topology count datasets
COUNT_KEYS = ("n_track", "n_shower", "n_grand")


def _split(values, counts):
    """Splits a flat array into one array per track.

    Parameters
    ----------
    values : np.ndarray
        (sum N_i, ...) Flat array of values
    counts : np.ndarray
        (T) Number of values in each track

    Returns
    -------
    List[np.ndarray]
        (T) List of per-track arrays
    """
    counts = np.asarray(counts, dtype=np.int64)
    if np.any(counts < 0) or np.sum(counts) != len(values):
        raise ValueError(
            f"The per-track counts (total {np.sum(counts)}) do not match the "
            f"number of stored values ({len(values)})."
        )
    if len(counts) == 0:
        return []

    return np.split(values, np.cumsum(counts)[:-1])


def read_tracks(file_path):
    """Load all the tracks stored in an HDF5 file.

    Parameters
    ----------
    file_path : str
        Path to the HDF5 file

    Returns
    -------
    List[Track]
        List of tracks
    """
    with h5py.File(file_path, "r") as in_file:
        for key in ("dedx", "dedx_counts", "directions", "direction_counts"):
            if key not in in_file:
                raise KeyError(f"File {file_path} does not contain `{key}`.")

        dedx = _split(in_file["dedx"][:], in_file["dedx_counts"][:])
        dirs = in_file["directions"][:].reshape(-1, 3)
        directions = _split(dirs, in_file["direction_counts"][:])
        if len(dedx) != len(directions):
            raise ValueError(
                f"Found {len(dedx)} dE/dx sequences but {len(directions)} "
                "trajectories."
            )

        counts = {}
        for key in COUNT_KEYS:
            if key in in_file:
                counts[key] = in_file[key][:]
            else:
                counts[key] = np.zeros(len(dedx), dtype=np.int64)

    tracks = []
    for i in range(len(dedx)):
        tracks.append(
            Track(
                dedx=dedx[i],
                directions=directions[i],
                **{key: int(counts[key][i]) for key in COUNT_KEYS},
            )
        )

    logger.info("Loaded %d tracks from %s", len(tracks), file_path)

    return tracks


def write_tracks(file_path, tracks):
    """Store a list of tracks to an HDF5 file.

    Parameters
    ----------
    file_path : str
        Path to the HDF5 file
    tracks : List[Track]
        List of tracks
    """
    with h5py.File(file_path, "w") as out_file:
        out_file.create_dataset(
            "dedx",
            data=np.concatenate([t.dedx for t in tracks] or [np.empty(0)]).astype(
                np.float32
            ),
        )
        out_file.create_dataset(
            "dedx_counts", data=np.array([len(t.dedx) for t in tracks], dtype=np.int64)
        )
        out_file.create_dataset(
            "directions",
            data=np.concatenate(
                [t.directions for t in tracks] or [np.empty((0, 3))]
            ).astype(np.float32),
        )
        out_file.create_dataset(
            "direction_counts",
            data=np.array([len(t.directions) for t in tracks], dtype=np.int64),
        )
        for key in COUNT_KEYS:
            out_file.create_dataset(
                key, data=np.array([getattr(t, key) for t in tracks], dtype=np.int64)
            )


def write_inputs(file_path, dedx, variables, valid):
    """Store the network inputs of a set of tracks to an HDF5 file.

    Parameters
    ----------
    file_path : str
        Path to the output HDF5 file
    dedx : np.ndarray
        (T, L) Batch of dE/dx sequences
    variables : np.ndarray
        (T, 7) Batch of auxiliary variables
    valid : np.ndarray
        (T) Mask of the tracks which could be classified
    """
    with h5py.File(file_path, "w") as out_file:
        out_file.create_dataset("dedx_input", data=dedx, compression="gzip")
        out_file.create_dataset("variables", data=variables, compression="gzip")
        out_file.create_dataset("valid", data=valid)
        out_file.attrs["feature_names"] = FeatureVector.names()

    logger.info(
        "Stored the inputs of %d tracks (%d valid) to %s",
        len(valid),
        np.sum(valid),
        file_path,
    )


def read_inputs(file_path):
    """Load the network inputs stored by :func:`write_inputs`.

    Parameters
    ----------
    file_path : str
        Path to the HDF5 file

    Returns
    -------
    np.ndarray
        (T, L) Batch of dE/dx sequences
    np.ndarray
        (T, 7) Batch of auxiliary variables
    np.ndarray
        (T) Mask of the tracks which could be classified
    """
    with h5py.File(file_path, "r") as in_file:
        return (
            in_file["dedx_input"][:],
            in_file["variables"][:],
            in_file["valid"][:].astype(bool),
        )

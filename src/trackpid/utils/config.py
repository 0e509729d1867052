"""Module in charge of loading track PID configuration files.

A configuration file is a YAML dictionary. It may start from one or more
other files through a top-level `include` key (a file name or a list of
file names, relative to the including file), whose blocks it then updates.
"""

import os
from copy import deepcopy

import yaml

from trackpid.errors import ConfigurationError

__all__ = ["load_config", "apply_overrides"]


def _update(base, update):
    """Recursively update a configuration with another one.

    Parameters
    ----------
    base : dict
        Configuration to update (left untouched)
    update : dict
        Blocks and values which take precedence

    Returns
    -------
    dict
        Updated configuration
    """
    result = deepcopy(base)
    for key, value in update.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _update(result[key], value)
        else:
            result[key] = value

    return result


def apply_overrides(config, overrides):
    """Apply a list of `key.path=value` overrides to a configuration.

    Values are parsed as YAML, so numbers and booleans keep their type.
    Missing blocks along the path are created.

    Parameters
    ----------
    config : dict
        Configuration dictionary to modify
    overrides : List[str]
        List of overrides in the form "key.path=value"

    Returns
    -------
    dict
        Modified configuration dictionary
    """
    for override in overrides:
        key_path, sep, value_str = override.partition("=")
        if not sep:
            raise ConfigurationError(
                f"Invalid override format: '{override}'. "
                "Expected format: 'key.path=value'"
            )

        *blocks, key = key_path.strip().split(".")
        block = config
        for name in blocks:
            if block.get(name) is None:
                block[name] = {}
            elif not isinstance(block[name], dict):
                raise ConfigurationError(
                    f"Cannot set '{key_path.strip()}': '{name}' is not a block"
                )
            block = block[name]

        try:
            block[key] = yaml.safe_load(value_str.strip())
        except yaml.YAMLError:
            block[key] = value_str.strip()

    return config


def load_config(cfg_path):
    """Load a configuration file to a dictionary, resolving its includes.

    Parameters
    ----------
    cfg_path : str
        Path to the configuration file

    Returns
    -------
    dict
        Loaded configuration dictionary
    """
    with open(cfg_path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)

    # Handle empty file
    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise ConfigurationError(
            f"Configuration file must contain a dictionary, got {type(cfg)}"
        )

    # Load the included files first, in order, then update them
    includes = cfg.pop("include", [])
    if isinstance(includes, str):
        includes = [includes]
    elif not isinstance(includes, list):
        raise ConfigurationError(
            f"'include' must be a string or list of strings, got {type(includes)}"
        )

    root_dir = os.path.dirname(os.path.abspath(cfg_path))
    base = {}
    for include_file in includes:
        include_path = os.path.join(root_dir, include_file)
        if not os.path.isfile(include_path):
            raise FileNotFoundError(f"Included file not found: {include_path}")

        base = _update(base, load_config(include_path))

    return _update(base, cfg)

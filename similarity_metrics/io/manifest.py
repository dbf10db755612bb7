"""
Config: parse similarity.yaml into pairwise/cluster settings.

File values override DEFAULT_CONFIG section by section:

    pairwise:
      measure: tanimoto
      n_jobs: 1
      batch_size: 64
    cluster:
      k: 100
      tolerance: .inf
      min_pts: 5
      random_state: null
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from similarity_metrics.validation import PreconditionError


DEFAULT_CONFIG: Dict[str, Dict[str, Any]] = {
    'pairwise': {
        'measure': 'tanimoto',
        'n_jobs': 1,
        'batch_size': 64,
    },
    'cluster': {
        'k': 100,
        'tolerance': float('inf'),
        'min_pts': 5,
        'random_state': None,
    },
}


def get_default_config() -> Dict[str, Dict[str, Any]]:
    """Fresh copy of the defaults."""
    return copy.deepcopy(DEFAULT_CONFIG)


def merge_config(overrides: Optional[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """
    Merge user settings over the defaults.

    Raises:
        PreconditionError: on unknown sections or non-mapping section values
    """
    config = get_default_config()
    if not overrides:
        return config

    unknown = set(overrides) - set(config)
    if unknown:
        raise PreconditionError(
            "Unknown config sections",
            unknown=sorted(unknown),
            allowed=sorted(config),
        )

    for section, values in overrides.items():
        if values is None:
            continue
        if not isinstance(values, dict):
            raise PreconditionError(f"Config section '{section}' must be a mapping")
        config[section].update(values)

    if config['cluster']['tolerance'] is None:
        config['cluster']['tolerance'] = float('inf')
    return config


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Dict[str, Any]]:
    """
    Load a YAML config file, or the defaults when path is None.

    Tries:
        1. path itself (if it's a .yaml/.yml file)
        2. path/similarity.yaml
    """
    if path is None:
        return get_default_config()

    p = Path(path)
    if p.is_file() and p.suffix in ('.yaml', '.yml'):
        config_path = p
    else:
        config_path = p / 'similarity.yaml'

    if not config_path.exists():
        raise FileNotFoundError(f"No similarity.yaml at {path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise PreconditionError("Config root must be a mapping", path=str(config_path))
    return merge_config(raw)

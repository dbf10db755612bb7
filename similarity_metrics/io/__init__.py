"""
IO Module

Line-oriented inputs and YAML configuration.
"""

from .loader import load_plain, load_fingerprints, parse_fingerprint
from .manifest import DEFAULT_CONFIG, load_config, merge_config, get_default_config

__all__ = [
    'load_plain',
    'load_fingerprints',
    'parse_fingerprint',
    'DEFAULT_CONFIG',
    'load_config',
    'merge_config',
    'get_default_config',
]

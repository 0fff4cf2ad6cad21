"""Configuration management for schema_synth.

Provides generation defaults, presets, TOML settings and random seed
management for reproducible data generation.
"""

from .settings import get_config, set_config, Settings
from .random_state import set_global_seed, get_random_state, get_global_rng, create_rng
from .defaults import GENERATION_PRESETS, STANDARD_DEFAULTS, STRING_ALPHABET, GenerationDefaults

__all__ = [
    'get_config',
    'set_config',
    'set_global_seed',
    'get_random_state',
    'get_global_rng',
    'create_rng',
    'Settings',
    'GENERATION_PRESETS',
    'STANDARD_DEFAULTS',
    'STRING_ALPHABET',
    'GenerationDefaults'
]

"""Global random seed management for reproducible data generation."""

import random
import numpy as np
from typing import Optional, Dict, Any
import os
import hashlib

SEED_ENV_VAR = 'SCHEMA_SYNTH_SEED'

# Global random state storage
_GLOBAL_SEED: Optional[int] = None
_RNG_STATE: Optional[Dict[str, Any]] = None
_GLOBAL_RNG: Optional[np.random.Generator] = None


def set_global_seed(seed: int) -> None:
    """Set global random seed for all random number generators.

    Seeds Python's random module, NumPy's legacy global state and the
    shared ``numpy.random.Generator`` returned by :func:`get_global_rng`.

    Parameters
    ----------
    seed : int
        Random seed value for reproducibility

    Examples
    --------
    >>> set_global_seed(42)
    >>> # All subsequent generation without an explicit rng is reproducible
    """
    global _GLOBAL_SEED, _RNG_STATE, _GLOBAL_RNG

    _GLOBAL_SEED = seed

    random.seed(seed)
    np.random.seed(seed)
    _GLOBAL_RNG = np.random.default_rng(seed)

    # Store the initial state for reset_random_state
    _RNG_STATE = {
        'seed': seed,
        'python_state': random.getstate(),
        'numpy_state': np.random.get_state(),
        'generator_state': _GLOBAL_RNG.bit_generator.state,
    }


def get_global_seed() -> Optional[int]:
    """Get the current global random seed.

    Returns
    -------
    Optional[int]
        Current global seed, or None if not set
    """
    return _GLOBAL_SEED


def get_random_state() -> Optional[Dict[str, Any]]:
    """Get the random number generator states captured at seeding time.

    Returns
    -------
    Optional[Dict[str, Any]]
        Dictionary containing RNG states, or None if not initialized
    """
    return _RNG_STATE


def get_global_rng() -> np.random.Generator:
    """Return the shared generator, seeding it first if necessary."""
    if _GLOBAL_RNG is None:
        ensure_reproducibility()
    return _GLOBAL_RNG


def create_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create an independent generator.

    Parameters
    ----------
    seed : Optional[int]
        Seed for the new generator. When None, a child seed is drawn from
        the shared global generator so results still follow the global seed.

    Returns
    -------
    np.random.Generator
        Fresh generator owned by the caller
    """
    if seed is None:
        seed = int(get_global_rng().integers(0, 2**31 - 1))
    return np.random.default_rng(seed)


def create_deterministic_seed(base_string: str) -> int:
    """Create a deterministic seed from a string.

    Useful for deriving reproducible seeds from dataset names or schema
    identifiers.

    Parameters
    ----------
    base_string : str
        String to hash for seed generation

    Returns
    -------
    int
        Deterministic seed value

    Examples
    --------
    >>> seed = create_deterministic_seed("users_fixture_v2")
    >>> set_global_seed(seed)
    """
    hash_hex = hashlib.sha256(base_string.encode()).hexdigest()

    # First 8 hex characters, kept within the valid range for most RNGs
    return int(hash_hex[:8], 16) % (2**31 - 1)


def reset_random_state() -> None:
    """Reset all random number generators to their initial states.

    Only works if set_global_seed() was called previously.
    """
    if _RNG_STATE is None:
        raise RuntimeError("Random state not initialized. Call set_global_seed() first.")

    random.setstate(_RNG_STATE['python_state'])
    np.random.set_state(_RNG_STATE['numpy_state'])
    _GLOBAL_RNG.bit_generator.state = _RNG_STATE['generator_state']


def get_environment_seed() -> int:
    """Get seed from environment variable if available.

    Checks for the SCHEMA_SYNTH_SEED environment variable.

    Returns
    -------
    int
        Seed from environment, or a default value if not set
    """
    env_seed = os.environ.get(SEED_ENV_VAR)

    if env_seed is not None:
        try:
            return int(env_seed)
        except ValueError:
            # Non-integer values are hashed into a seed
            return create_deterministic_seed(env_seed)

    return 42


def ensure_reproducibility() -> int:
    """Ensure reproducible random state is set.

    Sets global seed if not already set, using environment variable
    or default value.

    Returns
    -------
    int
        The seed in effect
    """
    if _GLOBAL_SEED is None:
        seed = get_environment_seed()
        set_global_seed(seed)
        return seed
    return _GLOBAL_SEED


# Seed on import unless the environment variable is explicitly empty
if os.environ.get(SEED_ENV_VAR) != '':
    ensure_reproducibility()

"""Environment validation for schema_synth dependencies."""

import sys
import warnings
from packaging import version


def check_environment(min_numpy: str = "1.25", min_scipy: str = "1.11") -> None:
    """Check that environment meets minimum dependency requirements.

    NumPy provides the random generators behind every sampler; SciPy is
    needed for dataset quality statistics.

    Parameters
    ----------
    min_numpy : str, default="1.25"
        Minimum required NumPy version
    min_scipy : str, default="1.11"
        Minimum required SciPy version

    Raises
    ------
    RuntimeError
        If any dependency requirements are not met

    Examples
    --------
    >>> check_environment()  # Uses default minimums
    >>> check_environment(min_numpy="1.24", min_scipy="1.10")
    """
    errors = []

    if sys.version_info < (3, 10):
        errors.append(f"Python 3.10+ required, found {sys.version_info.major}.{sys.version_info.minor}")

    try:
        import numpy as np
        if version.parse(np.__version__) < version.parse(min_numpy):
            errors.append(f"NumPy {min_numpy}+ required, found {np.__version__}")
    except ImportError:
        errors.append("NumPy not installed - required for random sampling")

    try:
        import scipy
        if version.parse(scipy.__version__) < version.parse(min_scipy):
            errors.append(f"SciPy {min_scipy}+ required, found {scipy.__version__}")
    except ImportError:
        errors.append("SciPy not installed - required for dataset statistics")

    optional_warnings = []

    try:
        import yaml  # noqa: F401
    except ImportError:
        optional_warnings.append("PyYAML not found - YAML schema files cannot be loaded")

    try:
        import tomli_w  # noqa: F401
    except ImportError:
        optional_warnings.append("tomli-w not found - settings cannot be written to TOML")

    if errors:
        error_msg = "Environment validation failed:\n" + "\n".join(f"  - {err}" for err in errors)

        if optional_warnings:
            error_msg += "\n\nWarnings:\n" + "\n".join(f"  - {warn}" for warn in optional_warnings)

        error_msg += "\n\nTo install required dependencies:\n  pip install numpy scipy packaging"

        raise RuntimeError(error_msg)

    if optional_warnings:
        warning_msg = "Environment warnings:\n" + "\n".join(f"  - {warn}" for warn in optional_warnings)
        warnings.warn(warning_msg, UserWarning)


def _module_version(name: str) -> str:
    try:
        module = __import__(name)
    except ImportError:
        return 'not installed'
    return getattr(module, '__version__', 'installed')


def get_dependency_versions() -> dict:
    """Get versions of all relevant dependencies.

    Returns
    -------
    dict
        Dictionary mapping package names to version strings
    """
    versions = {
        'python': f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
    }

    for name in ('numpy', 'scipy', 'packaging', 'yaml', 'tomli_w'):
        versions[name] = _module_version(name)

    try:
        import tomllib  # noqa: F401
        versions['tomllib'] = 'built-in (3.11+)'
    except ImportError:
        versions['tomli'] = _module_version('tomli')

    return versions


def print_environment_info() -> None:
    """Print comprehensive environment information."""
    versions = get_dependency_versions()

    print("schema_synth - Environment Information")
    print("=" * 50)

    print("\nCore Dependencies:")
    for pkg in ['python', 'numpy', 'scipy']:
        print(f"  {pkg:12}: {versions[pkg]}")

    print("\nConfiguration:")
    for pkg in ['packaging', 'yaml', 'tomllib', 'tomli', 'tomli_w']:
        if pkg in versions:
            print(f"  {pkg:12}: {versions[pkg]}")

    print("\nSystem Information:")
    print(f"  Platform     : {sys.platform}")
    print(f"  Architecture : {sys.maxsize > 2**32 and '64-bit' or '32-bit'}")

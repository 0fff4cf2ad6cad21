"""Main configuration settings with TOML loading support."""

from dataclasses import dataclass, asdict
from typing import Optional, Union
from pathlib import Path
import logging

try:
    import tomllib  # Python 3.11+
except ImportError:
    try:
        import tomli as tomllib  # Fallback for older Python
    except ImportError:
        tomllib = None

try:
    import tomli_w
except ImportError:
    tomli_w = None

from .defaults import GENERATION_PRESETS, GenerationDefaults, STRING_ALPHABET, validate_defaults

logger = logging.getLogger(__name__)

# TOML sections flattened into Settings fields
_TOML_SECTIONS = ('numbers', 'strings', 'arrays', 'objects', 'booleans', 'output', 'advanced')


@dataclass
class Settings:
    """Main configuration settings for schema_synth.

    Can be loaded from TOML files for user customization while providing
    the documented JSON Schema fallbacks as defaults.
    """

    # Numeric bounds
    minimum: float = 0
    maximum: float = 100

    # String bounds
    min_length: int = 3
    max_length: int = 10
    string_alphabet: str = STRING_ALPHABET

    # Array bounds
    min_items: int = 0
    max_items: int = 5
    max_unique_attempts: Optional[int] = 10_000

    # Probabilities
    optional_property_probability: float = 0.5
    true_probability: float = 0.5

    # Batch output
    n_samples: int = 1
    output_dir: str = "output"

    # Reproducibility
    random_seed: Optional[int] = None

    verbose: bool = False

    def __post_init__(self):
        """Validate settings after initialization."""
        warnings = validate_defaults(self.to_defaults())
        if warnings and self.verbose:
            for warning in warnings:
                logger.warning("Configuration warning: %s", warning)

    def to_defaults(self) -> GenerationDefaults:
        """Build the generator fallbacks described by these settings."""
        return GenerationDefaults(
            minimum=self.minimum,
            maximum=self.maximum,
            min_length=self.min_length,
            max_length=self.max_length,
            min_items=self.min_items,
            max_items=self.max_items,
            optional_property_probability=self.optional_property_probability,
            true_probability=self.true_probability,
            string_alphabet=self.string_alphabet,
            max_unique_attempts=self.max_unique_attempts,
        )

    @classmethod
    def from_preset(cls, preset: str) -> 'Settings':
        """Create settings from a preset configuration.

        Parameters
        ----------
        preset : str
            Preset name ('standard', 'minimal', 'large')

        Returns
        -------
        Settings
            Settings object with preset values
        """
        if preset not in GENERATION_PRESETS:
            raise ValueError(f"Unknown preset '{preset}'. Available: {list(GENERATION_PRESETS.keys())}")

        return cls(**asdict(GENERATION_PRESETS[preset]))

    @classmethod
    def from_toml(cls, toml_path: Union[str, Path]) -> 'Settings':
        """Load settings from TOML file.

        Both a flat layout and the sectioned layout written by
        :meth:`to_toml` are accepted. ``max_unique_attempts = 0`` in the file
        disables the attempt cap, since TOML has no null.

        Parameters
        ----------
        toml_path : Union[str, Path]
            Path to TOML configuration file

        Returns
        -------
        Settings
            Settings object with values from TOML file

        Raises
        ------
        ImportError
            If tomllib is not available
        FileNotFoundError
            If TOML file doesn't exist
        """
        if tomllib is None:
            raise ImportError("tomllib not available. Install tomli for Python < 3.11")

        toml_path = Path(toml_path)
        if not toml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {toml_path}")

        with open(toml_path, 'rb') as f:
            config_data = tomllib.load(f)

        settings_data = {}
        for section in _TOML_SECTIONS:
            if section in config_data:
                settings_data.update(config_data[section])

        # Also handle flat structure
        for key, value in config_data.items():
            if not isinstance(value, dict):
                settings_data[key] = value

        if settings_data.get('max_unique_attempts') == 0:
            settings_data['max_unique_attempts'] = None

        return cls(**settings_data)

    def to_toml(self, toml_path: Union[str, Path]) -> None:
        """Save settings to TOML file.

        Parameters
        ----------
        toml_path : Union[str, Path]
            Path where to save TOML configuration file

        Raises
        ------
        ImportError
            If tomli_w is not available
        """
        if tomli_w is None:
            raise ImportError("tomli_w not available. Install tomli-w for TOML writing")

        config_data = {
            'numbers': {
                'minimum': self.minimum,
                'maximum': self.maximum
            },
            'strings': {
                'min_length': self.min_length,
                'max_length': self.max_length,
                'string_alphabet': self.string_alphabet
            },
            'arrays': {
                'min_items': self.min_items,
                'max_items': self.max_items,
                'max_unique_attempts': self.max_unique_attempts or 0
            },
            'objects': {
                'optional_property_probability': self.optional_property_probability
            },
            'booleans': {
                'true_probability': self.true_probability
            },
            'output': {
                'n_samples': self.n_samples,
                'output_dir': self.output_dir
            },
            'advanced': {
                'verbose': self.verbose
            }
        }
        # TOML has no null; an absent seed means "unseeded"
        if self.random_seed is not None:
            config_data['advanced']['random_seed'] = self.random_seed

        toml_path = Path(toml_path)
        with open(toml_path, 'wb') as f:
            tomli_w.dump(config_data, f)

    def update(self, **kwargs) -> 'Settings':
        """Create new Settings with updated values.

        Parameters
        ----------
        **kwargs
            Settings fields to update

        Returns
        -------
        Settings
            New Settings object with updated values
        """
        current_dict = asdict(self)
        current_dict.update(kwargs)
        return Settings(**current_dict)


# Global configuration instance
_GLOBAL_CONFIG: Optional[Settings] = None


def get_config(config_path: Optional[Union[str, Path]] = None,
               preset: Optional[str] = None,
               reload: bool = False) -> Settings:
    """Get global configuration settings.

    Parameters
    ----------
    config_path : Optional[Union[str, Path]]
        Path to TOML configuration file. If None, looks for default locations.
    preset : Optional[str]
        Preset configuration name ('standard', 'minimal', 'large').
        Ignored if config_path is provided.
    reload : bool
        Force reload configuration even if already loaded

    Returns
    -------
    Settings
        Global configuration settings
    """
    global _GLOBAL_CONFIG

    if _GLOBAL_CONFIG is not None and not reload:
        return _GLOBAL_CONFIG

    if config_path is not None:
        _GLOBAL_CONFIG = Settings.from_toml(config_path)
    else:
        default_paths = [
            'schema_synth.toml',
            Path.home() / '.schema_synth.toml',
            Path.cwd() / 'config' / 'schema_synth.toml'
        ]

        config_loaded = False
        for path in default_paths:
            if Path(path).exists():
                try:
                    _GLOBAL_CONFIG = Settings.from_toml(path)
                    config_loaded = True
                    break
                except (OSError, ValueError, TypeError) as e:
                    logger.warning("Could not load config from %s: %s", path, e)
                    continue

        if not config_loaded:
            _GLOBAL_CONFIG = Settings.from_preset(preset or 'standard')

    if _GLOBAL_CONFIG.random_seed is not None:
        from .random_state import set_global_seed
        set_global_seed(_GLOBAL_CONFIG.random_seed)

    return _GLOBAL_CONFIG


def set_config(settings: Settings) -> None:
    """Set global configuration settings.

    Parameters
    ----------
    settings : Settings
        Settings object to use as global configuration
    """
    global _GLOBAL_CONFIG
    _GLOBAL_CONFIG = settings

    if settings.random_seed is not None:
        from .random_state import set_global_seed
        set_global_seed(settings.random_seed)

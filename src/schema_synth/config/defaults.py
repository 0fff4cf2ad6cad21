"""Default generation parameters and preset configurations."""

from dataclasses import dataclass
from typing import List, Optional
import string

# 62-character alphabet used for free-form strings: A-Z a-z 0-9
STRING_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


@dataclass(frozen=True)
class GenerationDefaults:
    """Fallback values used when a schema node omits a constraint.

    Attributes
    ----------
    minimum, maximum : float
        Numeric bounds for ``integer`` and ``number`` nodes
    min_length, max_length : int
        String length bounds when no ``enum`` is given
    min_items, max_items : int
        Array length bounds
    optional_property_probability : float
        Chance that a non-required object property is generated
    true_probability : float
        Chance that a ``boolean`` node yields ``True``
    string_alphabet : str
        Characters drawn for free-form strings
    max_unique_attempts : Optional[int]
        Item draws allowed when filling a ``uniqueItems`` array, or None for
        no limit
    """

    minimum: float = 0
    maximum: float = 100
    min_length: int = 3
    max_length: int = 10
    min_items: int = 0
    max_items: int = 5
    optional_property_probability: float = 0.5
    true_probability: float = 0.5
    string_alphabet: str = STRING_ALPHABET
    max_unique_attempts: Optional[int] = 10_000


STANDARD_DEFAULTS = GenerationDefaults()

GENERATION_PRESETS = {
    "standard": STANDARD_DEFAULTS,
    # Small values for fast fixtures and readable output
    "minimal": GenerationDefaults(
        maximum=10,
        min_length=1,
        max_length=4,
        max_items=2,
        max_unique_attempts=1_000,
    ),
    # Bulkier documents for load and pagination testing
    "large": GenerationDefaults(
        maximum=1_000_000,
        min_length=8,
        max_length=64,
        min_items=5,
        max_items=50,
        max_unique_attempts=100_000,
    ),
}

# Sanity limits used by validate_defaults
MAX_REASONABLE_ITEMS = 10_000
MAX_REASONABLE_LENGTH = 100_000


def validate_defaults(defaults: GenerationDefaults) -> List[str]:
    """Validate generation defaults and return a list of warnings."""
    warnings = []

    if defaults.minimum > defaults.maximum:
        warnings.append(f"minimum {defaults.minimum} exceeds maximum {defaults.maximum}")

    if defaults.min_length < 0 or defaults.min_length > defaults.max_length:
        warnings.append(f"Invalid string length range [{defaults.min_length}, {defaults.max_length}]")

    if defaults.min_items < 0 or defaults.min_items > defaults.max_items:
        warnings.append(f"Invalid array length range [{defaults.min_items}, {defaults.max_items}]")

    if defaults.max_items > MAX_REASONABLE_ITEMS:
        warnings.append(f"max_items {defaults.max_items} may produce very large documents")

    if defaults.max_length > MAX_REASONABLE_LENGTH:
        warnings.append(f"max_length {defaults.max_length} may produce very large strings")

    for name in ("optional_property_probability", "true_probability"):
        value = getattr(defaults, name)
        if not 0.0 <= value <= 1.0:
            warnings.append(f"{name} {value} is outside [0, 1]")

    if not defaults.string_alphabet:
        warnings.append("string_alphabet is empty")

    if defaults.max_unique_attempts is not None and defaults.max_unique_attempts < 1:
        warnings.append("max_unique_attempts must be positive or None")

    return warnings

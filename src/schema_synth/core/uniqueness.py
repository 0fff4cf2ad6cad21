"""Value-equality keys and capacity estimates for ``uniqueItems`` arrays."""

import math
from typing import Any, Hashable, Mapping, Optional

from ..config.defaults import GenerationDefaults, STANDARD_DEFAULTS

# Free-form strings longer than this are treated as unbounded
_MAX_COUNTED_STRING_LENGTH = 8


def freeze(value: Any) -> Hashable:
    """
    Convert a generated value into a hashable key with value semantics.

    Lists become tuples and dicts become sorted ``(key, value)`` tuples, so
    two structurally equal values map to the same key regardless of dict
    insertion order. The type name is kept alongside scalars so ``True``
    and ``1`` stay distinct.

    Examples
    --------
    >>> freeze({'b': [1, 2], 'a': None}) == freeze({'a': None, 'b': [1, 2]})
    True
    """
    if isinstance(value, Mapping):
        return ('object', tuple(sorted((key, freeze(item)) for key, item in value.items())))
    if isinstance(value, (list, tuple)):
        return ('array', tuple(freeze(item) for item in value))
    return (type(value).__name__, value)


def distinct_value_capacity(schema: Mapping[str, Any],
                            defaults: GenerationDefaults = STANDARD_DEFAULTS) -> Optional[int]:
    """
    Number of distinct values ``schema`` can produce, when cheap to know.

    Parameters
    ----------
    schema : Mapping
        Item schema of a ``uniqueItems`` array
    defaults : GenerationDefaults
        Fallbacks for constraints the schema omits

    Returns
    -------
    Optional[int]
        Exact count for booleans, integer ranges, enums, short free-form
        strings and null-producing nodes; None when unknown or unbounded
    """
    if not isinstance(schema, Mapping):
        return None

    schema_type = schema.get('type')

    if schema_type == 'boolean':
        return 2

    if schema_type == 'integer':
        low = math.ceil(schema.get('minimum', defaults.minimum))
        high = math.floor(schema.get('maximum', defaults.maximum))
        return max(0, high - low + 1)

    if schema_type == 'string':
        if schema.get('enum'):
            return len(set(schema['enum']))
        min_length = schema.get('minLength', defaults.min_length)
        max_length = schema.get('maxLength', defaults.max_length)
        if max_length > _MAX_COUNTED_STRING_LENGTH:
            return None
        n_chars = len(defaults.string_alphabet)
        return sum(n_chars ** length for length in range(min_length, max_length + 1))

    if schema_type in ('number', 'array', 'object'):
        return None

    # Unknown or absent type always yields None
    return 1

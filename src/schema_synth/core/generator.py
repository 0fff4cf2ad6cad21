"""Schema-driven generation of synthetic JSON values.

Interprets a JSON Schema node (a plain mapping) and produces a value that
satisfies its structural and value constraints, recursing into ``items``
and ``properties`` for composite types. Only a constrained subset of JSON
Schema is understood:

- ``integer`` / ``number``: ``minimum``, ``maximum``
- ``string``: ``minLength``, ``maxLength``, ``enum``
- ``boolean``
- ``array``: ``items``, ``minItems``, ``maxItems``, ``uniqueItems``
- ``object``: ``properties``, ``required``

Any other ``type`` (or none at all) produces ``None``.

Examples
--------
>>> from schema_synth.core import SchemaGenerator
>>> generator = SchemaGenerator(seed=7)
>>> user = generator.generate({
...     'type': 'object',
...     'properties': {'id': {'type': 'integer', 'minimum': 1, 'maximum': 1000}},
...     'required': ['id'],
... })
>>> 1 <= user['id'] <= 1000
True
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

import numpy as np

from ..config.defaults import GenerationDefaults, STANDARD_DEFAULTS
from ..config.random_state import create_rng
from ..exceptions import CannotSatisfyUniquenessError, InvalidSchemaError
from .samplers import random_bool, random_choice, random_float, random_int, random_string
from .uniqueness import distinct_value_capacity, freeze

logger = logging.getLogger(__name__)


class SchemaType(str, Enum):
    """Recognized values of a schema node's ``type`` keyword."""

    INTEGER = 'integer'
    NUMBER = 'number'
    STRING = 'string'
    BOOLEAN = 'boolean'
    ARRAY = 'array'
    OBJECT = 'object'

    @classmethod
    def from_node(cls, schema: Mapping[str, Any]) -> Optional['SchemaType']:
        """Type tag of ``schema``, or None when absent or unrecognized."""
        tag = schema.get('type')
        if not isinstance(tag, str):
            return None
        try:
            return cls(tag)
        except ValueError:
            return None


class SchemaGenerator:
    """Generate values from schema nodes using an owned random generator.

    Parameters
    ----------
    rng : Optional[np.random.Generator]
        Random source. Takes precedence over ``seed``.
    seed : Optional[int]
        Seed for a new generator when ``rng`` is not given. When both are
        None a child of the global generator is used.
    defaults : Optional[GenerationDefaults]
        Fallbacks for constraints a schema omits

    Notes
    -----
    A generator holds no state besides its random source, so one instance
    can serve any number of schemas. ``numpy.random.Generator`` is not
    thread-safe; use one SchemaGenerator per thread.
    """

    def __init__(self,
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None,
                 defaults: Optional[GenerationDefaults] = None):
        self.rng = rng if rng is not None else create_rng(seed)
        self.defaults = defaults if defaults is not None else STANDARD_DEFAULTS

        self._handlers: Dict[SchemaType, Callable[[Mapping[str, Any], str], Any]] = {
            SchemaType.INTEGER: self._generate_integer,
            SchemaType.NUMBER: self._generate_number,
            SchemaType.STRING: self._generate_string,
            SchemaType.BOOLEAN: self._generate_boolean,
            SchemaType.ARRAY: self._generate_array,
            SchemaType.OBJECT: self._generate_object,
        }

    def generate(self, schema: Mapping[str, Any]) -> Any:
        """
        Generate one value conforming to ``schema``.

        Parameters
        ----------
        schema : Mapping
            Schema node to interpret

        Returns
        -------
        Any
            int, float, str, bool, list, dict or None depending on ``type``

        Raises
        ------
        InvalidSchemaError
            If ``schema`` or any nested node is not a mapping
        CannotSatisfyUniquenessError
            If a ``uniqueItems`` array cannot be filled with distinct values
        KeyError
            If an ``object`` node has no ``properties``
        """
        return self._generate(schema, '$')

    def generate_many(self, schema: Mapping[str, Any], count: int) -> List[Any]:
        """Generate ``count`` independent values from the same schema."""
        return [self._generate(schema, '$') for _ in range(count)]

    def _generate(self, schema: Any, path: str) -> Any:
        if not isinstance(schema, Mapping):
            raise InvalidSchemaError(schema, path)

        schema_type = SchemaType.from_node(schema)
        if schema_type is None:
            return None
        return self._handlers[schema_type](schema, path)

    def _generate_integer(self, schema: Mapping[str, Any], path: str) -> int:
        return random_int(self.rng,
                          schema.get('minimum', self.defaults.minimum),
                          schema.get('maximum', self.defaults.maximum))

    def _generate_number(self, schema: Mapping[str, Any], path: str) -> float:
        return random_float(self.rng,
                            schema.get('minimum', self.defaults.minimum),
                            schema.get('maximum', self.defaults.maximum))

    def _generate_string(self, schema: Mapping[str, Any], path: str) -> str:
        options = schema.get('enum')
        if options:
            return random_choice(self.rng, options)
        return random_string(self.rng,
                             schema.get('minLength', self.defaults.min_length),
                             schema.get('maxLength', self.defaults.max_length),
                             self.defaults.string_alphabet)

    def _generate_boolean(self, schema: Mapping[str, Any], path: str) -> bool:
        return random_bool(self.rng, self.defaults.true_probability)

    def _generate_array(self, schema: Mapping[str, Any], path: str) -> List[Any]:
        length = random_int(self.rng,
                            schema.get('minItems', self.defaults.min_items),
                            schema.get('maxItems', self.defaults.max_items))
        items = schema.get('items')
        item_path = f'{path}[]'

        if schema.get('uniqueItems', False):
            return self._generate_unique_items(items, length, item_path)
        return [self._generate(items, item_path) for _ in range(length)]

    def _generate_unique_items(self, items: Any, length: int, path: str) -> List[Any]:
        """Draw items until ``length`` distinct values exist, in first-seen order."""
        if length == 0:
            return []

        capacity = distinct_value_capacity(items, self.defaults)
        if capacity is not None and length > capacity:
            raise CannotSatisfyUniquenessError(length, 0, 0, capacity=capacity, path=path)

        max_attempts = self.defaults.max_unique_attempts
        seen = set()
        values = []
        attempts = 0

        while len(values) < length:
            if max_attempts is not None and attempts >= max_attempts:
                raise CannotSatisfyUniquenessError(length, len(values), attempts,
                                                   capacity=capacity, path=path)
            value = self._generate(items, path)
            attempts += 1
            key = freeze(value)
            if key not in seen:
                seen.add(key)
                values.append(value)

        if attempts > length:
            logger.debug("Unique array at %s needed %d draws for %d items",
                         path, attempts, length)
        return values

    def _generate_object(self, schema: Mapping[str, Any], path: str) -> Dict[str, Any]:
        required = set(schema.get('required') or ())
        obj = {}

        for key, prop_schema in schema['properties'].items():
            if key in required or random_bool(self.rng, self.defaults.optional_property_probability):
                obj[key] = self._generate(prop_schema, f'{path}.{key}')

        return obj


def generate(schema: Mapping[str, Any],
             rng: Optional[np.random.Generator] = None,
             defaults: Optional[GenerationDefaults] = None) -> Any:
    """
    Generate one value conforming to ``schema``.

    Convenience wrapper around :class:`SchemaGenerator` for one-off calls.
    Without ``rng`` the value follows the global seed
    (see :func:`schema_synth.config.set_global_seed`).
    """
    return SchemaGenerator(rng=rng, defaults=defaults).generate(schema)

"""Structural conformance checks for generated values.

Verifies that a value matches the schema node it was generated from, using
the same constraint subset and fallbacks as the generator. This is not a
JSON Schema validator: unsupported keywords are ignored.
"""

import math
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from ..config.defaults import GenerationDefaults, STANDARD_DEFAULTS
from ..core.generator import SchemaType
from ..core.uniqueness import freeze
from ..exceptions import InvalidSchemaError


@dataclass(frozen=True)
class ConformanceIssue:
    """A single mismatch between a value and its schema.

    Attributes
    ----------
    path : str
        Location of the offending value, ``$`` being the root
    message : str
        Human-readable description
    """
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass(frozen=True)
class CheckResult:
    """Named boolean outcome of a single check."""
    name: str
    passed: bool


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def check_conformance(schema: Mapping[str, Any],
                      value: Any,
                      defaults: Optional[GenerationDefaults] = None,
                      path: str = '$') -> List[ConformanceIssue]:
    """
    Collect every way ``value`` fails to match ``schema``.

    Parameters
    ----------
    schema : Mapping
        Schema node the value should satisfy
    value : Any
        Generated value to check
    defaults : Optional[GenerationDefaults]
        Fallbacks for omitted constraints; must match the generator's
    path : str
        Path prefix used in reported issues

    Returns
    -------
    List[ConformanceIssue]
        Empty when the value conforms

    Raises
    ------
    InvalidSchemaError
        If ``schema`` or a nested node reached during checking is not a mapping
    """
    if not isinstance(schema, Mapping):
        raise InvalidSchemaError(schema, path)
    defaults = defaults or STANDARD_DEFAULTS

    schema_type = SchemaType.from_node(schema)
    issues: List[ConformanceIssue] = []

    def fail(message: str, at: str = path) -> None:
        issues.append(ConformanceIssue(at, message))

    if schema_type is None:
        if value is not None:
            fail(f"expected null for untyped node, got {type(value).__name__}")

    elif schema_type is SchemaType.INTEGER:
        if not _is_integer(value):
            fail(f"expected integer, got {type(value).__name__}")
        else:
            low = math.ceil(schema.get('minimum', defaults.minimum))
            high = math.floor(schema.get('maximum', defaults.maximum))
            if not low <= value <= high:
                fail(f"{value} outside [{low}, {high}]")

    elif schema_type is SchemaType.NUMBER:
        if not _is_number(value):
            fail(f"expected number, got {type(value).__name__}")
        else:
            low = schema.get('minimum', defaults.minimum)
            high = schema.get('maximum', defaults.maximum)
            # A degenerate range [x, x) still yields x
            if not (low <= value < high or value == low):
                fail(f"{value} outside [{low}, {high})")

    elif schema_type is SchemaType.STRING:
        if not isinstance(value, str):
            fail(f"expected string, got {type(value).__name__}")
        elif schema.get('enum'):
            if value not in schema['enum']:
                fail(f"{value!r} not in enum {list(schema['enum'])}")
        else:
            min_length = schema.get('minLength', defaults.min_length)
            max_length = schema.get('maxLength', defaults.max_length)
            if not min_length <= len(value) <= max_length:
                fail(f"length {len(value)} outside [{min_length}, {max_length}]")
            stray = sorted(set(value) - set(defaults.string_alphabet))
            if stray:
                fail(f"characters outside alphabet: {''.join(stray)!r}")

    elif schema_type is SchemaType.BOOLEAN:
        if not isinstance(value, bool):
            fail(f"expected boolean, got {type(value).__name__}")

    elif schema_type is SchemaType.ARRAY:
        if not isinstance(value, list):
            fail(f"expected array, got {type(value).__name__}")
        else:
            min_items = schema.get('minItems', defaults.min_items)
            max_items = schema.get('maxItems', defaults.max_items)
            if not min_items <= len(value) <= max_items:
                fail(f"length {len(value)} outside [{min_items}, {max_items}]")
            if schema.get('uniqueItems', False):
                if len({freeze(item) for item in value}) != len(value):
                    fail("items are not unique")
            for index, item in enumerate(value):
                issues.extend(check_conformance(schema.get('items'), item, defaults,
                                                f'{path}[{index}]'))

    elif schema_type is SchemaType.OBJECT:
        if not isinstance(value, dict):
            fail(f"expected object, got {type(value).__name__}")
        else:
            properties = schema.get('properties') or {}
            for key in schema.get('required') or ():
                if key not in value:
                    fail("missing required property", f'{path}.{key}')
            for key, item in value.items():
                if key not in properties:
                    fail("unexpected property", f'{path}.{key}')
                else:
                    issues.extend(check_conformance(properties[key], item, defaults,
                                                    f'{path}.{key}'))

    return issues


def conforms(schema: Mapping[str, Any],
             value: Any,
             defaults: Optional[GenerationDefaults] = None) -> bool:
    """True when ``value`` matches ``schema`` with no issues."""
    return not check_conformance(schema, value, defaults)

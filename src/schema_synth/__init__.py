"""
schema_synth - Generate synthetic data from JSON Schema descriptions.

Produces random values that satisfy a constrained subset of JSON Schema
(type, numeric bounds, string length and enum, array bounds and
uniqueness, object properties and required keys) for testing and
prototyping.
"""

__version__ = "0.1.0"

from .core import SchemaGenerator, SchemaType, generate
from .exceptions import CannotSatisfyUniquenessError, InvalidSchemaError, SchemaSynthError

__all__ = [
    'SchemaGenerator',
    'SchemaType',
    'generate',
    'SchemaSynthError',
    'InvalidSchemaError',
    'CannotSatisfyUniquenessError'
]

"""Core schema interpretation and leaf sampling.

Key Components
--------------
- SchemaGenerator: recursive dispatch over schema node types
- Samplers: bounded integers, floats, strings, booleans and choices
- Uniqueness helpers: value-equality keys and capacity estimates
"""

from .generator import SchemaGenerator, SchemaType, generate
from .samplers import random_bool, random_choice, random_float, random_int, random_string
from .uniqueness import distinct_value_capacity, freeze

__all__ = [
    'SchemaGenerator',
    'SchemaType',
    'generate',
    'random_int',
    'random_float',
    'random_string',
    'random_bool',
    'random_choice',
    'freeze',
    'distinct_value_capacity'
]

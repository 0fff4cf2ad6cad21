"""Batch generation, conformance checking and self-testing.

Key Components
--------------
- Conformance: structural checks of values against their schema
- Self-test: randomized named-check suite over sample schemas
- Dataset building: batch generation with statistics and export

Examples
--------
>>> from schema_synth.data import DatasetBuilder
>>> builder = DatasetBuilder('fixtures')
>>> dataset = builder.create_dataset({'type': 'boolean'}, n_values=100, seed=1)
>>> dataset.metadata.validation_results['validation_rate']
1.0
"""

from .conformance import (
    CheckResult,
    ConformanceIssue,
    check_conformance,
    conforms
)

from .self_test import (
    SelfTestReport,
    run_random_tests,
    format_report,
    USER_PROFILE_SCHEMA,
    EMPTY_ARRAY_SCHEMA,
    UNIQUE_ARRAY_SCHEMA
)

from .dataset_builder import (
    DatasetBuilder,
    Dataset,
    DatasetMetadata,
    analyze_value_statistics,
    validate_generated_values,
    validate_dataset_quality
)

__all__ = [
    # Conformance
    'CheckResult',
    'ConformanceIssue',
    'check_conformance',
    'conforms',

    # Self-test
    'SelfTestReport',
    'run_random_tests',
    'format_report',
    'USER_PROFILE_SCHEMA',
    'EMPTY_ARRAY_SCHEMA',
    'UNIQUE_ARRAY_SCHEMA',

    # Datasets
    'DatasetBuilder',
    'Dataset',
    'DatasetMetadata',
    'analyze_value_statistics',
    'validate_generated_values',
    'validate_dataset_quality'
]

"""
Data layer tests for schema_synth.

- Conformance checks
- Self-test suite
- Dataset building and validation
"""

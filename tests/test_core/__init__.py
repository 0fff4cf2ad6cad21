"""
Core generation tests for schema_synth.

- Leaf samplers
- Schema dispatch and recursion
- Uniqueness handling
"""

"""
Pytest configuration and shared fixtures for the schema_synth test suite.
"""

import pytest
import numpy as np
import sys
from pathlib import Path

# Add src to path for testing
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from schema_synth.config import set_global_seed
from schema_synth.core import SchemaGenerator


@pytest.fixture(scope="session")
def global_test_seed():
    """Set global random seed for all tests to ensure reproducibility."""
    seed = 42
    set_global_seed(seed)
    return seed


@pytest.fixture
def rng():
    """Fresh seeded NumPy generator."""
    return np.random.default_rng(1234)


@pytest.fixture
def generator(rng):
    """SchemaGenerator over the seeded rng fixture."""
    return SchemaGenerator(rng=rng)


@pytest.fixture
def user_schema():
    """Object schema where every property is required."""
    return {
        "type": "object",
        "properties": {
            "id": {"type": "integer", "minimum": 1, "maximum": 1000},
            "name": {"type": "string", "minLength": 3, "maxLength": 10},
            "isActive": {"type": "boolean"}
        },
        "required": ["id", "name", "isActive"]
    }


@pytest.fixture
def optional_schema():
    """Object schema mixing required and optional properties."""
    return {
        "type": "object",
        "properties": {
            "id": {"type": "integer"},
            "nickname": {"type": "string"},
            "score": {"type": "number", "minimum": -1, "maximum": 1},
            "tags": {"type": "array", "items": {"type": "string", "enum": ["a", "b"]}}
        },
        "required": ["id"]
    }


@pytest.fixture
def nested_schema():
    """Deeply nested schema exercising every supported type."""
    return {
        "type": "object",
        "properties": {
            "order": {
                "type": "object",
                "properties": {
                    "lines": {
                        "type": "array",
                        "minItems": 1,
                        "maxItems": 4,
                        "items": {
                            "type": "object",
                            "properties": {
                                "sku": {"type": "string", "minLength": 6, "maxLength": 6},
                                "qty": {"type": "integer", "minimum": 1, "maximum": 9},
                                "price": {"type": "number", "minimum": 0.5, "maximum": 99.5}
                            },
                            "required": ["sku", "qty", "price"]
                        }
                    },
                    "status": {"type": "string", "enum": ["new", "paid", "shipped"]},
                    "gift": {"type": "boolean"}
                },
                "required": ["lines", "status"]
            },
            "note": {}
        },
        "required": ["order"]
    }


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "statistical: marks tests that assert on sampled distributions"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark slow and integration tests."""
    for item in items:
        if "performance" in item.nodeid or "large" in item.nodeid:
            item.add_marker(pytest.mark.slow)

        if "integration" in item.nodeid or "end_to_end" in item.nodeid:
            item.add_marker(pytest.mark.integration)

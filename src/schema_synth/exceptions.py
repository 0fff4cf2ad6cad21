"""Exception hierarchy for schema-driven data generation."""

from typing import Optional


class SchemaSynthError(Exception):
    """Base class for all errors raised by schema_synth."""


class InvalidSchemaError(SchemaSynthError, TypeError):
    """Raised when a schema node is missing or is not a mapping.

    Applies to the top-level schema as well as to any node reached while
    recursing into ``items`` or ``properties``.
    """

    def __init__(self, node: object, path: str = "$"):
        self.node = node
        self.path = path
        super().__init__(
            f"Invalid schema provided at {path}: expected a mapping, "
            f"got {type(node).__name__}"
        )


class CannotSatisfyUniquenessError(SchemaSynthError, RuntimeError):
    """Raised when a ``uniqueItems`` array cannot be filled with distinct values.

    Attributes
    ----------
    requested : int
        Number of distinct elements the array needed
    found : int
        Number of distinct elements produced before giving up
    attempts : int
        Number of item draws made (0 when the capacity check failed up front)
    capacity : Optional[int]
        Known number of distinct values the item schema can yield, if any
    """

    def __init__(self, requested: int, found: int, attempts: int,
                 capacity: Optional[int] = None, path: str = "$"):
        self.requested = requested
        self.found = found
        self.attempts = attempts
        self.capacity = capacity
        self.path = path
        if capacity is not None and attempts == 0:
            detail = f"item schema yields at most {capacity} distinct value(s)"
        else:
            detail = f"only {found} distinct value(s) after {attempts} draw(s)"
        super().__init__(
            f"Cannot generate {requested} unique items at {path}: {detail}"
        )

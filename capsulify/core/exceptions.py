"""
Error taxonomy for the persistence layer.

Two kinds of errors reach callers:

- ``UserNotFoundError`` when an operation needs an existing user and the
  clerk id matches nothing.
- ``OperationFailedError`` for everything else. Its message names the
  high-level operation ("Failed to save onboarding data"); the underlying
  cause is logged at the operation boundary and not chained.

``UnknownOccasionError`` and ``BodyShapeNotFoundError`` are raised inside a
transaction to abort it and end up wrapped in ``OperationFailedError``.
"""


class CapsulifyError(Exception):
    """Base class for all persistence errors."""


class UserNotFoundError(CapsulifyError, LookupError):
    """No user row matches the given identifier."""

    def __init__(self, identifier):
        self.identifier = identifier
        super().__init__(f"User not found: {identifier}")


class OperationFailedError(CapsulifyError):
    """Generic failure of a named operation."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Failed to {operation}")


class UnknownOccasionError(CapsulifyError, ValueError):
    """An onboarding payload referenced an occasion key with no id."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown occasion key: {key}")


class BodyShapeNotFoundError(CapsulifyError, ValueError):
    """A body shape name has no id in the reference table."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Body type not found: {name}")


class ReferenceDataMismatchError(CapsulifyError):
    """In-process reference constants disagree with the database."""

    def __init__(self, problems):
        self.problems = list(problems)
        super().__init__(
            "Reference data does not match the database: " + "; ".join(self.problems)
        )

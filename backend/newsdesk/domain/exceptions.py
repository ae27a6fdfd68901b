"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class ValidationFailedError(Exception):
    """Raised when filter, tag, sort or workflow input is malformed.

    Always raised before the store is touched.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidStatusTransitionError(ValidationFailedError):
    """Raised when an article cannot move from its current status to the requested one."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change article status from '{current}' to '{requested}'")


class PermissionDeniedError(Exception):
    """Raised when the caller is neither the owner nor an admin."""

    def __init__(self, message: str = "Access forbidden"):
        self.message = message
        super().__init__(message)


class QueryFailedError(Exception):
    """Raised when a store round-trip faults.

    The underlying driver error is chained as ``__cause__`` for logging;
    the message itself is safe to show to external callers.
    """

    def __init__(self, operation: str = "query"):
        self.operation = operation
        super().__init__(f"Article {operation} failed")

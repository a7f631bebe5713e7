"""Domain exceptions raised by services and mapped to HTTP responses in main."""


class BillGenieError(Exception):
    """Base exception for domain errors."""

    status_code = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(BillGenieError, ValueError):
    """A field is missing, malformed or violates a store constraint.

    Also a ValueError so model-level validators keep the usual semantics.
    """


class NotFoundError(BillGenieError):
    """A referenced record does not exist."""

    status_code = 404

    def __init__(self, entity: str) -> None:
        self.entity = entity
        super().__init__(f"{entity} not found")


class BusinessRuleViolation(BillGenieError):
    """The request is well-formed but conflicts with a business rule."""

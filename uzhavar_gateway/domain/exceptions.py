"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """A required field is missing, empty or non-positive"""

    pass


class InvalidStateError(DomainException):
    """Operation not allowed in the record's current state (e.g. selling a SOLD load)"""

    pass


class RecordNotFoundError(DomainException, LookupError):
    """Referenced market, farmer or load does not exist in the market"""

    pass


class PermissionDeniedError(DomainException):
    """Caller's role does not allow the operation"""

    pass


class AssistantAPIError(DomainException):
    """Assistant language-model API returned an error or is unavailable"""

    pass

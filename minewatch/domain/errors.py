from typing import List, Optional


class DomainError(Exception):
    """Base class for business rule failures.

    `errors` carries the list of violated rules so the HTTP layer can return
    them as-is; it defaults to the message itself.
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = list(errors) if errors else [message]


class ValidationError(DomainError):
    pass


class InvalidTransitionError(DomainError):
    pass


class InsufficientResourceError(DomainError):
    pass


class EquipmentNotOperatingError(DomainError):
    pass


class NotFoundError(DomainError):
    pass


class DuplicateError(DomainError):
    pass

"""Domain layer errors.

Every error carries a stable ``kind`` so the interface layer can map it to a
status code and clients can tell failures apart without parsing messages.
"""


class DomainError(Exception):
    """Base domain error."""

    kind = "domain_error"


class UnauthenticatedError(DomainError):
    """Raised when a credential is missing, malformed or expired."""

    kind = "unauthenticated"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class ForbiddenError(DomainError):
    """Raised when an authenticated user may not perform an action."""

    kind = "forbidden"

    def __init__(self, message: str = "You are not authorized to perform this action"):
        super().__init__(message)


class InvalidInputError(DomainError):
    """Raised for malformed identifiers or vote directions."""

    kind = "invalid_input"


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class TargetNotFoundError(NotFoundError):
    """Raised when the thread or comment being voted on does not exist."""

    kind = "target_not_found"


class VoteNotFoundError(NotFoundError):
    """Raised when updating or deleting a vote that is no longer there."""

    def __init__(self, identifier: str):
        super().__init__("Vote", identifier)


class VoteConflictError(DomainError):
    """Raised when a vote for the same voter and target already exists."""

    kind = "conflict"

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Vote already exists or changed concurrently: {identifier}")


class StoreUnavailableError(DomainError):
    """Raised when the persistence layer cannot be reached."""

    kind = "store_unavailable"

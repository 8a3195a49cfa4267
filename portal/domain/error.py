"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class UnauthenticatedError(DomainError):
    """Raised when an action needs a signed-in user and there is none."""

    def __init__(self, action: str = "perform this action"):
        super().__init__(f"Authentication required to {action}")


class AlreadyVotedError(DomainError):
    """Raised when a user votes again on a single-choice poll."""

    def __init__(self, poll_id: str):
        self.poll_id = poll_id
        super().__init__("Already voted on this poll")


class AlreadyRegisteredError(DomainError):
    """Raised when a user volunteers twice for the same subject."""

    def __init__(self, subject: str, subject_id: str):
        super().__init__(
            f"Already registered as a volunteer for {subject} {subject_id}"
        )


class ToggleInProgressError(DomainError):
    """Raised when the same toggle is dispatched while one is still pending."""

    def __init__(self, kind: str, subject_id: str):
        super().__init__(f"A {kind} change for {subject_id} is already in progress")


class StoreError(DomainError):
    """The data store rejected or failed an operation."""

    pass


class ConflictError(StoreError):
    """A write violated a uniqueness constraint."""

    def __init__(self, table: str, detail: str = "duplicate row"):
        self.table = table
        super().__init__(f"Conflict on {table}: {detail}")

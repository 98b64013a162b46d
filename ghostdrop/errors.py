"""Project-wide error types."""


class ProjectError(Exception):
    """Base for all GhostDrop errors."""


class ValidationError(ProjectError):
    """Invalid input data."""


class NotAuthenticatedError(ProjectError):
    """An authenticated operation was invoked without an active mailbox."""

    def __init__(self, message="Not authenticated."):
        super().__init__(message)


class ExternalServiceError(ProjectError):
    """Third-party API or service failure."""


class ProviderError(ExternalServiceError):
    """Mail provider request failure.

    ``retriable`` is fixed where the error is raised; the request layer never
    re-derives it from the message text.
    """

    retriable = False

    def __init__(self, message, status_code=None, retriable=None):
        super().__init__(message)
        self.status_code = status_code
        if retriable is not None:
            self.retriable = retriable


class TransientProviderError(ProviderError):
    """429, 5xx or network failure; eligible for another attempt."""

    retriable = True


class AddressTakenError(ProviderError):
    """The provider rejected account creation because the address exists."""

    def __init__(self, message="Address is already taken. Please try another.", status_code=400):
        super().__init__(message, status_code=status_code, retriable=False)


class ServiceUnavailableError(ExternalServiceError):
    """Provisioning prerequisites (the domain list) could not be fetched."""


class DataIntegrityError(ExternalServiceError):
    """A well-formed response is missing data the caller requires."""


class MalformedResponseError(ExternalServiceError):
    """A response declared as JSON could not be parsed."""


__all__ = [
    "AddressTakenError",
    "DataIntegrityError",
    "ExternalServiceError",
    "MalformedResponseError",
    "NotAuthenticatedError",
    "ProjectError",
    "ProviderError",
    "ServiceUnavailableError",
    "TransientProviderError",
    "ValidationError",
]

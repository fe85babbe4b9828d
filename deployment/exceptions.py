"""Exception classes raised by the deployment tooling."""


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class DeploymentConfigError(DeploymentError, ValueError):
    """Raised when a deployment precondition or configuration value is missing or wrong."""

    pass


class PrerequisiteNotFound(DeploymentConfigError, FileNotFoundError):
    """Raised when a file produced by a prerequisite step is absent or unreadable."""

    pass


class MalformedPrerequisite(DeploymentConfigError):
    """Raised when a file produced by a prerequisite step cannot be parsed."""

    pass


class EventTimeout(DeploymentError, TimeoutError):
    """Raised when an awaited contract event does not arrive in time."""

    pass

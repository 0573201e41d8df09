from typing import Optional


class ProvisionerError(Exception):
    pass


class ConfigurationError(ProvisionerError):
    """Raised at startup when required provider credentials are missing."""


class AuthorizationError(ProvisionerError):
    pass


class ProviderError(ProvisionerError):
    """A single provider round-trip failed (transport error or non-2xx status)."""

    def __init__(self, operation: str, message: str, status: Optional[int] = None):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.status = status


class ProvisioningError(ProvisionerError):
    """A fatal pipeline step failed. Side effects of earlier steps are left in place."""

    def __init__(self, step: str, project: str, message: str):
        super().__init__(message)
        self.step = step
        self.project = project


class NonFatalHostingError(ProvisionerError):
    pass


class DeliveryFailure(ProvisionerError):
    pass

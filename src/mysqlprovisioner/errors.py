"""Domain errors for mysqlprovisioner."""


class ProvisionerError(RuntimeError):
    """Raised when provisioning cannot continue safely."""


class ValidationError(ProvisionerError):
    """Raised when an input value is rejected."""


class ContainerNotFoundError(ProvisionerError):
    """Raised when no usable MySQL container could be located."""


class ClientUnavailableError(ProvisionerError):
    """Raised when a required command-line binary is missing."""

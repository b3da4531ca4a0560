"""Exception types raised by the navigation service."""


class AetherNavError(Exception):
    """Base class for navigation service errors."""
    pass


class ConfigurationError(AetherNavError):
    """Raised when a component is wired without a required dependency."""
    pass


class ServiceNotFoundError(AetherNavError):
    """Raised when a service id is not present in the registry."""

    def __init__(self, service_id: str):
        super().__init__(f"Service not found: {service_id}")
        self.service_id = service_id

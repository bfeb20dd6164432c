"""
plugins/service_locator.py
Service locator for plugin dependencies.

Plugins look up host services (the server, the world, the mod config store)
by name instead of importing the host directly.
"""
from typing import Dict, Any, Type, List


class ServiceNotFoundException(Exception):
    """Exception raised when a requested service is not found."""
    pass


class ServiceLocator:
    """Central registry of services shared by the host and its plugins."""

    _instance = None

    @classmethod
    def get_instance(cls) -> 'ServiceLocator':
        """
        Get the shared instance of the service locator.

        Returns:
            The service locator instance.
        """
        if cls._instance is None:
            cls._instance = ServiceLocator()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drops the shared instance so a new server starts from an empty registry."""
        cls._instance = None

    def __init__(self):
        """Initialize the service locator."""
        self._services: Dict[str, Any] = {}

    def register_service(self, service_name: str, service: Any) -> None:
        """
        Register a service with the locator.

        Args:
            service_name: The name of the service.
            service: The service instance.
        """
        self._services[service_name] = service

    def get_service(self, service_name: str) -> Any:
        """
        Get a service by name.

        Args:
            service_name: The name of the service.

        Returns:
            The service instance.

        Raises:
            ServiceNotFoundException: If the service is not found.
        """
        if service_name in self._services:
            return self._services[service_name]
        raise ServiceNotFoundException(f"Service '{service_name}' not found")

    def get_service_by_type(self, service_type: Type) -> Any:
        """
        Get the first registered service that is an instance of `service_type`.

        Args:
            service_type: The type of the service.

        Returns:
            The service instance.

        Raises:
            ServiceNotFoundException: If no service of the given type is found.
        """
        for service in self._services.values():
            if isinstance(service, service_type):
                return service
        raise ServiceNotFoundException(f"No service of type '{service_type.__name__}' found")

    def unregister_service(self, service_name: str) -> None:
        """
        Unregister a service. Unknown names are ignored.

        Args:
            service_name: The name of the service to unregister.
        """
        self._services.pop(service_name, None)

    def has_service(self, service_name: str) -> bool:
        """
        Check if a service exists.

        Args:
            service_name: The name of the service.

        Returns:
            True if the service exists, False otherwise.
        """
        return service_name in self._services

    def get_service_names(self) -> List[str]:
        """
        Get a list of all registered service names.

        Returns:
            A list of service names.
        """
        return list(self._services.keys())


def get_service_locator() -> ServiceLocator:
    """
    Get the service locator instance.

    Returns:
        The shared service locator instance.
    """
    return ServiceLocator.get_instance()

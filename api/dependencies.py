"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.study_modules.interfaces import IModuleService
    from modules.study_modules.repository import ModuleRepository
    from shared.rate_limit import RedisRateLimiter


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._module_service: "IModuleService | None" = None
        self._module_repository: "ModuleRepository | None" = None

    @property
    def module_repository(self) -> "ModuleRepository":
        """Get the module repository instance."""
        if self._module_repository is None:
            from modules.study_modules.repository import ModuleRepository
            from shared.database import get_supabase_client
            self._module_repository = ModuleRepository(get_supabase_client())
        return self._module_repository

    @property
    def modules(self) -> "IModuleService":
        """Get the module service instance."""
        if self._module_service is None:
            from modules.study_modules.service import ModuleService
            self._module_service = ModuleService(repository=self.module_repository)
        return self._module_service

    @property
    def rate_limiter(self) -> "RedisRateLimiter":
        """Get the shared rate limiter."""
        from shared.rate_limit import get_rate_limiter as get_shared_rate_limiter
        return get_shared_rate_limiter()

    def reset(self) -> None:
        """Reset all cached services."""
        self._module_service = None
        self._module_repository = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_module_service() -> "IModuleService":
    """FastAPI dependency for module service."""
    return get_container().modules


def get_rate_limiter() -> "RedisRateLimiter":
    """FastAPI dependency for the rate limiter."""
    return get_container().rate_limiter

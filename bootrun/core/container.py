"""
Service registry for bootrun.

A build tool embedding bootrun (or a test) registers its own logger,
presenter or forked-process runner here before the run command starts;
anything left unregistered falls back to bootrun's defaults.
"""

from collections.abc import Callable
from typing import Optional, TypeVar

from dependency_injector import providers

T = TypeVar("T")


class ServiceContainer:
    """Maps an interface type to the dependency-injector provider serving it."""

    _instance: Optional["ServiceContainer"] = None

    def __init__(self) -> None:
        self._registry: dict[type, providers.Provider] = {}

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None

    def register_singleton(
        self,
        interface: type[T],
        implementation: T | None = None,
        factory: Callable[[], T] | None = None,
    ) -> None:
        """
        Serve one shared instance for ``interface``.

        ``implementation`` is served as is; ``factory`` is called on the
        first lookup and its result reused afterwards.
        """
        if implementation is not None:
            provider: providers.Provider = providers.Object(implementation)
        elif factory is not None:
            provider = providers.Singleton(factory)
        else:
            raise ValueError(f"Nothing to register for {interface.__name__}")
        self._registry[interface] = provider

    def try_resolve(self, interface: type[T]) -> T | None:
        provider = self._registry.get(interface)
        return provider() if provider is not None else None

    def is_registered(self, interface: type) -> bool:
        return interface in self._registry


def get_container() -> ServiceContainer:
    return ServiceContainer.get_instance()


def try_resolve(interface: type[T]) -> T | None:
    """The service registered for ``interface`` in the global container, if any."""
    return get_container().try_resolve(interface)

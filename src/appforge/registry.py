"""
appforge Registries

Registry classes for dynamic class discovery and registration.
"""

from typing import Dict, Type, Set, Optional, TypeVar, Generic, override
from abc import ABC, abstractmethod
import logging

from .app import App
from .utils import discover_classes, extract_app_info
from .exceptions import UnknownAppTypeError

logger = logging.getLogger(__name__)

K = TypeVar('K')
V = TypeVar('V')


class Registry(Generic[K, V], ABC):
    """
    An abstract base class for a generic discoverable registry.
    """

    # --- Configuration: To be defined by subclasses ---
    package: Optional[str] = None  # package to scan
    base_class: Optional[Type] = None  # base class to discover

    def __init__(self):
        self._registry: Dict[K, V] = {}

        if self.package is None or self.base_class is None:
            raise NotImplementedError(
                f"{self.__class__.__name__} must define class attributes "
                "'package' and 'base_class'."
            )

        logger.debug(f"Initialized {self.__class__.__name__}")

    def register(self, key: K, value: V):
        self._registry[key] = value
        logger.debug(f"Registered in {self.__class__.__name__}: {key} -> {getattr(value, '__name__', str(value))}")

    def get(self, key: K) -> Optional[V]:
        return self._registry.get(key)

    @property
    def registry(self) -> Dict[K, V]:
        return self._registry

    @abstractmethod
    def _register_item(self, class_name: str, discovered_class: Type[V]):
        """
        Defines the logic to register a single discovered class.
        """
        raise NotImplementedError

    def discover(self):
        """
        Template method to automatically discover and register classes.
        """
        logger.debug(f"Starting discovery for {self.__class__.__name__} in '{self.package}'...")
        discovered = discover_classes(
            self.package,
            self.base_class,
            exclude_abstract=True,
            exclude_base=True
        )

        for name, obj in discovered.items():
            self._register_item(name, obj)

        logger.debug(f"Discovery for {self.__class__.__name__} finished. Total items: {len(self._registry)}")


class AppRegistry(Registry[str, Type[App]]):
    """
    Registry of application drivers keyed on application kind.
    `GoApp` in `appforge.bases.apps` serves `type: go`.
    """
    package = "appforge.bases.apps"
    base_class = App

    @override
    def _register_item(self, class_name: str, discovered_class: Type[App]):
        kind = extract_app_info(class_name)
        if kind:
            self.register(kind, discovered_class)

    def app(self, kind: str) -> App:
        """
        Return a driver instance for kind.

        Raises:
            UnknownAppTypeError: no driver serves kind
        """
        app_cls = self.get(kind)
        if app_cls is None:
            raise UnknownAppTypeError(
                f"Unknown application type '{kind}'. Supported: {sorted(self.get_supports())}"
            )
        return app_cls()

    def get_supports(self) -> Set[str]:
        return set(self.registry.keys())


# Global registry
app_registry = AppRegistry()


def initialize_registries():
    """
    Initialize the global registries with auto-discovery.
    Safe to call more than once.
    """
    logger.debug("Initializing application registry...")
    app_registry.discover()
    logger.debug(f"Supported application types: {app_registry.get_supports()}")

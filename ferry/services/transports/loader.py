"""
Transport Plugin Loader

Resolves a backend name to a transport class in two explicit steps:

1. Look the name up in the in-process TransportRegistry
2. On a miss, import the external plugin package ``<prefix><name>``
   (``ferry_<name>`` by default), let it register its transports, and look
   the name up once more

When both steps miss, PluginNotFoundError is raised.

A plugin package registers its transports in one of two ways:

- a module level ``register(registry)`` function, called with the loader's
  registry
- a module level ``Transport`` class, registered under the backend name

Usage:
    from ferry.services.transports import TransportLoader

    loader = TransportLoader()
    transport = loader.create("ssh", {"host": "10.0.0.1"})
"""

import importlib
import inspect
import logging
from types import ModuleType
from typing import Any, Dict, Mapping, Optional, Type

from ...config import get_settings
from ...exceptions import PluginNotFoundError
from ...utils.logging_security import sanitize_for_log
from .base import BaseTransport, OptionSpec
from .registry import LookupResult, LookupStatus, TransportRegistry

logger = logging.getLogger(__name__)


class TransportLoader:
    """
    Two-tier transport lookup with dynamic plugin import.

    Attributes:
        registry: Registry consulted first and populated by plugin packages
        plugin_prefix: Module prefix of external plugin packages
    """

    def __init__(
        self,
        registry: Optional[TransportRegistry] = None,
        plugin_prefix: Optional[str] = None,
    ) -> None:
        self.registry = registry if registry is not None else TransportRegistry()
        self.plugin_prefix = plugin_prefix if plugin_prefix is not None else get_settings().plugin_prefix

    def plugin_module_name(self, name: str) -> str:
        return self.plugin_prefix + name.replace("-", "_")

    def resolve(self, name: str) -> LookupResult:
        """
        Resolve a backend name without raising.

        Returns:
            LookupResult with status FOUND or NOT_FOUND
        """
        name = str(name)
        result = self.registry.lookup(name)
        if result.status is LookupStatus.FOUND:
            return result

        if self._import_plugin(name):
            result = self.registry.lookup(name)
            if result.status is LookupStatus.FOUND:
                return result

        return LookupResult(LookupStatus.NOT_FOUND, name)

    def load_transport(self, name: str) -> Type[BaseTransport]:
        """
        Return the transport class for a backend name.

        Raises:
            PluginNotFoundError: If neither the registry nor a plugin package
                provides the backend
        """
        result = self.resolve(name)
        if result.status is not LookupStatus.FOUND or result.transport is None:
            logger.error("Transport plugin not found: %s", sanitize_for_log(name))
            raise PluginNotFoundError(str(name))
        return result.transport

    def create(self, name: str, options: Optional[Mapping[str, Any]] = None) -> BaseTransport:
        """Instantiate the transport for a backend name with the given options."""
        return self.load_transport(name)(options)

    def options(self, name: str) -> Dict[str, OptionSpec]:
        """Option declarations of the transport for a backend name."""
        return self.load_transport(name).default_options()

    def _import_plugin(self, name: str) -> bool:
        module_name = self.plugin_module_name(name)
        try:
            module = importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            if e.name != module_name:
                logger.warning("Plugin %s is missing a dependency: %s", module_name, e)
            else:
                logger.debug("No plugin package %s installed", module_name)
            return False
        except ImportError as e:
            logger.warning("Failed to import plugin %s: %s", module_name, e)
            return False

        self._register_from_module(name, module)
        return True

    def _register_from_module(self, name: str, module: ModuleType) -> None:
        register = getattr(module, "register", None)
        if callable(register):
            register(self.registry)
            logger.info("Loaded transport plugin %s", module.__name__)
            return

        transport = getattr(module, "Transport", None)
        if inspect.isclass(transport) and issubclass(transport, BaseTransport):
            self.registry.add(name, transport)
            logger.info("Loaded transport plugin %s", module.__name__)
            return

        logger.warning("Plugin %s neither defines register() nor a Transport class", module.__name__)


__all__ = ["TransportLoader"]

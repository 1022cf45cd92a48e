"""
Ferry

Classifies execution targets into a family hierarchy of platforms and
resolves connection targets into normalized configurations for selecting
and constructing transport backends.

Usage:
    from ferry import PlatformRegistry, target_config, validate_backend

    conf = target_config({"target": "ssh://bob@examplehost:22/srv"})
    backend = validate_backend(conf)  # "ssh"
"""

from .exceptions import ConfigurationError, FamilyCycleError, FerryError, PlatformDefinitionError, PluginNotFoundError
from .services.platforms import Family, Platform, PlatformRegistry, create_default_registry, list_all
from .services.target import target_config, validate_backend
from .services.transports import BaseTransport, TransportLoader, TransportRegistry

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Errors
    "FerryError",
    "ConfigurationError",
    "PluginNotFoundError",
    "PlatformDefinitionError",
    "FamilyCycleError",
    # Platforms
    "PlatformRegistry",
    "Platform",
    "Family",
    "create_default_registry",
    "list_all",
    # Targets
    "target_config",
    "validate_backend",
    # Transports
    "BaseTransport",
    "TransportLoader",
    "TransportRegistry",
]

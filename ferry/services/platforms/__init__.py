"""
Platform Classification Module

Classifies execution targets into a forest of families and platforms and
exposes the classification of a detected platform as capabilities.

Module Architecture:
    platforms/
    ├── __init__.py       # This file - public API and factory functions
    ├── models.py         # Family and Platform entities, family hierarchy
    ├── registry.py       # PlatformRegistry (name/family factories, roots)
    ├── capabilities.py   # Capability projection for a detected platform
    ├── printer.py        # Human readable hierarchy tree
    ├── definitions.py    # YAML definition loader
    └── data/             # Bundled operating system family tree

Usage:
    from ferry.services.platforms import create_default_registry, list_all

    registry = create_default_registry()
    ubuntu = registry.name("ubuntu", None)
    ubuntu.attributes.update({"release": "22.04", "arch": "x86_64"})

    caps = registry.add_platform_methods(ubuntu)
    caps.has_family("linux")  # True
    caps.attribute("release")  # ("22.04", True)

    list_all(registry)
"""

from typing import Optional

from .capabilities import PlatformCapabilities
from .definitions import load_default_definitions, load_definitions
from .models import UNKNOWN, Family, Platform, PlatformEntity
from .printer import format_descriptor, list_all, print_children
from .registry import EMPTY_CONDITION, PlatformRegistry


def create_default_registry(definitions: Optional[str] = None) -> PlatformRegistry:
    """
    Factory function to create a populated platform registry.

    Args:
        definitions: Optional path to a YAML definitions file. The bundled
            operating system tree is loaded when omitted.

    Returns:
        New PlatformRegistry instance
    """
    registry = PlatformRegistry()
    if definitions:
        return load_definitions(registry, definitions)
    return load_default_definitions(registry)


__all__ = [
    # Factory functions
    "create_default_registry",
    # Registry and entities
    "PlatformRegistry",
    "PlatformEntity",
    "Family",
    "Platform",
    "PlatformCapabilities",
    "EMPTY_CONDITION",
    "UNKNOWN",
    # Definitions
    "load_definitions",
    "load_default_definitions",
    # Printing
    "list_all",
    "print_children",
    "format_descriptor",
]

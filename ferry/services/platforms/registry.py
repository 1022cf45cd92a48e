"""
Platform Registry

Catalog of families and platforms, owned by the caller and passed to every
consumer that needs platform classification.

The registry provides:
- Idempotent create-or-update factories for platforms (name) and families
  (family)
- Lookup of top-level entities (roots of the classification forest)
- Capability projection for a platform whose attributes have been detected

Thread Safety:
    The registry is a plain object with no locking. Populate it from a
    single initializing thread before it is shared; dynamic registration
    from several threads requires external synchronization.

Usage:
    from ferry.services.platforms import PlatformRegistry

    registry = PlatformRegistry()
    registry.family("unix")
    registry.family("linux").in_family("unix")
    ubuntu = registry.name("ubuntu").in_family("linux")

    registry.top_platforms()  # {"unix": <Family unix>}
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from .capabilities import PlatformCapabilities
from .models import Family, Platform

logger = logging.getLogger(__name__)

# Default condition for name()/family(). It is non-None, so calling either
# factory without a condition resets an existing entity's condition to {}.
EMPTY_CONDITION: Mapping[str, Any] = MappingProxyType({})

TopLevelEntity = Union[Platform, Family]


class PlatformRegistry:
    """
    Registry of families and platforms keyed by unique names.

    Example:
        >>> registry = PlatformRegistry()
        >>> docker = registry.name("docker")
        >>> registry.name("docker", {"backend": "docker"}) is docker
        True
        >>> docker.condition
        {'backend': 'docker'}
    """

    def __init__(self) -> None:
        self._platforms: Dict[str, Platform] = {}
        self._families: Dict[str, Family] = {}

    @property
    def platforms(self) -> Mapping[str, Platform]:
        """Read-only view of registered platforms, in registration order."""
        return MappingProxyType(self._platforms)

    @property
    def families(self) -> Mapping[str, Family]:
        """Read-only view of registered families, in registration order."""
        return MappingProxyType(self._families)

    def name(
        self,
        identifier: str,
        condition: Optional[Mapping[str, Any]] = EMPTY_CONDITION,
    ) -> Platform:
        """
        Create or update a platform.

        Args:
            identifier: Unique platform name
            condition: Matching metadata. Any non-None value, including an
                empty mapping, replaces the condition of an existing
                platform; None leaves it untouched.

        Returns:
            The platform registered under identifier (same instance on every
            call)
        """
        platform = self._platforms.get(identifier)
        if platform is not None:
            if condition is not None:
                platform.condition = dict(condition)
            return platform

        platform = Platform(self, identifier, dict(condition) if condition is not None else None)
        self._platforms[identifier] = platform
        logger.debug("Registered platform %s", identifier)
        return platform

    def family(
        self,
        identifier: str,
        condition: Optional[Mapping[str, Any]] = EMPTY_CONDITION,
    ) -> Family:
        """
        Create or update a family.

        Same contract as name(), over the family catalog.
        """
        family = self._families.get(identifier)
        if family is not None:
            if condition is not None:
                family.condition = dict(condition)
            return family

        family = Family(self, identifier, dict(condition) if condition is not None else None)
        self._families[identifier] = family
        logger.debug("Registered family %s", identifier)
        return family

    def resolve_family(self, identifier: str) -> Family:
        """Family for a membership reference, created when missing."""
        return self.family(identifier, None)

    def get_platform(self, identifier: str) -> Optional[Platform]:
        return self._platforms.get(identifier)

    def get_family(self, identifier: str) -> Optional[Family]:
        return self._families.get(identifier)

    def top_platforms(self) -> Dict[str, TopLevelEntity]:
        """
        Find the top-level families and platforms.

        Platforms without family memberships are collected first, families
        without memberships are merged second. A family therefore replaces
        a platform registered under the same name.

        Returns:
            Mapping of name to top-level entity
        """
        top: Dict[str, TopLevelEntity] = {
            name: platform for name, platform in self._platforms.items() if not platform.families
        }
        top.update({name: family for name, family in self._families.items() if not family.families})
        return top

    def add_platform_methods(self, platform: Platform) -> PlatformCapabilities:
        """
        Project family and attribute capabilities onto a platform.

        Call once the platform's attributes have been detected. The
        projection covers every family currently registered and is stored
        on the platform instance only. Projecting again after further family
        registrations replaces the previous projection.

        Args:
            platform: Platform with detected attributes

        Returns:
            The capability view now available as platform.capabilities
        """
        capabilities = PlatformCapabilities(platform, self._families)
        platform.capabilities = capabilities
        logger.debug(
            "Projected %d family capabilities and %d attributes onto platform %s",
            len(capabilities.known_families),
            len(platform.attributes),
            platform.registry_name,
        )
        return capabilities

    def reset(self) -> None:
        """Forget every registered family and platform."""
        self._platforms.clear()
        self._families.clear()

    def __len__(self) -> int:
        return len(self._platforms) + len(self._families)

    def __repr__(self) -> str:
        return f"PlatformRegistry(platforms={len(self._platforms)}, families={len(self._families)})"


__all__ = [
    "EMPTY_CONDITION",
    "PlatformRegistry",
]

"""
Platform Capability Projection

Exposes family membership and detected attributes of a single Platform as
queryable capabilities. The projection is bound to one platform instance;
no methods are synthesized on the Platform class, so projecting one platform
never changes the behaviour of another.
"""

from typing import Any, Dict, Iterable, List, Tuple

from .models import Platform


class PlatformCapabilities:
    """
    Capability view over a platform.

    Family checks are recomputed from the platform's current family
    hierarchy on every call and attribute lookups read the live attribute
    mapping, so later changes to memberships or attributes stay visible.

    Attributes:
        platform: The projected platform
        known_families: Family names known to the registry when the
            projection was made

    Example:
        >>> caps = registry.add_platform_methods(ubuntu)
        >>> caps.has_family("linux")
        True
        >>> caps.attribute("release")
        ('22.04', True)
    """

    def __init__(self, platform: Platform, known_families: Iterable[str]) -> None:
        self.platform = platform
        self.known_families: List[str] = list(known_families)

    def has_family(self, family_name: str) -> bool:
        """Whether the platform belongs to family_name, directly or transitively."""
        return self.platform.has_family(family_name)

    def families(self) -> Dict[str, bool]:
        """Membership flag for every family known at projection time."""
        hierarchy = set(self.platform.family_hierarchy)
        return {name: name in hierarchy for name in self.known_families}

    def attribute(self, key: str) -> Tuple[Any, bool]:
        """Current value of a detected attribute as (value, found)."""
        return self.platform.get_attribute(key)

    def attribute_names(self) -> List[str]:
        return list(self.platform.attributes)

    def __repr__(self) -> str:
        return f"PlatformCapabilities(platform={self.platform.registry_name!r})"


__all__ = ["PlatformCapabilities"]

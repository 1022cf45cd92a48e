"""
Platform and Family Models

Defines the two entity kinds of the platform classification forest:

- Family: a named classification grouping platforms and other families
  (e.g. "unix", "linux", "debian")
- Platform: a concrete target kind (e.g. "ubuntu") that declares membership
  in one or more families and carries the attributes detected on a target

Entities are always created through a PlatformRegistry, which owns them and
resolves family memberships by name. Memberships form a directed graph from
child to parent families; the family_hierarchy of an entity is the ancestor
closure of that graph, nearest ancestor first.

Usage:
    from ferry.services.platforms import PlatformRegistry

    registry = PlatformRegistry()
    registry.family("unix")
    registry.family("linux").in_family("unix")
    ubuntu = registry.name("ubuntu", {"release": ">= 14"}).in_family("linux")

    ubuntu.family_hierarchy  # ["linux", "unix"]
    ubuntu.has_family("unix")  # True
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Set, Tuple

from ...exceptions import FamilyCycleError, PlatformDefinitionError

if TYPE_CHECKING:
    from .capabilities import PlatformCapabilities
    from .registry import PlatformRegistry

logger = logging.getLogger(__name__)

# Value returned by Platform.__getitem__ for attributes that were never detected
UNKNOWN = "unknown"

ChildEntry = Tuple["PlatformEntity", Dict[str, Any]]


class PlatformEntity:
    """
    Behaviour shared by families and platforms.

    Attributes:
        condition: Opaque matching metadata consumed by backend-specific
            detection logic. Becomes the membership descriptor on the next
            in_family() call and is cleared afterwards.
        families: Declared parent families, name -> membership descriptor,
            in declaration order.
    """

    kind = "Entity"

    def __init__(
        self,
        registry: "PlatformRegistry",
        name: str,
        condition: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._registry = registry
        self._name = name
        self._title: Optional[str] = None
        self.condition = condition
        self.families: Dict[str, Dict[str, Any]] = {}

    @property
    def registry_name(self) -> str:
        """Name the entity is registered under."""
        return self._name

    @property
    def name(self) -> str:
        return self._name

    def _default_title(self) -> str:
        return self._name.capitalize()

    @property
    def title(self) -> str:
        return self._title or self._default_title()

    def set_title(self, title: str) -> "PlatformEntity":
        """Set a descriptive title, returning the entity for chaining."""
        self._title = title
        return self

    @property
    def children(self) -> Optional[List[ChildEntry]]:
        """Ordered (child, descriptor) pairs, or None for leaf kinds."""
        return None

    def in_family(self, family_name: str) -> "PlatformEntity":
        """
        Declare membership in a family.

        The family is looked up in the registry and created when missing.
        The entity's pending condition becomes the membership descriptor,
        recorded on both sides of the relation, and is then cleared.

        Args:
            family_name: Name of the parent family

        Returns:
            The entity itself, for chaining

        Raises:
            PlatformDefinitionError: If a family declares membership in itself
        """
        if isinstance(self, Family) and family_name == self._name:
            raise PlatformDefinitionError(
                f"Unable to add family {family_name} to itself",
                context={"family": family_name},
            )

        family = self._registry.resolve_family(family_name)
        descriptor = dict(self.condition or {})
        family.add_child(self, descriptor)
        self.families[family_name] = descriptor
        self.condition = None

        logger.debug("%s %s joined family %s", self.kind, self._name, family_name)
        return self

    @property
    def family_hierarchy(self) -> List[str]:
        """
        Ancestor family names, nearest first, without duplicates.

        Parents are expanded level by level so that every declared parent
        appears before any of its own ancestors.

        Raises:
            FamilyCycleError: If the memberships reachable from this entity
                contain a cycle
        """
        self._check_acyclic()

        hierarchy: List[str] = []
        seen: Set[str] = set()
        frontier = list(self.families)

        while frontier:
            next_frontier: List[str] = []
            for family_name in frontier:
                if family_name in seen:
                    continue
                seen.add(family_name)
                hierarchy.append(family_name)
                next_frontier.extend(self._registry.resolve_family(family_name).families)
            frontier = next_frontier

        return hierarchy

    def _check_acyclic(self) -> None:
        """Depth-first walk over parent families, failing on a back edge."""
        done: Set[str] = set()

        def visit(family_name: str, path: List[str]) -> None:
            if family_name in path:
                cycle = path[path.index(family_name) :] + [family_name]
                raise FamilyCycleError(self._name, cycle)
            if family_name in done:
                return
            family = self._registry.resolve_family(family_name)
            for parent in family.families:
                visit(parent, path + [family_name])
            done.add(family_name)

        start = [self._name] if isinstance(self, Family) else []
        for parent in self.families:
            visit(parent, start)

    def __repr__(self) -> str:
        return f"{self.kind}(name={self._name!r}, families={list(self.families)!r})"


class Family(PlatformEntity):
    """
    A named classification of platforms.

    Families keep the ordered list of entities that declared membership in
    them, together with the descriptor each child carried at the time.
    """

    kind = "Family"

    def __init__(
        self,
        registry: "PlatformRegistry",
        name: str,
        condition: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(registry, name, condition)
        self._children: List[ChildEntry] = []

    def _default_title(self) -> str:
        return f"{self._name.capitalize()} Family"

    @property
    def children(self) -> List[ChildEntry]:
        return list(self._children)

    def add_child(self, child: PlatformEntity, descriptor: Dict[str, Any]) -> None:
        """Record a member, replacing the descriptor if it is already known."""
        for index, (existing, _) in enumerate(self._children):
            if existing is child:
                self._children[index] = (child, descriptor)
                return
        self._children.append((child, descriptor))


class Platform(PlatformEntity):
    """
    A concrete target kind.

    The attributes mapping is filled by backend-specific detection logic
    (name, release, arch, ...). A detected "name" shadows the registry name
    for display without changing registry identity.

    Attributes:
        attributes: Detected platform attributes, key -> value
        capabilities: Projection installed by
            PlatformRegistry.add_platform_methods(), None until then
    """

    kind = "Platform"

    def __init__(
        self,
        registry: "PlatformRegistry",
        name: str,
        condition: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(registry, name, condition)
        self.attributes: Dict[str, Any] = {}
        self.capabilities: Optional["PlatformCapabilities"] = None

    @property
    def name(self) -> str:
        detected = self.attributes.get("name")
        return detected if detected else self._name

    @property
    def family(self) -> Optional[str]:
        """Detected family, falling back to the nearest declared ancestor."""
        detected = self.attributes.get("family")
        if detected:
            return detected
        hierarchy = self.family_hierarchy
        return hierarchy[0] if hierarchy else None

    def has_family(self, family_name: str) -> bool:
        """Whether family_name is anywhere in this platform's hierarchy."""
        return family_name in self.family_hierarchy

    def is_unix(self) -> bool:
        return self.has_family("unix")

    def is_windows(self) -> bool:
        return self.has_family("windows")

    def get_attribute(self, key: str) -> Tuple[Any, bool]:
        """
        Look up a detected attribute.

        Returns:
            (value, True) when the attribute is present, (None, False) otherwise
        """
        if key in self.attributes:
            return self.attributes[key], True
        return None, False

    def __getitem__(self, key: str) -> Any:
        value, found = self.get_attribute(key)
        if found:
            return value
        if key in ("name", "family", "title"):
            return getattr(self, key)
        return UNKNOWN

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view of the platform."""
        return {
            "name": self.name,
            "title": self.title,
            "families": list(self.families),
            "family_hierarchy": self.family_hierarchy,
            "attributes": dict(self.attributes),
        }


__all__ = [
    "UNKNOWN",
    "PlatformEntity",
    "Family",
    "Platform",
]

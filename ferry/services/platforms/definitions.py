"""
Platform Definition Loader

Populates a PlatformRegistry from a YAML document declaring families,
platforms and their memberships:

    families:
      - name: linux
        title: Linux Family
        families: [unix]
      - name: debian
        families:
          - name: linux
            condition: {os: linux}
    platforms:
      - name: ubuntu
        title: Ubuntu Linux
        condition: {release: ">= 14"}
        families: [debian]

Families are loaded before platforms. Membership conditions become the
descriptor of the relation; an entity's own condition is applied after its
memberships have been declared.

A default tree of operating system families is bundled with the package and
available through load_default_definitions().
"""

import logging
from importlib import resources
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Union

import yaml

from ...exceptions import PlatformDefinitionError
from .models import PlatformEntity
from .registry import PlatformRegistry

logger = logging.getLogger(__name__)

DEFAULT_DEFINITIONS = "os_families.yaml"

DefinitionSource = Union[str, Path, Mapping[str, Any]]


def _read_document(source: DefinitionSource) -> Mapping[str, Any]:
    if isinstance(source, Mapping):
        return source

    path = Path(source)
    try:
        with path.open("r", encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except OSError as e:
        raise PlatformDefinitionError(
            f"Cannot read platform definitions from {path}: {e}",
            context={"path": str(path)},
        ) from e
    except yaml.YAMLError as e:
        raise PlatformDefinitionError(
            f"Invalid YAML in platform definitions {path}: {e}",
            context={"path": str(path)},
        ) from e

    if document is None:
        return {}
    if not isinstance(document, Mapping):
        raise PlatformDefinitionError(
            f"Platform definitions in {path} must be a mapping",
            context={"path": str(path)},
        )
    return document


def _entries(document: Mapping[str, Any], section: str) -> List[Mapping[str, Any]]:
    entries = document.get(section) or []
    if not isinstance(entries, list):
        raise PlatformDefinitionError(f"Section {section!r} must be a list", context={"section": section})

    for entry in entries:
        if not isinstance(entry, Mapping) or not isinstance(entry.get("name"), str) or not entry["name"]:
            raise PlatformDefinitionError(
                f"Every entry of {section!r} needs a non-empty name",
                context={"section": section, "entry": repr(entry)},
            )
    return entries


def _condition(value: Any, owner: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise PlatformDefinitionError(f"Condition of {owner} must be a mapping", context={"entity": owner})
    return dict(value)


def _load_entity(factory: Callable[..., PlatformEntity], entry: Mapping[str, Any]) -> PlatformEntity:
    name = entry["name"]
    entity = factory(name, None)

    if entry.get("title"):
        entity.set_title(str(entry["title"]))

    memberships = entry.get("families") or []
    if not isinstance(memberships, list):
        raise PlatformDefinitionError(f"Families of {name} must be a list", context={"entity": name})

    for membership in memberships:
        if isinstance(membership, str):
            family_name, condition = membership, {}
        elif isinstance(membership, Mapping) and isinstance(membership.get("name"), str):
            family_name, condition = membership["name"], _condition(membership.get("condition"), name)
        else:
            raise PlatformDefinitionError(
                f"Invalid family membership for {name}: {membership!r}",
                context={"entity": name},
            )
        entity.condition = condition
        entity.in_family(family_name)

    if "condition" in entry:
        entity.condition = _condition(entry["condition"], name)
    return entity


def load_definitions(registry: PlatformRegistry, source: DefinitionSource) -> PlatformRegistry:
    """
    Load family and platform definitions into a registry.

    Args:
        registry: Registry to populate; existing entities are updated
        source: Path to a YAML file or an already parsed mapping

    Returns:
        The populated registry

    Raises:
        PlatformDefinitionError: If the document cannot be read or is malformed
    """
    document = _read_document(source)
    families = _entries(document, "families")
    platforms = _entries(document, "platforms")

    for entry in families:
        _load_entity(registry.family, entry)
    for entry in platforms:
        _load_entity(registry.name, entry)

    logger.info("Loaded %d families and %d platforms", len(families), len(platforms))
    return registry


def load_default_definitions(registry: PlatformRegistry) -> PlatformRegistry:
    """Load the bundled operating system family tree."""
    data = resources.files(__package__).joinpath("data").joinpath(DEFAULT_DEFINITIONS)
    with data.open("r", encoding="utf-8") as f:
        document = yaml.safe_load(f)
    return load_definitions(registry, document)


__all__ = [
    "DEFAULT_DEFINITIONS",
    "load_definitions",
    "load_default_definitions",
]

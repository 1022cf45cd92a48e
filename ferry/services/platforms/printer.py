"""
Platform Hierarchy Printer

Renders the classification forest of a registry as an indented tree:

    Unix Family (Family)
      -> Linux Family
        -> Debian Family
          -> Ubuntu release=>= 14

Roots are the registry's top-level entities. Output is meant for humans,
not for machine parsing. Printing never mutates an entity. A membership
cycle below a root raises FamilyCycleError instead of recursing forever.
"""

import sys
from typing import Any, Dict, List, Optional, TextIO

from ...exceptions import FamilyCycleError
from .models import PlatformEntity
from .registry import PlatformRegistry

INDENT_STEP = 2


def format_descriptor(descriptor: Optional[Dict[str, Any]]) -> str:
    """Render a membership descriptor, empty string when there is none."""
    if not descriptor:
        return ""
    return " " + ", ".join(f"{key}={value}" for key, value in descriptor.items())


def list_all(registry: PlatformRegistry, stream: Optional[TextIO] = None) -> None:
    """
    Print every top-level family and platform with its descendants.

    Args:
        registry: Registry to render
        stream: Output stream, standard output by default
    """
    out = stream or sys.stdout
    for entity in registry.top_platforms().values():
        print(f"{entity.title} ({entity.kind})", file=out)
        if entity.children is not None:
            print_children(entity, INDENT_STEP, out)


def print_children(
    parent: PlatformEntity,
    indent: int = INDENT_STEP,
    stream: Optional[TextIO] = None,
    path: Optional[List[PlatformEntity]] = None,
) -> None:
    """
    Print the members of parent, recursing into members that have children.

    Args:
        parent: Entity whose children are printed
        indent: Number of spaces before each child line
        stream: Output stream, standard output by default
        path: Entities from the root down to parent, used for cycle checks

    Raises:
        FamilyCycleError: If a member is already one of its own ancestors
            on the printed path
    """
    out = stream or sys.stdout
    path = (path or []) + [parent]
    for child, descriptor in parent.children or []:
        start = next((i for i, ancestor in enumerate(path) if ancestor is child), None)
        if start is not None:
            cycle = [entity.registry_name for entity in path[start:]] + [child.registry_name]
            raise FamilyCycleError(child.registry_name, cycle)
        print(f"{' ' * indent}-> {child.title}{format_descriptor(descriptor)}", file=out)
        if child.children is not None:
            print_children(child, indent + INDENT_STEP, out, path)


__all__ = [
    "format_descriptor",
    "list_all",
    "print_children",
]

"""
Transport Base Class and Option Declarations

Transports declare the options they understand as OptionSpec entries. The
declarations of a transport and all of its base classes are combined, a
subclass overriding an option of the same name.

Example:
    class SSHTransport(BaseTransport):
        name = "ssh"
        OPTIONS = (
            option("host", required=True),
            option("port", default=22),
            option("user", default="root"),
            option("connection_timeout", default=15),
        )

        def connection(self):
            ...
"""

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from ...exceptions import ConfigurationError
from ..target.resolver import normalize_keys


@dataclass(frozen=True)
class OptionSpec:
    """
    Declaration of a transport option.

    Attributes:
        name: Option key
        default: Default value, a function receiving the merged options
            and returning the default, or a class instantiated with no
            arguments
        required: Whether a value must be present after merging
        description: Human readable help text
    """

    name: str
    default: Any = None
    required: bool = False
    description: str = ""


def option(name: str, default: Any = None, required: bool = False, description: str = "") -> OptionSpec:
    """Shorthand for declaring an option in a transport's OPTIONS tuple."""
    return OptionSpec(name=name, default=default, required=required, description=description)


def _resolve_default(default: Any, merged: Dict[str, Any]) -> Any:
    if inspect.isclass(default):
        return default()
    if callable(default):
        return default(merged)
    return default


class BaseTransport(ABC):
    """
    Base class for transport plugins.

    Subclasses set ``name`` and ``OPTIONS`` and implement connection().
    Options passed to the constructor are merged with the declared defaults
    and validated.
    """

    name: str = ""
    OPTIONS: Tuple[OptionSpec, ...] = ()

    def __init__(self, options: Optional[Mapping[str, Any]] = None) -> None:
        self.options = self.merge_options(options)
        self.validate_options(self.options)

    @classmethod
    def default_options(cls) -> Dict[str, OptionSpec]:
        """All option declarations of the transport, base classes first."""
        declared: Dict[str, OptionSpec] = {}
        for klass in reversed(cls.__mro__):
            for spec in vars(klass).get("OPTIONS", ()):
                declared[spec.name] = spec
        return declared

    @classmethod
    def merge_options(cls, options: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        Fill unset options with their declared defaults.

        Function defaults are called with the options merged so far, in
        declaration order. Class defaults such as ``list`` or ``dict`` are
        instantiated without arguments, giving each transport a fresh value.
        """
        merged = normalize_keys(options or {})
        for name, spec in cls.default_options().items():
            if merged.get(name) is not None or spec.default is None:
                continue
            merged[name] = _resolve_default(spec.default, merged)
        return merged

    @classmethod
    def validate_options(cls, options: Mapping[str, Any]) -> None:
        """
        Raises:
            ConfigurationError: Listing every required option without a value
        """
        missing = [
            name for name, spec in cls.default_options().items() if spec.required and options.get(name) is None
        ]
        if missing:
            raise ConfigurationError(
                "You must provide a value for " + ", ".join(repr(name) for name in missing) + ".",
                setting_key=missing[0],
                context={"transport": cls.name, "missing": missing},
            )

    @abstractmethod
    def connection(self) -> Any:
        """Open (or return the cached) connection for the configured target."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


__all__ = [
    "BaseTransport",
    "OptionSpec",
    "option",
]

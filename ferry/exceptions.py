"""
Ferry Exceptions

Base exception hierarchy shared by every ferry service. Subpackages define
their specific error types on top of FerryError so callers can catch any
ferry failure with a single except clause.

Exception Hierarchy:
    FerryError (base)
    ├── ConfigurationError (target/backend/option configuration failures)
    ├── PluginNotFoundError (transport plugin could not be resolved)
    └── PlatformDefinitionError (invalid family/platform definitions)
        └── FamilyCycleError (family memberships form a cycle)

Security Notes:
- Error messages never include passwords or inline key material
- Context dictionaries are designed to be logged as-is
"""

from typing import Any, Dict, Optional


class FerryError(Exception):
    """
    Base exception for all ferry operations.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error identifier
        context: Additional context for debugging

    Usage:
        try:
            backend = validate_backend(config)
        except FerryError as e:
            logger.error("Ferry error %s: %s", e.error_code, e.message)
    """

    def __init__(
        self,
        message: str,
        error_code: str = "FERRY_ERROR",
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for JSON serialization.

        Returns:
            Dictionary with error type, code, message and context.
        """
        return {
            "error_type": self.__class__.__name__,
            "error": self.error_code,
            "message": self.message,
            "context": self.context,
        }

    def __str__(self) -> str:
        """Format exception for logging."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{self.__class__.__name__}(message={self.message!r}, " f"error_code={self.error_code!r})"


class ConfigurationError(FerryError):
    """
    Raised when a connection configuration cannot be used.

    Covers malformed target strings, targets or hosts from which no backend
    can be determined, sudo requested against a local backend, unsupported
    configuration keys and missing required transport options. These errors
    are always fatal and never retried.

    Attributes:
        setting_key: The configuration key involved (if known)
    """

    def __init__(
        self,
        message: str,
        setting_key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.setting_key = setting_key
        ctx = dict(context or {})
        if setting_key:
            ctx.setdefault("setting", setting_key)
        super().__init__(message, "CONFIGURATION_ERROR", ctx)


class PluginNotFoundError(FerryError):
    """
    Raised when no transport plugin can be found for a backend name.

    Only raised after both the in-process registry lookup and the dynamic
    import of an external plugin package failed.

    Attributes:
        transport_name: The backend name that was requested
    """

    def __init__(self, transport_name: str, message: Optional[str] = None) -> None:
        self.transport_name = transport_name
        default_message = f"Can't find ferry plugin {transport_name}. Please install it first."
        super().__init__(
            message or default_message,
            "PLUGIN_NOT_FOUND",
            {"transport_name": transport_name},
        )


class PlatformDefinitionError(FerryError):
    """Raised when family or platform definitions are invalid."""

    def __init__(
        self,
        message: str,
        error_code: str = "PLATFORM_DEFINITION_ERROR",
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, error_code, context)


class FamilyCycleError(PlatformDefinitionError):
    """
    Raised when family memberships form a cycle.

    Attributes:
        entity_name: Entity whose hierarchy was being computed
        cycle: Names along the detected cycle
    """

    def __init__(self, entity_name: str, cycle: Optional[list] = None) -> None:
        self.entity_name = entity_name
        self.cycle = list(cycle or [])
        path = " -> ".join(self.cycle) if self.cycle else entity_name
        super().__init__(
            f"Family hierarchy of {entity_name} contains a cycle: {path}",
            "FAMILY_CYCLE",
            {"entity": entity_name, "cycle": self.cycle},
        )


__all__ = [
    "FerryError",
    "ConfigurationError",
    "PluginNotFoundError",
    "PlatformDefinitionError",
    "FamilyCycleError",
]

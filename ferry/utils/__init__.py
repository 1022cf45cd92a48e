"""Shared helpers for ferry services."""

from .logging_security import REDACTED, redact_config, redact_target, sanitize_for_log

__all__ = [
    "REDACTED",
    "redact_config",
    "redact_target",
    "sanitize_for_log",
]

"""
Target Configuration Module

Resolves a loosely specified connection target (URI plus explicit options)
into a normalized configuration and validates that a backend can be
determined from it.

Module Architecture:
    target/
    ├── __init__.py    # This file - public API
    ├── uri.py         # Target URI parsing, including host-less forms
    ├── keys.py        # Key file / inline key classification
    └── resolver.py    # target_config() and validate_backend()

Recognized configuration keys:
    target, backend, host, port, user, path, password,
    www_form_encoded_password, sudo, keys, key_files
    Any other key is passed through unchanged.
"""

from .keys import group_keys_and_keyfiles, is_key_file
from .resolver import DEFAULT_BACKEND, ResolvedConfig, normalize_keys, target_config, validate_backend
from .uri import PLACEHOLDER_HOST, TargetURI, parse_target

__all__ = [
    "DEFAULT_BACKEND",
    "PLACEHOLDER_HOST",
    "ResolvedConfig",
    "TargetURI",
    "group_keys_and_keyfiles",
    "is_key_file",
    "normalize_keys",
    "parse_target",
    "target_config",
    "validate_backend",
]

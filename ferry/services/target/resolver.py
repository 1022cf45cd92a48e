"""
Target Configuration Resolver

Turns user supplied connection information into a normalized configuration
that can be used to select and construct a transport backend.

A configuration may carry a ``target`` URI (e.g. ``ssh://bob@remote:22``)
alongside explicit options. Explicit options always win: URI components only
fill keys that are absent or None.

Usage:
    from ferry.services.target import target_config, validate_backend

    conf = target_config({"target": "ssh://bob@remote", "port": 2222})
    # {"target": ..., "backend": "ssh", "user": "bob", "host": "remote",
    #  "port": 2222, "path": None, "password": None}

    backend = validate_backend(conf)  # "ssh"
"""

import logging
from enum import Enum
from typing import Any, Dict, Mapping, Optional
from urllib.parse import unquote_plus

from ...exceptions import ConfigurationError
from ...utils.logging_security import redact_target, sanitize_for_log
from .keys import group_keys_and_keyfiles
from .uri import parse_target

logger = logging.getLogger(__name__)

DEFAULT_BACKEND = "local"

# Backend value treated like a missing backend when sudo is requested
LOCALHOST_BACKEND = "localhost"

ResolvedConfig = Dict[str, Any]


def normalize_keys(config: Mapping[Any, Any]) -> ResolvedConfig:
    """
    Return a copy of config with every key turned into a plain string.

    String keys are kept, enum members with a string value use that value.

    Raises:
        ConfigurationError: For keys that have no string form
    """
    normalized: ResolvedConfig = {}
    for key, value in config.items():
        if isinstance(key, Enum) and isinstance(key.value, str):
            normalized[key.value] = value
        elif isinstance(key, str):
            normalized[str(key)] = value
        else:
            raise ConfigurationError(
                f"Configuration key {key!r} must be a string",
                context={"key_type": type(key).__name__},
            )
    return normalized


def _fill(conf: ResolvedConfig, key: str, value: Any) -> None:
    if conf.get(key) is None:
        conf[key] = value


def target_config(config: Optional[Mapping[Any, Any]] = None) -> ResolvedConfig:
    """
    Resolve the target of a configuration and merge it with explicit options.

    Steps:
        1. Normalize keys to strings (the input is never mutated)
        2. Split ``keys`` into ``key_files`` and inline ``keys``
        3. Without a target, return the configuration as is
        4. Parse the target URI
        5. Fill backend, host, port, user, path and password from the URI
           where the configuration does not set them; the password is
           form-decoded when ``www_form_encoded_password`` is set
        6. Turn an empty path into None

    Args:
        config: Connection options, optionally with a ``target`` URI

    Returns:
        New dictionary with the resolved configuration

    Raises:
        ConfigurationError: If a key is not a string or the target is not a
            valid URI
    """
    conf = normalize_keys(config or {})

    group_keys_and_keyfiles(conf)

    target = conf.get("target")
    if target is None or str(target) == "":
        return conf

    uri = parse_target(str(target))
    if not uri.is_empty:
        _fill(conf, "backend", uri.scheme)
        _fill(conf, "host", uri.host)
        _fill(conf, "port", uri.port)
        _fill(conf, "user", uri.user)
        _fill(conf, "path", uri.path)
        if conf.get("www_form_encoded_password") and uri.password is not None:
            _fill(conf, "password", unquote_plus(uri.password))
        else:
            _fill(conf, "password", uri.password)

    # an empty path resets to the backend's default
    if conf.get("path") is not None and str(conf["path"]) == "":
        conf["path"] = None

    logger.debug(
        "Resolved target %s: backend=%s host=%s port=%s",
        redact_target(str(target)),
        sanitize_for_log(conf.get("backend")),
        sanitize_for_log(conf.get("host")),
        conf.get("port"),
    )
    return conf


def validate_backend(config: Optional[Dict[str, Any]], default: str = DEFAULT_BACKEND) -> str:
    """
    Determine the backend of a resolved configuration.

    Args:
        config: Resolved configuration; updated with the default backend
            when neither backend, target nor host is set
        default: Backend used when nothing else is configured

    Returns:
        The configured backend, or default

    Raises:
        ConfigurationError: If sudo is requested without a remote backend, or
            a target or host is set but no backend could be determined
    """
    if config is None:
        return default

    backend = config.get("backend")

    if (backend is None or backend == LOCALHOST_BACKEND) and config.get("sudo"):
        raise ConfigurationError(
            "Sudo is only valid when running against a remote host. "
            "To run this locally with elevated privileges, run the command with `sudo ...`.",
            setting_key="sudo",
        )

    if backend is not None:
        return backend

    if config.get("target") is not None:
        raise ConfigurationError(
            "Cannot determine backend from target configuration "
            f"{redact_target(str(config['target']))!r}. Valid example: ssh://192.168.0.1.",
            setting_key="target",
        )

    if config.get("host") is not None:
        raise ConfigurationError(
            "Host configured, but no backend was provided. Please specify how you want "
            "to connect. Valid example: ssh://192.168.0.1.",
            setting_key="host",
        )

    config["backend"] = default
    return default


__all__ = [
    "DEFAULT_BACKEND",
    "ResolvedConfig",
    "normalize_keys",
    "target_config",
    "validate_backend",
]

"""
Target URI Parsing

Splits a target string of the form

    scheme://[user[:password]@]host[:port][/path]

into its components. Two host-less forms are accepted as well:
``scheme://`` (e.g. ``mock://``) and ``scheme:`` (e.g. ``local:``). They are
parsed by appending a placeholder host which is cleared afterwards.
"""

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from ...exceptions import ConfigurationError

# Host-less targets, matched before regular parsing
SCHEME_ONLY_PATTERN = re.compile(r"^([a-z]+)://$")
SCHEME_COLON_PATTERN = re.compile(r"^([a-z]+):$")
PLACEHOLDER_HOST = "dummy"

# Characters that are never valid anywhere in a target URI
INVALID_TARGET_CHARS = re.compile(r"[\s\x00-\x1f\x7f<>\"{}|\\^`]")

# "%" must start a two digit hex escape
INVALID_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass
class TargetURI:
    """
    Components of a parsed target.

    Attributes:
        scheme: Backend name, e.g. "ssh" (None for scheme-less strings)
        host: Host name or address; IPv6 brackets removed, case preserved
        port: Port number, None when not given
        user: User name from the userinfo part
        password: Raw (undecoded) password from the userinfo part
        path: Path component, empty string when absent
    """

    scheme: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    user: Optional[str] = None
    password: Optional[str] = None
    path: str = ""

    @property
    def is_empty(self) -> bool:
        """Neither a scheme nor a host was found."""
        return self.scheme is None and self.host is None


def _split_host(hostport: str) -> Optional[str]:
    if hostport.startswith("["):
        end = hostport.find("]")
        host = hostport[1:end]
    else:
        host = hostport.split(":", 1)[0]
    return host or None


def _parse(target: str) -> TargetURI:
    if INVALID_TARGET_CHARS.search(target):
        raise ConfigurationError(
            "Target contains characters that are not allowed in a URI",
            setting_key="target",
        )
    if INVALID_PERCENT_ESCAPE.search(target):
        raise ConfigurationError("Target contains an invalid percent escape", setting_key="target")

    try:
        parts = urlsplit(target)
        port = parts.port
    except ValueError as e:
        raise ConfigurationError(f"Cannot parse target: {e}", setting_key="target") from e

    uri = TargetURI(scheme=parts.scheme or None, port=port, path=parts.path)

    userinfo, at, hostport = parts.netloc.rpartition("@")
    if at:
        if "@" in userinfo:
            raise ConfigurationError(
                "Target user information must escape '@' as %40",
                setting_key="target",
            )
        user, colon, password = userinfo.partition(":")
        uri.user = user
        uri.password = password if colon else None
    uri.host = _split_host(hostport)
    return uri


def parse_target(target: str) -> TargetURI:
    """
    Parse a target string.

    Args:
        target: Target such as "ssh://bob@host:22/srv", "mock://" or "local:"

    Returns:
        TargetURI with the parsed components

    Raises:
        ConfigurationError: If the target is not a valid URI
    """
    if SCHEME_ONLY_PATTERN.match(target):
        uri = _parse(target + PLACEHOLDER_HOST)
    elif SCHEME_COLON_PATTERN.match(target):
        uri = _parse(target + "//" + PLACEHOLDER_HOST)
    else:
        return _parse(target)

    uri.host = None
    return uri


__all__ = [
    "PLACEHOLDER_HOST",
    "TargetURI",
    "parse_target",
]

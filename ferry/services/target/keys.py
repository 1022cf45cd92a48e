"""
Credential Material Classification

The ``keys`` option accepts a mix of key file paths and inline key material.
Entries naming an existing regular file are moved to ``key_files``; all
other entries stay in ``keys``. Order is preserved on both sides.
"""

import logging
import os
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


def is_key_file(key: Any) -> bool:
    """Whether key names an existing regular file on the local filesystem."""
    if not isinstance(key, (str, bytes, os.PathLike)):
        return False
    try:
        return os.path.isfile(key)
    except (OSError, ValueError):
        return False


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (str, bytes, os.PathLike)):
        return [value]
    return list(value)


def group_keys_and_keyfiles(conf: Dict[str, Any]) -> None:
    """
    Split conf["keys"] into key files and inline keys, in place.

    Key files already present in conf["key_files"] are kept and every file
    found in conf["keys"] is appended after them. Nothing happens when conf
    has no keys.

    Args:
        conf: Configuration with normalized string keys
    """
    keys_mixed = conf.get("keys")
    if keys_mixed is None:
        return

    key_files = _as_list(conf.get("key_files"))
    keys: List[Any] = []
    for key in _as_list(keys_mixed):
        if key is not None and is_key_file(key):
            key_files.append(key)
        else:
            keys.append(key)

    conf["key_files"] = key_files
    conf["keys"] = keys
    logger.debug("Classified credentials: %d key files, %d inline keys", len(key_files), len(keys))


__all__ = [
    "group_keys_and_keyfiles",
    "is_key_file",
]

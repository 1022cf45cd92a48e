"""
Transport Plugin Module

Finds and instantiates transport implementations by backend name.

Module Architecture:
    transports/
    ├── __init__.py    # This file - public API
    ├── base.py        # BaseTransport and option declarations
    ├── registry.py    # TransportRegistry and tagged lookup results
    └── loader.py      # Two-tier loader with plugin package import

Concrete transports (ssh, winrm, docker, ...) live in separate plugin
packages named ferry_<backend>.
"""

from .base import BaseTransport, OptionSpec, option
from .loader import TransportLoader
from .registry import LookupResult, LookupStatus, TransportRegistry

__all__ = [
    "BaseTransport",
    "LookupResult",
    "LookupStatus",
    "OptionSpec",
    "TransportLoader",
    "TransportRegistry",
    "option",
]

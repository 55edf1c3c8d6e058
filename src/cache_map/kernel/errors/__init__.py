"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DeclarationError             (declaration.py)
    │   ├── ScopeViolationError
    │   └── InvalidOptionError
    └── ConfigError                  (cache_map.config.validation)
        ├── MissingRequiredSettingError
        ├── InvalidSettingValueError
        └── ConfigurationError
            └── UnresolvedAssociationError
"""

from cache_map.kernel.errors.base import BaseError
from cache_map.kernel.errors.declaration import (
    DeclarationError,
    InvalidOptionError,
    ScopeViolationError,
)

__all__ = [
    "BaseError",
    "DeclarationError",
    "InvalidOptionError",
    "ScopeViolationError",
]

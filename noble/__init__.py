"""noble - property-preserving class extension with a built-in event emitter."""

from .config import NobleConfig, get_config, set_config
from .core.emitter import NobleClass
from .core.errors import (
    InvalidArgument,
    NobleError,
    NonConfigurablePropertyError,
    NotExtensibleError,
    PropertyLockError,
    ReadOnlyPropertyError,
    UnhandledSignal,
)
from .core.extension import NobleType, Prototype, extend
from .core.properties import PropertyDescriptor, PropertyTable, copy_properties
from .utils.logging import get_logger, setup_logging

__all__ = [
    "NobleClass",
    "NobleType",
    "Prototype",
    "extend",
    "copy_properties",
    "PropertyDescriptor",
    "PropertyTable",
    "NobleError",
    "InvalidArgument",
    "UnhandledSignal",
    "PropertyLockError",
    "ReadOnlyPropertyError",
    "NonConfigurablePropertyError",
    "NotExtensibleError",
    "NobleConfig",
    "get_config",
    "set_config",
    "setup_logging",
    "get_logger",
]

"""
Exception types for noble.

Descriptor violations subclass TypeError so they read like the native
errors raised by Python when assigning to a read-only attribute.
"""

from __future__ import annotations

from typing import Any


# ============================================================================
# Base
# ============================================================================


class NobleError(Exception):
    """Base exception for all noble errors."""
    pass


# ============================================================================
# Event Errors
# ============================================================================


class InvalidArgument(NobleError, TypeError):
    """A listener that cannot be called was registered for an event."""

    def __init__(self, event: str, callback: Any = None):
        super().__init__(f"listener for {event} must be callable, got {type(callback).__name__}")
        self.event = event
        self.callback = callback


class UnhandledSignal(NobleError):
    """Raised when a non-exception value is emitted on an unobserved error event."""

    def __init__(self, value: Any = None):
        super().__init__(f"Unhandled error event: {value!r}")
        self.value = value


# ============================================================================
# Property Errors
# ============================================================================


class PropertyLockError(NobleError, TypeError):
    """Base exception for descriptor violations."""

    def __init__(self, message: str, name: str):
        super().__init__(message)
        self.name = name


class ReadOnlyPropertyError(PropertyLockError):
    """Assignment to a non-writable property."""

    def __init__(self, name: str, owner: str = "object"):
        super().__init__(f"Cannot assign to read only property '{name}' of {owner}", name)


class NonConfigurablePropertyError(PropertyLockError):
    """Deletion of a non-configurable property."""

    def __init__(self, name: str, owner: str = "object"):
        super().__init__(f"Cannot delete non-configurable property '{name}' of {owner}", name)


class NotExtensibleError(PropertyLockError):
    """Addition of a property to a frozen prototype."""

    def __init__(self, name: str, owner: str = "object"):
        super().__init__(f"Cannot add property '{name}', {owner} is not extensible", name)

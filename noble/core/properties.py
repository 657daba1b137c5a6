"""
Property descriptors and the property propagator.

A PropertyTable records the own members of a prototype or of a type's
static surface, each with its full descriptor. copy_properties moves
descriptors between tables (or from a plain mapping) without touching
members that the destination has locked.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from noble.core.errors import (
    NonConfigurablePropertyError,
    NotExtensibleError,
    ReadOnlyPropertyError,
)


# ============================================================================
# Descriptor Model
# ============================================================================


class PropertyDescriptor(BaseModel):
    """Full description of a single member.

    A descriptor is either a data descriptor (``value`` plus ``writable``)
    or an accessor (``get`` and/or ``set``). Accessors have no writable
    flag of their own; ``writable`` is ignored for them.

    Attributes:
        value: Stored value for data descriptors
        get: Getter, called with the receiver
        set: Setter, called with the receiver and the new value
        writable: Whether assignment may replace the value
        enumerable: Whether the member is listed by ``keys()``
        configurable: Whether the member may be deleted
    """

    value: Any = Field(default=None, description="Stored value")
    get: Optional[Callable[..., Any]] = Field(default=None, description="Getter")
    set: Optional[Callable[..., Any]] = Field(default=None, description="Setter")
    writable: bool = Field(default=True, description="Value may be reassigned")
    enumerable: bool = Field(default=True, description="Listed by keys()")
    configurable: bool = Field(default=True, description="May be deleted")

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def _check_kind(self) -> "PropertyDescriptor":
        if self.is_accessor and self.value is not None:
            raise ValueError("Accessor descriptors cannot also specify a value")
        return self

    @property
    def is_accessor(self) -> bool:
        return self.get is not None or self.set is not None

    @property
    def is_writable_data(self) -> bool:
        """True when a propagated member may replace this one."""
        return not self.is_accessor and self.writable

    def frozen(self) -> "PropertyDescriptor":
        """Return a locked copy of this descriptor."""
        if self.is_accessor:
            return self.model_copy(update={"configurable": False})
        return self.model_copy(update={"writable": False, "configurable": False})

    def __repr__(self) -> str:
        flags = "".join(
            flag for flag, on in (
                ("w", not self.is_accessor and self.writable),
                ("e", self.enumerable),
                ("c", self.configurable),
            ) if on
        )
        if self.is_accessor:
            return f"PropertyDescriptor(accessor, flags='{flags}')"
        return f"PropertyDescriptor(value={self.value!r}, flags='{flags}')"


def descriptor_for(value: Any) -> PropertyDescriptor:
    """Describe an entry of a property bag.

    A PropertyDescriptor is used as-is, a ``property`` becomes an accessor,
    anything else becomes a fully open data descriptor.
    """
    if isinstance(value, PropertyDescriptor):
        return value
    if isinstance(value, property):
        return PropertyDescriptor(get=value.fget, set=value.fset)
    return PropertyDescriptor(value=value)


# ============================================================================
# Property Table
# ============================================================================


class PropertyTable:
    """Ordered own-member table with descriptor semantics.

    Subclasses mirror defined members somewhere else (a class namespace,
    for instance) by overriding ``_install`` and ``_uninstall``.
    """

    def __init__(self, owner: str = "object") -> None:
        self._descriptors: dict[str, PropertyDescriptor] = {}
        self.owner = owner
        self.extensible = True

    # ------------------------------------------------------------------
    # Reflection
    # ------------------------------------------------------------------

    def names(self) -> list[str]:
        """All own member names, enumerable or not."""
        return list(self._descriptors)

    def keys(self) -> list[str]:
        """Enumerable own member names."""
        return [name for name, desc in self._descriptors.items() if desc.enumerable]

    def get(self, name: str) -> PropertyDescriptor | None:
        return self._descriptors.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._descriptors))

    def __len__(self) -> int:
        return len(self._descriptors)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} of {self.owner}: {self.names()}>"

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def define(self, name: str, descriptor: PropertyDescriptor) -> None:
        """Define or redefine a member, bypassing writability."""
        self._descriptors[name] = descriptor
        self._install(name, descriptor)

    def assign(self, name: str, value: Any, receiver: Any = None) -> None:
        """Assign a member the way ordinary attribute assignment would."""
        descriptor = self._descriptors.get(name)
        if descriptor is None:
            if not self.extensible:
                raise NotExtensibleError(name, self.owner)
            self.define(name, PropertyDescriptor(value=value))
        elif descriptor.is_accessor:
            if descriptor.set is None:
                raise ReadOnlyPropertyError(name, self.owner)
            descriptor.set(receiver, value)
        elif not descriptor.writable:
            raise ReadOnlyPropertyError(name, self.owner)
        else:
            self.define(name, descriptor.model_copy(update={"value": value}))

    def delete(self, name: str) -> None:
        descriptor = self._descriptors.get(name)
        if descriptor is None:
            raise AttributeError(name)
        if not descriptor.configurable:
            raise NonConfigurablePropertyError(name, self.owner)
        del self._descriptors[name]
        self._uninstall(name)

    def freeze(self) -> None:
        """Lock every own member and refuse new ones."""
        for name, descriptor in list(self._descriptors.items()):
            self._descriptors[name] = descriptor.frozen()
        self.extensible = False

    def _install(self, name: str, descriptor: PropertyDescriptor) -> None:
        pass

    def _uninstall(self, name: str) -> None:
        pass


PropertySource = Union[PropertyTable, Mapping[str, Any]]


def as_property_table(source: PropertySource) -> PropertyTable:
    """View a property bag as a table of descriptors."""
    if isinstance(source, PropertyTable):
        return source
    table = PropertyTable(owner="properties")
    for name, value in dict(source).items():
        table.define(name, descriptor_for(value))
    return table


# ============================================================================
# Propagation
# ============================================================================


def copy_properties(destination: PropertyTable, source: PropertySource) -> PropertyTable:
    """Copy every own member of ``source`` onto ``destination``.

    Full descriptors are copied, non-enumerable members included. A member
    the destination already has is left alone unless it is a writable data
    member; the skip is silent. A new member on a frozen destination is
    refused.

    Args:
        destination: Table receiving the members
        source: Table or mapping providing them

    Returns:
        The destination table

    Raises:
        NotExtensibleError: If the destination is frozen and ``source`` has
            a member it lacks
    """
    source_table = as_property_table(source)
    for name in source_table.names():
        existing = destination.get(name)
        if existing is None and not destination.extensible:
            raise NotExtensibleError(name, destination.owner)
        if existing is None or existing.is_writable_data:
            destination.define(name, source_table.get(name))
    return destination

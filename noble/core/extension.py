"""
Extension engine for noble types.

Every noble type is a real Python class, so its instance prototype is its
class namespace and ``isinstance`` follows the MRO. Next to the namespace
each type keeps two descriptor tables: the prototype members that
instances see, and the static members that only the type sees. Statics
are copied from parent to child rather than inherited, and locked members
stay locked in both tables.
"""

from __future__ import annotations

import inspect
import types
from collections.abc import Callable
from typing import Any, Optional

from noble.core.errors import ReadOnlyPropertyError
from noble.core.properties import (
    PropertyDescriptor,
    PropertySource,
    PropertyTable,
    copy_properties,
)
from noble.utils.logging import get_logger, log_operation

logger = get_logger("core.extension")

PROTOTYPE_ATTR = "__prototype_descriptors__"
STATICS_ATTR = "__static_descriptors__"
DEFAULT_TYPE_NAME = "SubClass"


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _constructor_length(constructor: Any) -> int:
    """Count required positional parameters after the receiver."""
    if constructor is None:
        return 0
    try:
        signature = inspect.signature(constructor)
    except (TypeError, ValueError):
        return 0
    positional = [
        param for param in signature.parameters.values()
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD)
        and param.default is param.empty
    ]
    return max(len(positional) - 1, 0)


# ============================================================================
# Descriptor Tables
# ============================================================================


class PrototypeTable(PropertyTable):
    """Prototype members of a type, mirrored into its class namespace."""

    def __init__(self, cls: type) -> None:
        super().__init__(owner=f"{cls.__name__}.prototype")
        self._cls = cls

    def _install(self, name: str, descriptor: PropertyDescriptor) -> None:
        if descriptor.is_accessor:
            raw = property(descriptor.get, descriptor.set)
        else:
            raw = descriptor.value
        type.__setattr__(self._cls, name, raw)

    def _uninstall(self, name: str) -> None:
        type.__delattr__(self._cls, name)


class StaticTable(PropertyTable):
    """Static members of a type. Served by NobleType attribute lookup only."""

    def __init__(self, cls: type) -> None:
        super().__init__(owner=cls.__name__)


def own_prototype(cls: type) -> PrototypeTable | None:
    return vars(cls).get(PROTOTYPE_ATTR)


def own_statics(cls: type) -> StaticTable | None:
    return vars(cls).get(STATICS_ATTR)


def find_prototype_descriptor(cls: type, name: str) -> PropertyDescriptor | None:
    """Walk the prototype chain for the nearest descriptor of ``name``."""
    for klass in cls.__mro__:
        if name in vars(klass):
            table = own_prototype(klass)
            return table.get(name) if table is not None else None
    return None


def assign_prototype_member(cls: type, name: str, value: Any) -> None:
    """Assign a prototype member, honouring inherited locks."""
    own = own_prototype(cls)
    inherited = find_prototype_descriptor(cls, name)
    if name not in own and inherited is not None:
        if inherited.is_accessor:
            if inherited.set is None:
                raise ReadOnlyPropertyError(name, own.owner)
            inherited.set(cls, value)
            return
        if not inherited.writable:
            raise ReadOnlyPropertyError(name, own.owner)
    own.assign(name, value, receiver=cls)


# ============================================================================
# Prototype View
# ============================================================================


class Prototype:
    """Attribute view over a type's instance prototype.

    Reads return raw members (functions are not bound), writes and deletes
    go through the same locking rules as the type itself.
    """

    __slots__ = ("_cls",)

    def __init__(self, cls: type) -> None:
        object.__setattr__(self, "_cls", cls)

    def __getattr__(self, name: str) -> Any:
        for klass in self._cls.__mro__:
            if name in vars(klass):
                return vars(klass)[name]
        raise AttributeError(f"{self._cls.__name__}.prototype has no member '{name}'")

    def __setattr__(self, name: str, value: Any) -> None:
        assign_prototype_member(self._cls, name, value)

    def __delattr__(self, name: str) -> None:
        own_prototype(self._cls).delete(name)

    def __contains__(self, name: object) -> bool:
        return any(name in vars(klass) for klass in self._cls.__mro__)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Prototype) and other._cls is self._cls

    def __hash__(self) -> int:
        return hash((Prototype, self._cls))

    def keys(self) -> list[str]:
        """Enumerable own members."""
        return own_prototype(self._cls).keys()

    def names(self) -> list[str]:
        """All own members."""
        return own_prototype(self._cls).names()

    def descriptor(self, name: str) -> PropertyDescriptor | None:
        """Own descriptor for ``name``, if any."""
        return own_prototype(self._cls).get(name)

    def freeze(self) -> None:
        own_prototype(self._cls).freeze()

    def __repr__(self) -> str:
        return f"<prototype of {self._cls.__name__}>"


# ============================================================================
# Metaclass
# ============================================================================


class NobleType(type):
    """Metaclass building noble types.

    In a class body, ``classmethod`` and ``staticmethod`` entries become
    statics and every other non-dunder entry becomes a prototype member.
    Passing ``frozen=True`` locks the new prototype.
    """

    def __new__(mcs, name, bases, namespace, frozen: bool = False, **kwargs):
        statics_ns: dict[str, Any] = {}
        prototype_ns: dict[str, Any] = {}
        body: dict[str, Any] = {}
        for key, value in namespace.items():
            if _is_dunder(key):
                body[key] = value
            elif isinstance(value, (classmethod, staticmethod)):
                statics_ns[key] = PropertyDescriptor(value=value, enumerable=False)
            else:
                prototype_ns[key] = value

        cls = super().__new__(mcs, name, bases, body, **kwargs)
        parent = next((base for base in bases if isinstance(base, NobleType)), None)

        statics = StaticTable(cls)
        type.__setattr__(cls, STATICS_ATTR, statics)
        statics.define("name", PropertyDescriptor(
            value=name, writable=False, enumerable=False, configurable=True,
        ))
        statics.define("length", PropertyDescriptor(
            value=_constructor_length(body.get("__init__")),
            writable=False, enumerable=False, configurable=True,
        ))
        if parent is not None:
            statics.define("super", PropertyDescriptor(
                value=parent, writable=False, enumerable=False, configurable=False,
            ))
            copy_properties(statics, own_statics(parent))
        copy_properties(statics, statics_ns)

        prototype = PrototypeTable(cls)
        type.__setattr__(cls, PROTOTYPE_ATTR, prototype)
        prototype.define("constructor", PropertyDescriptor(
            value=cls, writable=True, enumerable=False, configurable=True,
        ))
        copy_properties(prototype, prototype_ns)

        if frozen:
            prototype.freeze()

        log_operation(logger, f"Created type '{name}'", {"parent": getattr(parent, "__name__", None)})
        return cls

    def __init__(cls, name, bases, namespace, frozen: bool = False, **kwargs):
        super().__init__(name, bases, namespace, **kwargs)

    # ------------------------------------------------------------------
    # Attribute protocol
    # ------------------------------------------------------------------

    def __getattribute__(cls, name: str) -> Any:
        if not _is_dunder(name):
            statics = type.__getattribute__(cls, "__dict__").get(STATICS_ATTR)
            if statics is not None and name in statics:
                return _resolve_static(cls, statics.get(name))
        return super().__getattribute__(name)

    def __setattr__(cls, name: str, value: Any) -> None:
        if _is_dunder(name):
            type.__setattr__(cls, name, value)
            return
        statics = own_statics(cls)
        if name in statics:
            statics.assign(name, value, receiver=cls)
            return
        assign_prototype_member(cls, name, value)

    def __delattr__(cls, name: str) -> None:
        if _is_dunder(name):
            type.__delattr__(cls, name)
            return
        statics = own_statics(cls)
        if name in statics:
            statics.delete(name)
            return
        own_prototype(cls).delete(name)

    # ------------------------------------------------------------------
    # Reflection
    # ------------------------------------------------------------------

    @property
    def prototype(cls) -> Prototype:
        """The instance prototype of this type."""
        return Prototype(cls)

    def static_names(cls) -> list[str]:
        """All own static member names."""
        return own_statics(cls).names()

    def static_descriptor(cls, name: str) -> PropertyDescriptor | None:
        return own_statics(cls).get(name)


def _resolve_static(cls: type, descriptor: PropertyDescriptor) -> Any:
    if descriptor.is_accessor:
        return descriptor.get(cls) if descriptor.get is not None else None
    value = descriptor.value
    if isinstance(value, (classmethod, staticmethod)):
        return value.__get__(None, cls)
    return value


# ============================================================================
# Extend
# ============================================================================


def _type_name(constructor: Optional[Callable[..., Any]]) -> str:
    name = getattr(constructor, "__name__", "")
    if name.isidentifier() and not _is_dunder(name):
        return name
    return DEFAULT_TYPE_NAME


def extend(
    parent: NobleType,
    instance_props: Optional[PropertySource] = None,
    static_props: Optional[PropertySource] = None,
) -> NobleType:
    """Create a new type derived from ``parent``.

    Args:
        parent: Type being extended; it is never modified
        instance_props: Members for the new prototype. An own ``constructor``
            entry becomes the type's ``__init__``.
        static_props: Extra statics, applied after the inherited ones

    Returns:
        The new type
    """
    if isinstance(instance_props, PropertyTable):
        props: dict[str, Any] = {name: instance_props.get(name) for name in instance_props.names()}
    else:
        props = dict(instance_props or {})

    constructor = props.pop("constructor", None)
    if isinstance(constructor, PropertyDescriptor):
        constructor = constructor.value
    name = _type_name(constructor)

    if constructor is None:
        def constructor(self, *args, **kwargs):
            child.super.__init__(self, *args, **kwargs)

    def exec_body(namespace: dict[str, Any]) -> None:
        namespace["__init__"] = constructor
        namespace["__module__"] = parent.__module__
        namespace["__qualname__"] = name

    child = types.new_class(name, (parent,), {}, exec_body)

    if static_props:
        copy_properties(own_statics(child), static_props)
    if props:
        copy_properties(own_prototype(child), props)

    log_operation(logger, f"Extended '{parent.__name__}' into '{name}'", {
        "prototype_members": len(props),
        "statics": len(static_props or {}),
    })
    return child

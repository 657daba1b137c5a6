"""
The Base Type: an event emitter every noble type inherits.

Listeners live in a per-instance ``_events`` map created the first time
``on`` or ``off`` runs. Emission is synchronous and in-line; errors raised
by listeners propagate straight out of ``emit``.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from noble.config import get_config
from noble.core.dispatch import dispatch_event_spec
from noble.core.errors import InvalidArgument, ReadOnlyPropertyError, UnhandledSignal
from noble.core.extension import NobleType, extend, find_prototype_descriptor
from noble.core.listeners import Listener, OnceWrapper, bind_receiver, unwrap
from noble.utils.logging import get_logger, log_operation

logger = get_logger("core.emitter")

EVENTS_ATTR = "_events"

EventMap = dict[str, list[Listener]]


def _invoke(emitter: Any, listeners: tuple[Listener, ...], args: tuple[Any, ...]) -> None:
    for listener in listeners:
        bind_receiver(listener.callback, listener.receiver(emitter))(*args)


class NobleClass(metaclass=NobleType, frozen=True):
    """Root of every noble type.

    Its prototype is frozen: ``on``, ``once``, ``off``, ``emit`` and
    ``listeners`` cannot be reassigned or deleted, though derived types may
    define their own.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        pass

    def __setattr__(self, name: str, value: Any) -> None:
        descriptor = find_prototype_descriptor(type(self), name)
        if descriptor is not None and not descriptor.is_accessor and not descriptor.writable:
            raise ReadOnlyPropertyError(name, type(self).__name__)
        object.__setattr__(self, name, value)

    @classmethod
    def extend(cls, instance_props=None, static_props=None):
        """Create a type derived from this one. See ``noble.extend``."""
        return extend(cls, instance_props, static_props)

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    def _event_map(self) -> Optional[EventMap]:
        return vars(self).get(EVENTS_ATTR)

    def _reset_events(self) -> EventMap:
        events: EventMap = {}
        object.__setattr__(self, EVENTS_ATTR, events)
        return events

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def on(self, name, callback=None, context=None):
        """Register ``callback`` for ``name``.

        ``name`` may be a single event, several space-separated events, or
        a mapping of event to callback (or to a method name looked up on
        ``context``). Plain functions receive ``context`` (or, without a
        context, this instance) as their first argument.

        Note:
            The receiver comes before the emitted arguments, so a plain
            function needs one extra leading parameter:
            ``on("all", lambda this, name, value: ...)`` for
            ``emit("x", 9)``, not ``lambda name, value: ...``. Bound
            methods and other callables get the emitted arguments only.

        Raises:
            InvalidArgument: If the callback is not callable
        """
        events = self._event_map()
        if events is None:
            events = self._reset_events()
        if name and not dispatch_event_spec(self, "on", name, callback, context):
            if not callable(unwrap(callback)):
                raise InvalidArgument(name, callback)
            events.setdefault(name, []).append(Listener(callback, context))
        return self

    def once(self, name, callback=None, context=None):
        """Register ``callback`` for a single firing of ``name``."""
        if name and dispatch_event_spec(self, "once", name, callback, context):
            return self
        return self.on(name, OnceWrapper(self, name, callback), context)

    def off(self, name=None, callback=None, context=None):
        """Remove listeners.

        ``off("*")`` drops everything. ``off(name)`` drops every listener of
        ``name``; a callback and/or context narrows the removal. Afterwards
        ``"off:<name>"`` listeners are told about it with
        ``(callback, context, self)``.
        """
        config = get_config().events
        events = self._event_map()
        if name == config.wildcard or events is None:
            self._reset_events()
            log_operation(logger, "Reset all listeners", {"type": type(self).__name__})
            return self

        if name and not dispatch_event_spec(self, "off", name, callback, context) and name in events:
            retained = [listener for listener in events[name] if not listener.matches(callback, context)]
            if retained:
                events[name] = retained
            else:
                del events[name]

        if isinstance(name, str) and f"{config.off_prefix}{name}" in events:
            self.emit(f"{config.off_prefix}{name}", callback, context, self)
        return self

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def emit(self, name, *args):
        """Call every listener of ``name`` with ``args``, then the "all" listeners.

        Raises:
            UnhandledSignal: If ``name`` is "error", nobody listens for it,
                and the first argument is not an exception (an exception is
                raised as-is)
        """
        config = get_config().events
        events = self._event_map()

        if name == config.error_event and not (events or {}).get(config.error_event):
            error = args[0] if args else None
            log_operation(logger, f"Unobserved '{name}' event", {
                "type": type(self).__name__,
                "value": repr(error),
            })
            if isinstance(error, BaseException):
                raise error
            raise UnhandledSignal(error)
        if events is None:
            return self

        listeners = events.get(name)
        if listeners:
            _invoke(self, tuple(listeners), args)
        all_listeners = events.get(config.all_event)
        if all_listeners:
            _invoke(self, tuple(all_listeners), (name, *args))
        return self

    def listeners(self, name) -> tuple[Callable[..., Any], ...]:
        """Original callbacks registered for ``name``, in firing order."""
        events = self._event_map() or {}
        return tuple(unwrap(listener.callback) for listener in events.get(name, ()))

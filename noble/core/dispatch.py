"""
Event dispatch normalizer.

Lets ``on``, ``once`` and ``off`` accept a single event name, several
whitespace-separated names, or a mapping of event name to listener, by
fanning the latter two out into single-name calls.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from noble.config import get_config


# ============================================================================
# Listener Specs
# ============================================================================


@dataclass(frozen=True)
class Direct:
    """Listener given as a callable."""

    callback: Callable[..., Any]

    def resolve(self, context: Any) -> Callable[..., Any]:
        return self.callback


@dataclass(frozen=True)
class Named:
    """Listener given as the name of a method on the context."""

    method: str

    def resolve(self, context: Any) -> Any:
        if isinstance(context, Mapping):
            return context[self.method]
        return getattr(context, self.method)


ListenerSpec = Union[Direct, Named]


def listener_spec(value: Any) -> ListenerSpec:
    """Tag a mapping value as a direct callback or a method name."""
    if isinstance(value, (Direct, Named)):
        return value
    if callable(value):
        return Direct(value)
    return Named(value)


# ============================================================================
# Normalizer
# ============================================================================


def _is_single_name(events: Any) -> bool:
    return isinstance(events, str) and not re.search(get_config().events.separator, events)


def split_event_names(events: str) -> list[str]:
    """Split a multi-event string, dropping empty pieces."""
    return [name for name in re.split(get_config().events.separator, events) if name]


def dispatch_event_spec(
    emitter: Any,
    action: str,
    events: Any,
    callback: Optional[Any] = None,
    context: Any = None,
) -> bool:
    """Fan a multi-event string or an event mapping out into single calls.

    Args:
        emitter: Object whose ``action`` method is re-invoked per name
        action: ``"on"``, ``"once"`` or ``"off"``
        events: Event name, space-separated names, or a name -> listener map
        callback: Listener (ignored for mappings)
        context: Receiver for the listeners

    Returns:
        True when the call was fanned out, False when ``events`` is a single
        name (or empty) and the caller should handle it itself.
    """
    if not events or _is_single_name(events):
        return False

    method = getattr(emitter, action)

    if isinstance(events, Mapping):
        if callback is not None and not callable(callback) and context is None:
            context, callback = callback, None
        for name, value in list(events.items()):
            method(name, listener_spec(value).resolve(context), context)
        return True

    for name in split_event_names(events):
        method(name, callback, context)
    return True

"""Listener records, receiver binding and the once-wrapper."""

from __future__ import annotations

import types
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from noble.core.emitter import NobleClass


@dataclass(frozen=True, eq=False)
class Listener:
    """A registered (callback, context) pair."""

    callback: Callable[..., Any]
    context: Any = None

    def matches(self, callback: Optional[Callable[..., Any]], context: Any) -> bool:
        """Whether an ``off`` call with these filters removes this listener.

        Callbacks compare by equality so a freshly fetched bound method
        matches the one stored earlier; contexts compare by identity.
        """
        if callback is not None and self.callback != callback and unwrap(self.callback) != callback:
            return False
        if context is not None and context is not self.context:
            return False
        return True

    def receiver(self, emitter: Any) -> Any:
        return self.context if self.context is not None else emitter


class OnceWrapper:
    """Self-removing shim around a callback registered with ``once``.

    The shim detaches itself from its event before the wrapped callback
    runs, so an emission made from inside the callback cannot fire it again.
    """

    __slots__ = ("_callback", "_emitter", "_event")

    def __init__(self, emitter: "NobleClass", event: str, callback: Callable[..., Any]):
        self._callback = callback
        self._emitter = emitter
        self._event = event

    @property
    def callback(self) -> Callable[..., Any]:
        """The original callback."""
        return self._callback

    def fire(self, receiver: Any, *args: Any) -> Any:
        self._emitter.off(self._event, self)
        return bind_receiver(self._callback, receiver)(*args)

    def __call__(self, *args: Any) -> Any:
        return self.fire(self._emitter, *args)

    def __repr__(self) -> str:
        return f"<once {self._event!r}: {self._callback!r}>"


def unwrap(callback: Any) -> Any:
    """Return the original callback behind a once-wrapper."""
    if isinstance(callback, OnceWrapper):
        return callback.callback
    return callback


def bind_receiver(callback: Callable[..., Any], receiver: Any) -> Callable[..., Any]:
    """Bind ``callback`` to the receiver it is invoked on.

    Plain functions are bound like methods, so the receiver arrives as the
    first positional argument. Bound methods, builtins, partials and other
    callable objects already carry their own receiver and are returned
    unchanged.
    """
    if isinstance(callback, OnceWrapper):
        return partial(callback.fire, receiver)
    if isinstance(callback, types.FunctionType):
        return types.MethodType(callback, receiver)
    return callback

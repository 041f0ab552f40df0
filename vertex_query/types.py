"""Core types for vertex-query."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Iterable,
    Iterator,
    Mapping,
    Union,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Errors
# =============================================================================


class VertexQueryError(Exception):
    """Base class for errors raised by vertex-query."""


class ClientError(VertexQueryError):
    """Invalid caller input, detected before any network activity.

    The request can be retried once the offending input is fixed.
    """


class AbortError(VertexQueryError):
    def __init__(self, reason: Union[str, None] = None):
        self.reason = reason
        super().__init__(reason or "Operation aborted")


# =============================================================================
# Abort / Cancellation
# =============================================================================


Listener = Callable[[], None]


class AbortSignal:
    """Observable "aborted" condition with an optional reason.

    Once aborted, a signal stays aborted. Only its AbortController can abort
    it; everyone else observes it through ``aborted``, ``reason``, listeners
    or ``wait()``.
    """

    def __init__(self) -> None:
        self._aborted = False
        self._reason: Union[str, None] = None
        self._listeners: list[tuple[Listener, bool]] = []
        self._event = asyncio.Event()

    @property
    def aborted(self) -> bool:
        return self._aborted

    @property
    def reason(self) -> Union[str, None]:
        return self._reason

    def throw_if_aborted(self) -> None:
        if self._aborted:
            raise AbortError(self._reason)

    def add_listener(self, callback: Listener, *, once: bool = False) -> None:
        """Register a callback to run when the signal aborts.

        If the signal is already aborted the callback runs immediately. A
        ``once`` listener is dropped after its first call.
        """
        if self._aborted:
            callback()
            if once:
                return
        self._listeners.append((callback, once))

    def remove_listener(self, callback: Listener) -> None:
        """Remove a previously added callback. Unknown callbacks are ignored."""
        for index, (registered, _) in enumerate(self._listeners):
            if registered is callback:
                del self._listeners[index]
                return

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _abort(self, reason: Union[str, None] = None) -> None:
        if self._aborted:
            return
        self._aborted = True
        self._reason = reason
        self._event.set()
        listeners = list(self._listeners)
        self._listeners = [(cb, once) for cb, once in listeners if not once]
        for listener, _ in listeners:
            try:
                listener()
            except Exception:
                logger.exception("Abort listener raised")

    async def wait(self) -> None:
        await self._event.wait()


class AbortController:
    def __init__(self) -> None:
        self._signal = AbortSignal()

    @property
    def signal(self) -> AbortSignal:
        return self._signal

    def abort(self, reason: Union[str, None] = None) -> None:
        self._signal._abort(reason)


# =============================================================================
# Headers
# =============================================================================


HeadersInit = Union["Headers", Mapping[str, str], Iterable[tuple[str, str]], None]


class Headers:
    """Ordered, case-insensitive HTTP header multimap.

    ``append`` keeps any existing values for the name, ``set`` replaces them.
    Original name casing is preserved for iteration.
    """

    def __init__(self, init: HeadersInit = None) -> None:
        self._items: list[tuple[str, str]] = []
        if init is None:
            return
        if isinstance(init, Headers):
            pairs: Iterable[tuple[str, str]] = init.items()
        elif isinstance(init, Mapping):
            pairs = init.items()
        else:
            pairs = init
        for name, value in pairs:
            self.append(name, value)

    def append(self, name: str, value: str) -> None:
        self._items.append((str(name), str(value)))

    def set(self, name: str, value: str) -> None:
        key = name.lower()
        position: Union[int, None] = None
        kept: list[tuple[str, str]] = []
        for item in self._items:
            if item[0].lower() == key:
                if position is None:
                    position = len(kept)
                continue
            kept.append(item)
        if position is None:
            kept.append((str(name), str(value)))
        else:
            kept.insert(position, (str(name), str(value)))
        self._items = kept

    def get(self, name: str) -> Union[str, None]:
        """Return the value for ``name``; several values are joined with ", "."""
        values = self.get_all(name)
        if not values:
            return None
        return ", ".join(values)

    def get_all(self, name: str) -> list[str]:
        key = name.lower()
        return [value for item_name, value in self._items if item_name.lower() == key]

    def has(self, name: str) -> bool:
        key = name.lower()
        return any(item_name.lower() == key for item_name, _ in self._items)

    def delete(self, name: str) -> None:
        key = name.lower()
        self._items = [item for item in self._items if item[0].lower() != key]

    def items(self) -> list[tuple[str, str]]:
        return list(self._items)

    def copy(self) -> "Headers":
        return Headers(self)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Headers):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        names = ", ".join(name for name, _ in self._items)
        return f"Headers([{names}])"


# =============================================================================
# Request Options
# =============================================================================


@dataclass(frozen=True)
class RequestOptions:
    """Per-request options supplied by the caller.

    Attributes:
        custom_headers: Extra headers to send; a Headers, mapping or pairs.
        api_client: Value for the X-Goog-Api-Client header.
        timeout: Seconds before the request is aborted. Negative values are
            treated as no timeout.
        signal: External AbortSignal that cancels the request when aborted.
    """

    custom_headers: HeadersInit = None
    api_client: Union[str, None] = None
    timeout: Union[float, None] = None
    signal: Union[AbortSignal, None] = None


RawResponse = Any

"""Combine an external abort signal and a timeout into one signal."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Union

from vertex_query.constants import REQUEST_ABORTED_REASON, REQUEST_TIMED_OUT_REASON
from vertex_query.types import AbortController, AbortSignal, RequestOptions

logger = logging.getLogger(__name__)


def _noop() -> None:
    pass


@dataclass
class AbortSetup:
    """Effective signal for one request plus its cleanup callbacks.

    Both callbacks are always callable and safe to call more than once.
    """

    signal: Union[AbortSignal, None] = None
    clear_listener: Callable[[], None] = field(default=_noop)
    clear_timer: Callable[[], None] = field(default=_noop)


def compose_abort(request_options: RequestOptions | None = None) -> AbortSetup:
    """Build the abort signal a request should be sent with.

    | timeout | signal | result                                             |
    |---------|--------|----------------------------------------------------|
    | no      | no     | no signal                                          |
    | no      | yes    | the external signal itself                         |
    | yes     | no     | new signal aborted by a timer                      |
    | yes     | yes    | new signal aborted by the timer or the external one |

    A timeout schedules a timer on the running event loop, so this must be
    called from a coroutine when ``timeout`` is set.
    """
    setup = AbortSetup()
    if request_options is None:
        return setup

    timeout = request_options.timeout
    external = request_options.signal
    has_timeout = timeout is not None and timeout >= 0
    has_signal = external is not None

    if not has_timeout and not has_signal:
        return setup

    if not has_timeout:
        setup.signal = external
        return setup

    controller = AbortController()

    if external is not None:

        def on_external_abort() -> None:
            logger.debug("External signal aborted the request")
            controller.abort(REQUEST_ABORTED_REASON)

        def clear_listener() -> None:
            external.remove_listener(on_external_abort)

        external.add_listener(on_external_abort, once=True)
        setup.clear_listener = clear_listener

    def on_timeout() -> None:
        # The external listener is stale once the timer has fired.
        setup.clear_listener()
        if controller.signal.aborted:
            return
        logger.debug("Request timed out after %ss", timeout)
        controller.abort(REQUEST_TIMED_OUT_REASON)

    handle = asyncio.get_running_loop().call_later(timeout, on_timeout)
    setup.clear_timer = handle.cancel
    setup.signal = controller.signal
    return setup

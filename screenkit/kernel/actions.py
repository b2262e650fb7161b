"""
Screenkit Kernel — CTA Action Dispatch

dispatch(action, capabilities) performs exactly one side effect per action
variant through an abstract Capabilities object. The dispatcher never
interprets custom payloads and never touches the source document.

  route              → navigate(target, method or "push")
  external_url       → open_url(url, new_context=openInNewTab or False)
  mailto             → open_url("mailto:<email>?subject=..&body=..", False)
  phone              → open_url("tel:<number>", False)
  download           → open_url(fileUrl, True)
  copy_to_clipboard  → write_clipboard(text); notify(toastMessage) on success only
  custom             → run_custom(handlerId, payload)
  noop               → nothing

Capability failures never propagate out of dispatch. Clipboard failures are
swallowed (no toast); other failures come back on DispatchResult.error.
An unknown action type raises ConfigError.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, urlencode

from screenkit.kernel.errors import CapabilityError, ConfigError

if TYPE_CHECKING:
    from screenkit.kernel.models import (
        CopyToClipboardAction,
        CtaAction,
        CustomAction,
        DownloadAction,
        ExternalUrlAction,
        MailtoAction,
        NoopAction,
        PhoneAction,
        RouteAction,
    )

logger = logging.getLogger(__name__)

CustomHandler = Callable[[Any], Any]

# Tasks fired for async capabilities; held so they aren't collected mid-flight
_pending: set[asyncio.Future[Any]] = set()


# ---------------------------------------------------------------------------
# Capabilities
# ---------------------------------------------------------------------------


class HandlerRegistry:
    """Lookup table of handlerId → handler(payload), supplied by the caller."""

    def __init__(self, handlers: dict[str, CustomHandler] | None = None) -> None:
        self._handlers: dict[str, CustomHandler] = dict(handlers or {})

    def register(self, handler_id: str, handler: CustomHandler) -> None:
        self._handlers[handler_id] = handler

    def resolve(self, handler_id: str) -> CustomHandler:
        try:
            return self._handlers[handler_id]
        except KeyError:
            raise LookupError(f"No custom handler registered for '{handler_id}'") from None

    def __contains__(self, handler_id: object) -> bool:
        return handler_id in self._handlers


class Capabilities:
    """
    Abstract platform capabilities consumed by dispatch().
    Implement per display surface, or use RecordingCapabilities in tests.
    Any method may return an awaitable; dispatch fires it without awaiting.
    """

    def __init__(self, handlers: HandlerRegistry | None = None) -> None:
        self.handlers = handlers or HandlerRegistry()

    def navigate(self, target: str, method: str) -> Any:
        """method is "push" (extend history) or "replace"."""
        raise NotImplementedError

    def open_url(self, uri: str, new_context: bool) -> Any:
        raise NotImplementedError

    def write_clipboard(self, text: str) -> Any:
        """Return True on success. False or an exception means the write failed."""
        raise NotImplementedError

    def notify(self, message: str) -> Any:
        raise NotImplementedError

    def run_custom(self, handler_id: str, payload: Any) -> Any:
        return self.handlers.resolve(handler_id)(payload)


class RecordingCapabilities(Capabilities):
    """Records every capability call in order. For tests and dry runs."""

    def __init__(
        self,
        handlers: HandlerRegistry | None = None,
        clipboard_ok: bool = True,
    ) -> None:
        super().__init__(handlers)
        self.clipboard_ok = clipboard_ok
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def navigate(self, target: str, method: str) -> None:
        self.calls.append(("navigate", (target, method)))

    def open_url(self, uri: str, new_context: bool) -> None:
        self.calls.append(("open_url", (uri, new_context)))

    def write_clipboard(self, text: str) -> bool:
        self.calls.append(("write_clipboard", (text,)))
        return self.clipboard_ok

    def notify(self, message: str) -> None:
        self.calls.append(("notify", (message,)))

    def run_custom(self, handler_id: str, payload: Any) -> Any:
        self.calls.append(("run_custom", (handler_id, payload)))
        if handler_id in self.handlers:
            return self.handlers.resolve(handler_id)(payload)
        return None

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


# ---------------------------------------------------------------------------
# URI builders
# ---------------------------------------------------------------------------


def build_mailto_uri(email: str, subject: str | None = None, body: str | None = None) -> str:
    """mailto:<email>, with subject/body percent-encoded as query params when present."""
    params: list[tuple[str, str]] = []
    if subject:
        params.append(("subject", subject))
    if body:
        params.append(("body", body))
    uri = f"mailto:{email}"
    if params:
        uri += "?" + urlencode(params, quote_via=quote)
    return uri


def build_tel_uri(number: str) -> str:
    return f"tel:{number}"


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


@dataclass
class DispatchResult:
    """
    What happened when an action was dispatched.

    A capability that returns an awaitable is scheduled, not awaited: the
    result comes back with `pending` set to the scheduled future and is
    updated in place when it settles (a failure sets `performed=False` and
    `error`). Await `pending` to collect the outcome. With no running event
    loop there is nothing to schedule on, so the awaitable is run to
    completion before dispatch returns and `pending` stays None.
    """

    action_type: str
    performed: bool = True
    error: CapabilityError | None = None
    details: dict[str, Any] = field(default_factory=dict)
    pending: asyncio.Future[Any] | None = None


def dispatch(action: CtaAction, capabilities: Capabilities) -> DispatchResult:
    """Perform the single side effect for `action`. Synchronous, fire-and-forget."""
    action_type = getattr(action, "type", None)
    handler = _DISPATCHERS.get(action_type)  # type: ignore[arg-type]
    if handler is None:
        raise ConfigError(f"Unknown CTA action type: {action_type!r}")

    logger.debug("Dispatching %s action", action_type)
    return handler(action, capabilities)


def _invoke(result: DispatchResult, capability: str, fn: Callable[..., Any], *args: Any) -> DispatchResult:
    """Invoke a capability, recording a raised or eventual failure on `result`."""

    def _settle(outcome: Any) -> None:
        if isinstance(outcome, BaseException):
            result.performed = False
            result.error = CapabilityError(capability, outcome)

    try:
        result.pending = _fire(fn(*args), on_done=_settle)
    except Exception as e:
        result.performed = False
        result.error = CapabilityError(capability, e)
        logger.warning("%s", result.error)
    return result


def _fire(result: Any, on_done: Callable[[Any], None] | None = None) -> asyncio.Future[Any] | None:
    """
    Let an awaitable capability result run without awaiting it. Returns the
    scheduled future, or None when nothing was scheduled.
    Without a running loop the awaitable is driven to completion here.
    """
    if not inspect.isawaitable(result):
        if on_done is not None:
            on_done(result)
        return None

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        value = asyncio.run(_await(result))
        if on_done is not None:
            on_done(value)
        return None

    fut = asyncio.ensure_future(result, loop=loop)
    _pending.add(fut)

    def _finish(f: asyncio.Future[Any]) -> None:
        _pending.discard(f)
        if f.cancelled():
            return
        exc = f.exception()
        if exc is not None:
            logger.warning("%s", CapabilityError("async", exc))
            if on_done is not None:
                on_done(exc)
            return
        if on_done is not None:
            on_done(f.result())

    fut.add_done_callback(_finish)
    return fut


async def _await(awaitable: Any) -> Any:
    return await awaitable


def _dispatch_route(action: RouteAction, caps: Capabilities) -> DispatchResult:
    method = action.method or "push"
    result = DispatchResult("route", details={"target": action.target, "method": method})
    return _invoke(result, "navigation", caps.navigate, action.target, method)


def _dispatch_external_url(action: ExternalUrlAction, caps: Capabilities) -> DispatchResult:
    new_context = bool(action.open_in_new_tab)
    result = DispatchResult("external_url", details={"uri": action.url, "new_context": new_context})
    return _invoke(result, "open_url", caps.open_url, action.url, new_context)


def _dispatch_mailto(action: MailtoAction, caps: Capabilities) -> DispatchResult:
    uri = build_mailto_uri(action.email, action.subject, action.body)
    return _invoke(DispatchResult("mailto", details={"uri": uri}), "open_url", caps.open_url, uri, False)


def _dispatch_phone(action: PhoneAction, caps: Capabilities) -> DispatchResult:
    uri = build_tel_uri(action.number)
    return _invoke(DispatchResult("phone", details={"uri": uri}), "open_url", caps.open_url, uri, False)


def _dispatch_download(action: DownloadAction, caps: Capabilities) -> DispatchResult:
    # fileName is advisory for the receiving context
    result = DispatchResult("download", details={"uri": action.file_url, "file_name": action.file_name})
    return _invoke(result, "open_url", caps.open_url, action.file_url, True)


def _dispatch_copy(action: CopyToClipboardAction, caps: Capabilities) -> DispatchResult:
    result = DispatchResult("copy_to_clipboard")

    def _after_write(outcome: Any) -> None:
        if isinstance(outcome, BaseException) or outcome is False:
            logger.info("Clipboard write failed; toast suppressed")
            result.performed = False
            return
        if action.toast_message:
            try:
                _fire(caps.notify(action.toast_message))
            except Exception as e:
                logger.warning("%s", CapabilityError("notify", e))

    try:
        result.pending = _fire(caps.write_clipboard(action.text), on_done=_after_write)
    except Exception as e:
        logger.info("Clipboard write failed; toast suppressed: %s", e)
        result.performed = False
    return result


def _dispatch_custom(action: CustomAction, caps: Capabilities) -> DispatchResult:
    result = DispatchResult("custom", details={"handler_id": action.handler_id})
    return _invoke(result, "custom_handler", caps.run_custom, action.handler_id, action.payload)


def _dispatch_noop(action: NoopAction, caps: Capabilities) -> DispatchResult:
    return DispatchResult("noop", performed=False)


_DISPATCHERS: dict[str, Callable[[Any, Capabilities], DispatchResult]] = {
    "route": _dispatch_route,
    "external_url": _dispatch_external_url,
    "mailto": _dispatch_mailto,
    "phone": _dispatch_phone,
    "download": _dispatch_download,
    "copy_to_clipboard": _dispatch_copy,
    "custom": _dispatch_custom,
    "noop": _dispatch_noop,
}

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed client used for a single probe request."""

from __future__ import annotations

import logging
import socket
import threading
from contextlib import suppress
from typing import Any

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import CheckCancelled, ErrorCategory, RequestBuildError, TransportError, categorize_exception
from ..utils.context import CheckContext
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class _ConnectionTracker:
    """
    Collects the network streams opened for one request via the httpx ``trace`` extension.

    ``abort`` shuts the underlying sockets down, which wakes a thread blocked
    in connect-complete, send or recv with an EOF/OSError that httpx surfaces
    as a transport error.
    """

    def __init__(self, ctx: CheckContext):
        self._ctx = ctx
        self._lock = threading.Lock()
        self._streams: list[Any] = []

    def trace(self, event_name: str, info: dict[str, Any]) -> None:
        if not event_name.endswith(".complete"):
            return
        stream = info.get("return_value")
        if not hasattr(stream, "get_extra_info"):
            return
        with self._lock:
            self._streams.append(stream)
        # Cancelled while connecting: nothing was registered to shut down yet.
        if self._ctx.cancelled:
            self.abort()

    def abort(self) -> None:
        with self._lock:
            streams = list(self._streams)
        for stream in streams:
            sock = stream.get_extra_info("socket")
            if sock is None:
                continue
            # A socket replaced by its TLS wrapper is already detached.
            with suppress(OSError):
                sock.shutdown(socket.SHUT_RDWR)


class HttpxClient:
    """
    Synchronous httpx client wrapper.

    One instance serves one probe call; TLS verification is fixed at
    construction so the ``insecure`` flag never leaks across calls, and
    environment proxies/CA bundles are ignored.
    """

    def __init__(
        self,
        settings: HttpSettings | None = None,
        *,
        insecure: bool = False,
        transport: httpx.BaseTransport | None = None,
    ):
        self.settings = settings or load_http_settings()
        self.insecure = insecure
        self._client = httpx.Client(
            verify=not insecure,
            follow_redirects=self.settings.allow_redirects,
            max_redirects=self.settings.max_redirects,
            timeout=None,
            trust_env=False,
            transport=transport,
        )

    def build_request(self, request: HttpRequest) -> httpx.Request:
        """Translate an HttpRequest into an httpx.Request without sending it."""
        headers = list(request.headers)
        if not any(name.lower() == "user-agent" for name, _ in headers):
            headers.append(("User-Agent", self.settings.user_agent))
        try:
            return self._client.build_request(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
                timeout=request.timeout,
            )
        except (httpx.InvalidURL, ValueError, TypeError) as exc:
            raise RequestBuildError(f"encountered error while creating request: {exc}") from exc

    def request(self, request: HttpRequest, ctx: CheckContext, *, read_body: bool = True) -> HttpResponse:
        """
        Send ``request`` and return the response.

        The response stream is always closed before returning. The body is only
        drained when ``read_body`` is set. Cancelling ``ctx`` from another thread
        aborts the connection and raises CheckCancelled here.
        """
        outbound = self.build_request(request)
        ctx.raise_if_done()
        tracker = _ConnectionTracker(ctx)
        outbound.extensions["trace"] = tracker.trace
        unregister = ctx.on_cancel(tracker.abort)
        logger.debug("Sending %s %s", outbound.method, outbound.url)
        try:
            resp = self._client.send(outbound, stream=True)
            try:
                ctx.raise_if_done()
                content = bytearray()
                if read_body:
                    for chunk in resp.iter_bytes():
                        ctx.raise_if_done()
                        content.extend(chunk)
            finally:
                resp.close()
        except CheckCancelled:
            logger.debug("Request to %s abandoned: context done", outbound.url)
            raise
        except (httpx.HTTPError, httpx.StreamError, OSError) as exc:
            if ctx.cancelled:
                logger.debug("Request to %s aborted by cancellation: %s", outbound.url, exc)
                raise CheckCancelled(f"check cancelled while request was in flight: {exc}") from exc
            category = categorize_exception(exc)
            logger.debug("Request to %s failed (%s): %s", outbound.url, category.value, exc)
            if category is ErrorCategory.TIMEOUT and ctx.expired:
                raise CheckCancelled(f"check deadline exceeded: {exc}", ErrorCategory.TIMEOUT) from exc
            raise TransportError(f"encountered error while making request: {exc}", category) from exc
        finally:
            unregister()

        logger.debug("Received %s from %s", resp.status_code, resp.url)
        return HttpResponse(
            status_code=resp.status_code,
            content=bytes(content),
            body_read=read_body,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpxClient:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


__all__ = ["HttpxClient"]

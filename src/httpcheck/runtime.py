# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe execution: build the request, send it, match the response."""

from __future__ import annotations

import logging
import time

import httpx

from .config import HttpSettings, load_http_settings
from .errors import CheckError, InvalidVerbError
from .http.httpx_client import HttpxClient
from .http.models import HttpRequest
from .matching import evaluate, reads_body
from .models.config import ProbeConfig, Verb
from .models.result import CheckResult
from .schema import ConfigDocument
from .utils.context import CheckContext, get_check_context
from .validation import load_config, validate

logger = logging.getLogger(__name__)

_METHODS: dict[Verb, str] = {
    Verb.GET: "GET",
    Verb.POST: "POST",
    Verb.PUT: "PUT",
    Verb.DELETE: "DELETE",
    Verb.PATCH: "PATCH",
    Verb.HEAD: "HEAD",
    Verb.OPTIONS: "OPTIONS",
    Verb.CONNECT: "CONNECT",
    Verb.TRACE: "TRACE",
}


def method_for(verb: Verb) -> str:
    try:
        return _METHODS[verb]
    except KeyError:
        raise InvalidVerbError(str(getattr(verb, "value", verb))) from None


def build_http_request(config: ProbeConfig, ctx: CheckContext) -> HttpRequest:
    """
    Derive the outbound request from a probe configuration.

    A non-empty content type attaches the literal body and sends the content
    type label verbatim (``x-www-form-urlencoded`` is not rewritten to a MIME
    type). Configured headers follow in order and accumulate.
    """
    headers: list[tuple[str, str]] = []
    body: str | None = None
    if config.has_body:
        body = config.body
        headers.append(("Content-Type", config.content_type.value))
    headers.extend(config.headers)
    return HttpRequest(
        url=config.url,
        method=method_for(config.verb),
        headers=headers,
        body=body,
        timeout=ctx.remaining(),
    )


def run(
    ctx: CheckContext | None,
    document: ConfigDocument,
    *,
    settings: HttpSettings | None = None,
    transport: httpx.BaseTransport | None = None,
) -> None:
    """
    Execute one probe.

    Returns ``None`` on a successful match and raises a
    :class:`~httpcheck.errors.CheckError` subclass otherwise. ``ctx`` falls back
    to the ambient check context when omitted. ``transport`` replaces the
    network transport (tests use ``httpx.MockTransport``).
    """
    ctx = ctx or get_check_context()
    config = load_config(document)
    request = build_http_request(config, ctx)

    with HttpxClient(settings or load_http_settings(), insecure=config.insecure, transport=transport) as client:
        response = client.request(request, ctx, read_body=reads_body(config.match_type))

    evaluate(config, response)
    logger.debug("Check against %s passed (%s)", config.url, config.match_type.value)


def execute(
    document: ConfigDocument,
    ctx: CheckContext | None = None,
    *,
    settings: HttpSettings | None = None,
    transport: httpx.BaseTransport | None = None,
) -> CheckResult:
    """Run a probe and report the outcome as a CheckResult instead of raising."""
    started = time.monotonic()
    try:
        run(ctx, document, settings=settings, transport=transport)
    except CheckError as exc:
        elapsed = time.monotonic() - started
        logger.info("Check failed (%s): %s", exc.kind.value, exc.message)
        return CheckResult.from_error(exc, elapsed=elapsed)
    return CheckResult.success(elapsed=time.monotonic() - started)


class HttpCheck:
    """
    Entry points handed to the enclosing check framework.

    ``validate`` is called when a check is registered; ``run`` each time it
    executes. The object holds only transport settings, never per-call state.
    """

    name = "http"

    def __init__(self, settings: HttpSettings | None = None, transport: httpx.BaseTransport | None = None):
        self.settings = settings
        self.transport = transport

    def validate(self, document: ConfigDocument) -> None:
        validate(document)

    def run(self, ctx: CheckContext | None, document: ConfigDocument) -> None:
        run(ctx, document, settings=self.settings, transport=self.transport)

    def execute(self, document: ConfigDocument, ctx: CheckContext | None = None) -> CheckResult:
        return execute(document, ctx, settings=self.settings, transport=self.transport)


__all__ = ["HttpCheck", "build_http_request", "execute", "method_for", "run"]

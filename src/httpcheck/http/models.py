# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used by the probe executor."""

from __future__ import annotations

from dataclasses import dataclass, field

# Ordered (name, value) pairs; repeated names are kept, not merged.
HeaderList = list[tuple[str, str]]


@dataclass
class HttpRequest:
    """Normalized request handed to HttpxClient."""

    url: str
    method: str = "GET"
    headers: HeaderList = field(default_factory=list)
    body: bytes | str | None = None
    timeout: float | None = None


@dataclass
class HttpResponse:
    """Normalized HTTP response. ``content`` is only populated when the body was read."""

    status_code: int
    content: bytes = b""
    body_read: bool = False


__all__ = ["HeaderList", "HttpRequest", "HttpResponse"]

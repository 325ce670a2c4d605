# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .httpx_client import HttpxClient
from .models import HeaderList, HttpRequest, HttpResponse

__all__ = [
    "HeaderList",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Utility exports."""

from .context import CheckContext, check_context, get_check_context

__all__ = [
    "CheckContext",
    "check_context",
    "get_check_context",
]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Check outcome model handed back to the enclosing framework."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..errors import CheckError, ErrorKind, TransportError


@dataclass
class CheckResult:
    ok: bool
    kind: ErrorKind | None = None
    message: str = ""
    elapsed: float = 0.0
    category: str | None = None

    @classmethod
    def success(cls, *, elapsed: float = 0.0) -> CheckResult:
        return cls(ok=True, elapsed=elapsed)

    @classmethod
    def from_error(cls, exc: CheckError, *, elapsed: float = 0.0) -> CheckResult:
        category = exc.category.value if isinstance(exc, TransportError) else None
        return cls(ok=False, kind=exc.kind, message=exc.message, elapsed=elapsed, category=category)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "kind": self.kind.value if self.kind is not None else None,
            "message": self.message,
            "elapsed": round(self.elapsed, 6),
            "category": self.category,
        }

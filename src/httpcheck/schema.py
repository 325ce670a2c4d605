# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Configuration document decoding.

A probe document is a flat JSON object. Each recognised key is declared once in
``FIELDS`` with its expected JSON type and default; this module only decodes
and type-checks. Semantic checks (required fields, enum membership, header
syntax) live in :mod:`httpcheck.validation`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from .errors import ParseError

logger = logging.getLogger(__name__)

ConfigDocument = Union[str, bytes, bytearray, Mapping[str, Any]]


@dataclass(frozen=True)
class Field:
    key: str
    type: type
    default: Any


FIELDS: tuple[Field, ...] = (
    Field("url", str, ""),
    Field("verb", str, "GET"),
    Field("expected_output", str, ""),
    Field("match_type", str, "statusCode"),
    Field("insecure", bool, False),
    Field("headers", str, ""),
    Field("body", str, ""),
    Field("content_type", str, "empty"),
)

_KNOWN_KEYS = frozenset(field.key for field in FIELDS)


def _load(document: ConfigDocument) -> Mapping[str, Any]:
    if isinstance(document, Mapping):
        return document
    if isinstance(document, (bytes, bytearray)):
        try:
            document = bytes(document).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(f"configuration document is not valid UTF-8: {exc}") from exc
    if not isinstance(document, str):
        raise ParseError(f"configuration document must be a JSON string or mapping; got: {type(document).__name__}")
    try:
        decoded = json.loads(document)
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError, oversized integer literals, and nesting past the recursion limit.
        raise ParseError(f"configuration document is not valid JSON: {exc}") from exc
    if not isinstance(decoded, dict):
        raise ParseError(f"configuration document must be a JSON object; got: {type(decoded).__name__}")
    return decoded


def _coerce(field: Field, value: Any) -> Any:
    if value is None:
        return field.default
    # bool is an int subclass in Python; keep JSON types strict both ways.
    if field.type is bool:
        if isinstance(value, bool):
            return value
    elif isinstance(value, field.type) and not isinstance(value, bool):
        return value
    raise ParseError(
        f"field {field.key!r} must be of type {field.type.__name__}; got {type(value).__name__}: {value!r}"
    )


def parse_document(document: ConfigDocument) -> dict[str, Any]:
    """
    Decode a probe document into a dict holding every declared key.

    Missing keys and JSON ``null`` take the declared default. Unknown keys are
    ignored.
    """
    raw = _load(document)
    unknown = sorted(str(key) for key in raw if key not in _KNOWN_KEYS)
    if unknown:
        logger.debug("Ignoring unknown configuration keys: %s", ", ".join(unknown))
    return {field.key: _coerce(field, raw.get(field.key)) for field in FIELDS}


__all__ = ["ConfigDocument", "FIELDS", "Field", "parse_document"]

"""Identifier fields — Resolve the unique key and build multi-field ID queries.

A deployment may store a record's identifier in more than one Solr field
(e.g. ``id`` for local records and ``marc_001`` for imported ones).  The
fields are configured as a single comma-separated string::

    id_fields = "id, marc_001, isbn"

From that string this module derives:
  1. The ordered field list
  2. The unique key used for deduplication and display
  3. The query that matches one identifier value in any of the fields
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

DEFAULT_UNIQUE_KEY = "id"
"""Field used when no identifier fields are configured."""

CLAUSE_SEPARATOR = " || "

_FIELD_SPLIT_RE = re.compile(r"\s*,\s*")


def parse_field_list(raw: Any) -> list[str]:
    """Split a comma-separated field configuration into an ordered list.

    Whitespace around each name is trimmed and empty names are dropped.
    Order and duplicates are preserved.  Anything that is not a string
    (or an already split list) degrades to an empty list.

    Args:
        raw: The configured value, e.g. ``"id, marc_001"``.

    Returns:
        The field names in configured order.
    """
    if raw is None:
        return []
    if isinstance(raw, list | tuple):
        pieces = [str(item) for item in raw if item is not None]
    elif isinstance(raw, str):
        pieces = _FIELD_SPLIT_RE.split(raw)
    else:
        return []
    return [name for name in (piece.strip() for piece in pieces) if name]


def resolve_unique_key(raw: Any) -> str:
    """Determine the canonical identifier field.

    ``"id"`` wins whenever it is configured, wherever it appears in the
    list.  Otherwise the first configured field is used, and ``"id"`` is
    the fallback when nothing is configured.
    """
    fields = parse_field_list(raw)
    if not fields or DEFAULT_UNIQUE_KEY in fields:
        return DEFAULT_UNIQUE_KEY
    return fields[0]


def escape_phrase(value: str) -> str:
    """Backslash-escape double quotes so *value* stays a valid quoted phrase."""
    return value.replace('"', '\\"')


def build_identifier_query(fields: list[str], value: str) -> str:
    """Build a query matching *value* in any of the identifier fields.

    Example:
        >>> build_identifier_query(["id", "isbn"], "123")
        'id:"123" || isbn:"123"'

    The result is a flat OR expression; wrap it in parentheses before
    combining it with other clauses.
    """
    if not fields:
        fields = [DEFAULT_UNIQUE_KEY]
    phrase = escape_phrase(value)
    return CLAUSE_SEPARATOR.join(f'{field}:"{phrase}"' for field in fields)


class IdentifierConfig(BaseModel):
    """Resolved identifier configuration, frozen for the lifetime of a connector.

    ``unique_key`` is always derived from ``fields``, so a config built
    directly follows the same precedence rules as ``from_raw()``.
    """

    model_config = ConfigDict(frozen=True)

    raw: str | None = Field(default=None, description="Configured comma-separated field list")
    fields: tuple[str, ...] = Field(
        default=(DEFAULT_UNIQUE_KEY,),
        min_length=1,
        description="Identifier fields in query order",
    )

    @field_validator("fields", mode="before")
    @classmethod
    def _normalize_fields(cls, v: Any) -> Any:
        """Trim names and drop empty ones; an empty result fails ``min_length``."""
        if isinstance(v, str | list | tuple):
            return tuple(parse_field_list(v))
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def unique_key(self) -> str:
        """Canonical identifier field."""
        return resolve_unique_key(list(self.fields))

    @classmethod
    def from_raw(cls, raw: Any = None) -> IdentifierConfig:
        """Resolve a configured field string (or list) into an ``IdentifierConfig``."""
        fields = parse_field_list(raw)
        if isinstance(raw, str):
            configured = raw
        elif fields:
            configured = ", ".join(fields)
        else:
            configured = None
        return cls(raw=configured, fields=tuple(fields or [DEFAULT_UNIQUE_KEY]))

    def query_for(self, value: str) -> str:
        """Build the identifier query for *value* over the configured fields."""
        return build_identifier_query(list(self.fields), value)

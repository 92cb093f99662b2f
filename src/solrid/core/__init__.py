"""Identifier resolution and identifier query construction."""

from solrid.core.identifiers import (
    DEFAULT_UNIQUE_KEY,
    IdentifierConfig,
    build_identifier_query,
    parse_field_list,
    resolve_unique_key,
)

__all__ = [
    "DEFAULT_UNIQUE_KEY",
    "IdentifierConfig",
    "build_identifier_query",
    "parse_field_list",
    "resolve_unique_key",
]

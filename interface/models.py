"""
Typed view over SourceKit declaration dictionaries.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

from interface.access import AccessLevel
from interface.config import (
    CONTAINER_KINDS,
    KEY_ACCESSIBILITY,
    KEY_DOC_COMMENT,
    KEY_KIND,
    KEY_NAME,
    KEY_PARSED_DECLARATION,
    KEY_SUBSTRUCTURE,
    KIND_ENUM_CASE,
)


def _optional_str(payload: Mapping[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class DeclarationRecord:
    """One node of a Swift module's declaration tree.

    Attributes:
        kind: SourceKit declaration kind, or None for synthetic file/root nodes
        name: Declared name (e.g. ``Foo`` or ``bar(_:)``)
        accessibility: Raw SourceKit accessibility key, kept for diagnostics
        documentation: Documentation comment text without ``///`` markers
        signature: Parsed declaration header (e.g. ``public struct Foo``)
        children: Nested declarations in source order
    """

    kind: Optional[str] = None
    name: Optional[str] = None
    accessibility: Optional[str] = None
    documentation: Optional[str] = None
    signature: Optional[str] = None
    children: Tuple["DeclarationRecord", ...] = field(default_factory=tuple)

    @property
    def access_level(self) -> AccessLevel:
        return AccessLevel.parse(self.accessibility)

    @property
    def is_container_kind(self) -> bool:
        """Whether members of this declaration render as a nested body."""
        return self.kind in CONTAINER_KINDS

    @property
    def is_enum_case_group(self) -> bool:
        """Whether this is a ``case a, b`` list whose children are the elements."""
        return self.kind == KIND_ENUM_CASE

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "DeclarationRecord":
        """Project a raw SourceKit dictionary into a record tree.

        Values of an unexpected type are treated as absent, and non-mapping
        entries of ``key.substructure`` are skipped.

        Example:
            >>> record = DeclarationRecord.from_dict({
            ...     "key.kind": "source.lang.swift.decl.struct",
            ...     "key.parsed_declaration": "public struct Foo",
            ... })
            >>> record.is_container_kind
            True
        """
        raw_children = payload.get(KEY_SUBSTRUCTURE)
        children: Tuple[DeclarationRecord, ...] = ()
        if isinstance(raw_children, list):
            children = tuple(
                cls.from_dict(child) for child in raw_children if isinstance(child, Mapping)
            )

        return cls(
            kind=_optional_str(payload, KEY_KIND),
            name=_optional_str(payload, KEY_NAME),
            accessibility=_optional_str(payload, KEY_ACCESSIBILITY),
            documentation=_optional_str(payload, KEY_DOC_COMMENT),
            signature=_optional_str(payload, KEY_PARSED_DECLARATION),
            children=children,
        )


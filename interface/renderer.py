"""
Declaration tree filtering and rendering.

This module walks a forest of declaration records, drops everything below the
minimum access level, flattens enum case groups and emits nested Swift source
blocks for container declarations (structs, classes, enums, protocols and
extensions).
"""

import logging
import textwrap
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

from interface.access import AccessLevel
from interface.config import (
    BRACKET_PAIRS,
    DOC_COMMENT_MARKER,
    NESTED_INDENT,
)
from interface.models import DeclarationRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderOptions:
    """Explicit rendering configuration.

    Attributes:
        minimum_access_level: Declarations strictly below this level are dropped
            together with their whole subtree.
        skip_unbalanced: Also drop declarations whose signature has unbalanced
            ``()[]{}`` brackets (SourceKitten occasionally truncates them).
        indent: Prefix added to every line of a container body.
    """

    minimum_access_level: AccessLevel
    skip_unbalanced: bool = False
    indent: str = NESTED_INDENT


class RenderStats:
    """Counters for a single render pass."""

    def __init__(self):
        self.rendered = 0
        self.dropped_access = 0
        self.dropped_signature = 0
        self.dropped_unbalanced = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "rendered": self.rendered,
            "dropped_access": self.dropped_access,
            "dropped_signature": self.dropped_signature,
            "dropped_unbalanced": self.dropped_unbalanced,
        }

    def __str__(self) -> str:
        return (
            f"RenderStats(rendered={self.rendered}, "
            f"dropped_access={self.dropped_access}, "
            f"dropped_signature={self.dropped_signature}, "
            f"dropped_unbalanced={self.dropped_unbalanced})"
        )


def is_balanced(text: str) -> bool:
    """Check that every bracket in ``text`` is closed in the right order.

    Example:
        >>> is_balanced("func f(_ x: [Int]) -> Int")
        True
        >>> is_balanced("func f(_ x: [Int")
        False
    """
    stack: List[str] = []
    openers = set(BRACKET_PAIRS.values())
    for char in text:
        if char in openers:
            stack.append(char)
        elif char in BRACKET_PAIRS:
            if not stack or stack[-1] != BRACKET_PAIRS[char]:
                return False
            stack.pop()
    return not stack


def format_documentation(documentation: str) -> str:
    """Prefix each non-empty documentation line with ``///``, one per line."""
    lines = [line for line in documentation.split("\n") if line]
    return "".join(f"{DOC_COMMENT_MARKER}{line}\n" for line in lines)


class TreeRenderer:
    """Renders declaration forests into Swift interface text blocks.

    The renderer holds no state between calls apart from ``stats``, which is
    reset at the start of every ``render`` call and never influences output.
    """

    def __init__(self, options: RenderOptions):
        self.options = options
        self.stats = RenderStats()

    def render(self, forest: Iterable[DeclarationRecord]) -> List[str]:
        """Render each surviving top-level record into one text block.

        Args:
            forest: Top-level records in source order.

        Returns:
            One block per surviving record, in source order.
        """
        self.stats = RenderStats()
        blocks = self._render_all(forest)
        logger.debug("Rendered %d top-level blocks: %s", len(blocks), self.stats)
        return blocks

    def render_record(self, record: DeclarationRecord) -> Optional[str]:
        """Render a single record, or return None when it is dropped."""
        if record.kind is None:
            return "\n".join(self._render_all(record.children))

        if record.is_enum_case_group:
            return "\n".join(
                f"case {child.name}" for child in record.children if child.name
            )

        if record.access_level < self.options.minimum_access_level:
            self.stats.dropped_access += 1
            return None

        signature = record.signature
        if signature is None:
            self.stats.dropped_signature += 1
            logger.debug(
                "Dropping %s %r: no parsed declaration", record.kind, record.name
            )
            return None

        if self.options.skip_unbalanced and not is_balanced(signature):
            self.stats.dropped_unbalanced += 1
            logger.debug("Dropping unbalanced declaration: %s", signature)
            return None

        text = ""
        if record.documentation is not None:
            text += format_documentation(record.documentation)

        if record.children and record.is_container_kind:
            body = "\n".join(self._render_all(record.children))
            text += signature + " {\n\n"
            text += textwrap.indent(body, self.options.indent)
            text += "\n}\n"
        else:
            text += signature + "\n"

        self.stats.rendered += 1
        return text

    def _render_all(self, records: Iterable[DeclarationRecord]) -> List[str]:
        blocks = []
        for record in records:
            block = self.render_record(record)
            if block is not None:
                blocks.append(block)
        return blocks


def render(
    forest: Iterable[DeclarationRecord],
    minimum_access_level: Union[AccessLevel, RenderOptions],
) -> List[str]:
    """Render ``forest`` with a fresh renderer.

    Example:
        >>> record = DeclarationRecord(
        ...     kind="source.lang.swift.decl.function.free",
        ...     accessibility="source.lang.swift.accessibility.public",
        ...     signature="public func hello()",
        ... )
        >>> render([record], AccessLevel.PUBLIC)
        ['public func hello()\\n']
    """
    if isinstance(minimum_access_level, RenderOptions):
        options = minimum_access_level
    else:
        options = RenderOptions(minimum_access_level=minimum_access_level)
    return TreeRenderer(options).render(forest)

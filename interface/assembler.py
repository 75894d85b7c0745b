"""
Interface assembly: import header plus rendered blocks, then formatting.
"""

import logging
from typing import Callable, Sequence

logger = logging.getLogger(__name__)

Formatter = Callable[[str], str]


def assemble(blocks: Sequence[str], module_name: str) -> str:
    """Join rendered blocks under an ``import <module>`` header.

    An empty module name is accepted and produces the header ``"import \\n\\n"``;
    project-wide runs have no module name to import.

    Example:
        >>> assemble([], "Foo")
        'import Foo\\n\\n'
    """
    if not module_name:
        logger.warning("Assembling interface without a module name")
    return f"import {module_name}\n\n" + "\n".join(blocks)


def assemble_interface(
    blocks: Sequence[str],
    module_name: str,
    formatter: Formatter,
) -> str:
    """Assemble the interface text and pass it through ``formatter``.

    Raises:
        FormatError: Propagated unchanged from the formatter.
    """
    text = assemble(blocks, module_name)
    logger.info("Formatting %d blocks (%d characters)", len(blocks), len(text))
    return formatter(text)

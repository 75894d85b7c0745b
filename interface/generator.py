"""
High-level orchestrator for module interface generation.

This module provides the entry points behind the ``generate`` and ``clean``
commands: produce a declaration forest, render it, assemble and format the
interface, and persist it under the output folder.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from core.errors import OutputError, ProducerError
from core.structured_logging import phase_scope
from interface.access import AccessLevel
from interface.assembler import Formatter, assemble_interface
from interface.config import (
    DEFAULT_OUTPUT_FOLDER,
    INTERFACE_EXTENSION,
    UNKNOWN_MODULE_FILENAME,
)
from interface.formatter import SwiftFormatter
from interface.models import DeclarationRecord
from interface.producer import SourceKittenProducer, load_forest
from interface.renderer import RenderOptions, TreeRenderer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerateOptions:
    """Inputs of a single ``generate`` run.

    Attributes:
        output_folder: Directory receiving ``<module>.swift``
        minimum_access_level: Lowest access level kept in the interface
        clean: Remove a previously generated interface before generating
        spm_module: Swift Package Manager module to document
        module_name: Xcode module to document (ignored when spm_module is set)
        input_folder: Directory sourcekitten runs xcodebuild in
        input_json: Pre-generated ``sourcekitten doc`` output to read instead
            of running sourcekitten
        compiler_arguments: Arguments passed through to xcodebuild
        skip_unbalanced: Drop declarations with unbalanced brackets
    """

    output_folder: str = DEFAULT_OUTPUT_FOLDER
    minimum_access_level: AccessLevel = AccessLevel.PUBLIC
    clean: bool = False
    spm_module: Optional[str] = None
    module_name: Optional[str] = None
    input_folder: str = field(default_factory=os.getcwd)
    input_json: Optional[str] = None
    compiler_arguments: Tuple[str, ...] = ()
    skip_unbalanced: bool = False

    @property
    def target_module(self) -> str:
        """Module named in the import header; empty for whole-project runs."""
        return self.spm_module or self.module_name or ""


@dataclass
class GenerationResult:
    """Outcome of a successful ``generate`` run."""

    output_path: str
    module_name: str
    block_count: int
    render_stats: Dict[str, int]


def interface_path(output_folder: str, module_name: str) -> str:
    """Path of the interface file for ``module_name`` inside ``output_folder``.

    Example:
        >>> interface_path("Documentation", "Yams")
        'Documentation/Yams.swift'
        >>> interface_path("Documentation", "")
        'Documentation/Unknown.swift'
    """
    file_name = module_name or UNKNOWN_MODULE_FILENAME
    if not file_name.endswith(INTERFACE_EXTENSION):
        file_name += INTERFACE_EXTENSION
    return os.path.join(output_folder, file_name)


def create_directory(path: str) -> None:
    """Create ``path`` (and parents) unless it already exists or is empty."""
    if not path:
        return
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as exc:
        raise OutputError(f"Cannot create output folder {path}: {exc}") from exc


def remove_module_interface(output_folder: str, module_name: str) -> bool:
    """Delete a previously generated interface.

    Returns:
        True if a file was removed, False if there was nothing to delete.

    Raises:
        OutputError: If the file exists but cannot be deleted.
    """
    path = interface_path(output_folder, module_name)
    if not os.path.isfile(path):
        logger.info(
            "Did not find %s at %s to delete.",
            module_name or UNKNOWN_MODULE_FILENAME,
            output_folder or ".",
        )
        return False

    logger.info("Removing module interface at %s", path)
    try:
        os.remove(path)
    except OSError as exc:
        raise OutputError(f"Cannot remove {path}: {exc}") from exc
    return True


def write_interface(output_folder: str, module_name: str, contents: str) -> str:
    """Write the interface text and return the file path."""
    create_directory(output_folder)
    path = interface_path(output_folder, module_name)
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(contents)
    except OSError as exc:
        raise OutputError(f"Cannot write {path}: {exc}") from exc
    logger.info("Wrote module interface to %s", path)
    return path


def produce_forest(
    options: GenerateOptions,
    producer: SourceKittenProducer,
) -> List[DeclarationRecord]:
    """Obtain the declaration forest selected by ``options``."""
    if options.input_json:
        forest = load_forest(options.input_json)
    elif options.spm_module:
        forest = producer.document_spm_module(options.spm_module)
    elif options.module_name:
        forest = producer.document_module(
            options.module_name,
            options.compiler_arguments,
            options.input_folder,
        )
    else:
        forest = producer.document_project(
            options.compiler_arguments,
            options.input_folder,
        )

    if not forest:
        raise ProducerError(
            f"Unable to parse module named {options.target_module or UNKNOWN_MODULE_FILENAME}"
        )
    return forest


def generate_interface(
    options: GenerateOptions,
    producer: Optional[SourceKittenProducer] = None,
    formatter: Optional[Formatter] = None,
) -> GenerationResult:
    """Generate and persist the interface for the module chosen by ``options``.

    Args:
        options: Run inputs.
        producer: SourceKitten adapter; a default one is created when omitted.
        formatter: Text formatter; defaults to ``swiftformat``.

    Returns:
        A GenerationResult describing the written file.

    Raises:
        ProducerError: If no declaration tree could be produced.
        FormatError: If formatting fails; nothing is written in that case.
        OutputError: If the output folder or file cannot be written.
    """
    producer = producer or SourceKittenProducer()
    formatter = formatter or SwiftFormatter()
    module = options.target_module

    if options.clean:
        with phase_scope("clean"):
            remove_module_interface(options.output_folder, module)

    with phase_scope("produce"):
        forest = produce_forest(options, producer)

    with phase_scope("render"):
        renderer = TreeRenderer(
            RenderOptions(
                minimum_access_level=options.minimum_access_level,
                skip_unbalanced=options.skip_unbalanced,
            )
        )
        blocks = renderer.render(forest)
        logger.info(
            "Rendered %d blocks at minimum access level %s: %s",
            len(blocks),
            options.minimum_access_level.label,
            renderer.stats,
        )

    with phase_scope("format"):
        contents = assemble_interface(blocks, module, formatter)

    with phase_scope("write"):
        path = write_interface(options.output_folder, module, contents)

    return GenerationResult(
        output_path=path,
        module_name=module,
        block_count=len(blocks),
        render_stats=renderer.stats.to_dict(),
    )

"""
Swift Module Interface Generator

SourceKitten-based extraction of a Swift module's declaration tree, filtered
by access level and re-rendered as a readable interface file.
"""

from interface.access import AccessLevel, compare
from interface.models import DeclarationRecord
from interface.renderer import RenderOptions, RenderStats, TreeRenderer, render
from interface.assembler import assemble, assemble_interface
from interface.producer import SourceKittenProducer, load_forest, parse_docs_payload
from interface.formatter import SwiftFormatter, identity_formatter
from interface.generator import (
    GenerateOptions,
    GenerationResult,
    generate_interface,
    interface_path,
    remove_module_interface,
)

__all__ = [
    # Data models
    "AccessLevel",
    "compare",
    "DeclarationRecord",
    # Rendering
    "RenderOptions",
    "RenderStats",
    "TreeRenderer",
    "render",
    "assemble",
    "assemble_interface",
    # External tools
    "SourceKittenProducer",
    "load_forest",
    "parse_docs_payload",
    "SwiftFormatter",
    "identity_formatter",
    # High-level orchestration
    "GenerateOptions",
    "GenerationResult",
    "generate_interface",
    "interface_path",
    "remove_module_interface",
]

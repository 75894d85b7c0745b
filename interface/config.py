"""
Configuration constants for Swift module interface generation.

Defines the SourceKit dictionary keys and declaration kind strings used when
projecting SourceKitten output into declaration records, plus tool defaults.
Environment variables are loaded from a .env file at module import time via
python-dotenv.
"""

import os
from typing import Dict, Set

from dotenv import load_dotenv

from core.settings import ToolSettings, env_flag, env_int

# ---------------------------------------------------------------------------
# Load .env file (idempotent; does nothing if already loaded or missing)
# ---------------------------------------------------------------------------
load_dotenv()

# ---------------------------------------------------------------------------
# Tool identity
# ---------------------------------------------------------------------------
TOOL_NAME: str = "ModuleInterface"
TOOL_VERSION: str = "0.0.3"

# ---------------------------------------------------------------------------
# SourceKit dictionary keys
# ---------------------------------------------------------------------------
KEY_KIND: str = "key.kind"
KEY_NAME: str = "key.name"
KEY_ACCESSIBILITY: str = "key.accessibility"
KEY_DOC_COMMENT: str = "key.doc.comment"
KEY_PARSED_DECLARATION: str = "key.parsed_declaration"
KEY_SUBSTRUCTURE: str = "key.substructure"

# ---------------------------------------------------------------------------
# Access levels (SourceKit accessibility UIDs)
# ---------------------------------------------------------------------------
ACCESSIBILITY_PREFIX: str = "source.lang.swift.accessibility."

# ---------------------------------------------------------------------------
# Declaration kinds
# ---------------------------------------------------------------------------
KIND_STRUCT: str = "source.lang.swift.decl.struct"
KIND_CLASS: str = "source.lang.swift.decl.class"
KIND_ENUM: str = "source.lang.swift.decl.enum"
KIND_PROTOCOL: str = "source.lang.swift.decl.protocol"
KIND_EXTENSION: str = "source.lang.swift.decl.extension"
KIND_EXTENSION_CLASS: str = "source.lang.swift.decl.extension.class"
KIND_EXTENSION_ENUM: str = "source.lang.swift.decl.extension.enum"
KIND_EXTENSION_PROTOCOL: str = "source.lang.swift.decl.extension.protocol"
KIND_EXTENSION_STRUCT: str = "source.lang.swift.decl.extension.struct"
KIND_ENUM_CASE: str = "source.lang.swift.decl.enumcase"

# Kinds whose members are rendered as a nested, brace-delimited body
CONTAINER_KINDS: Set[str] = {
    KIND_STRUCT,
    KIND_CLASS,
    KIND_ENUM,
    KIND_PROTOCOL,
    KIND_EXTENSION,
    KIND_EXTENSION_CLASS,
    KIND_EXTENSION_ENUM,
    KIND_EXTENSION_PROTOCOL,
    KIND_EXTENSION_STRUCT,
}

# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------
DOC_COMMENT_MARKER: str = "/// "
NESTED_INDENT: str = " "
BRACKET_PAIRS: Dict[str, str] = {")": "(", "]": "[", "}": "{"}

# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------
INTERFACE_EXTENSION: str = ".swift"
UNKNOWN_MODULE_FILENAME: str = "Unknown"
DEFAULT_OUTPUT_FOLDER: str = "Documentation"
DEFAULT_MIN_ACL: str = "public"

# ---------------------------------------------------------------------------
# External tools (override in .env)
# ---------------------------------------------------------------------------
DEFAULT_SETTINGS = ToolSettings(
    output_folder=DEFAULT_OUTPUT_FOLDER,
    min_acl=DEFAULT_MIN_ACL,
    skip_unbalanced=env_flag("MODULEINTERFACE_SKIP_UNBALANCED", default=False),
    sourcekitten_path=os.getenv("SOURCEKITTEN_PATH", "sourcekitten"),
    swiftformat_path=os.getenv("SWIFTFORMAT_PATH", "swiftformat"),
    swiftformat_args=(),
    timeout_s=env_int("MODULEINTERFACE_TIMEOUT", 600),
)

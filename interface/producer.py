"""
SourceKitten integration: produce declaration forests for Swift modules.

SourceKitten's ``doc`` command emits a JSON array with one object per source
file, each keyed by the file path and holding that file's SourceKit
structure. Every file becomes one synthetic (kind-less) record whose
children are the file's top-level declarations.
"""

import json
import logging
import os
import subprocess
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence

from core.errors import ProducerError
from interface.config import KEY_KIND, KEY_SUBSTRUCTURE
from interface.models import DeclarationRecord

logger = logging.getLogger(__name__)


def _is_structure(payload: Mapping[str, Any]) -> bool:
    return KEY_SUBSTRUCTURE in payload or KEY_KIND in payload


def _records_from_file_map(file_map: Mapping[str, Any]) -> List[DeclarationRecord]:
    records = []
    for file_path, structure in file_map.items():
        if not isinstance(structure, Mapping):
            logger.warning("Skipping %s: structure is not an object", file_path)
            continue
        logger.debug("Loaded structure for %s", file_path)
        records.append(DeclarationRecord.from_dict(structure))
    return records


def parse_docs_payload(payload: Any) -> List[DeclarationRecord]:
    """Convert decoded SourceKitten JSON into a forest of records.

    Accepts the ``sourcekitten doc`` array, a single ``{path: structure}``
    object, or a bare structure as printed by ``sourcekitten structure``.

    Raises:
        ProducerError: If the payload has none of these shapes.
    """
    if isinstance(payload, Mapping):
        if _is_structure(payload):
            return [DeclarationRecord.from_dict(payload)]
        return _records_from_file_map(payload)

    if isinstance(payload, list):
        records: List[DeclarationRecord] = []
        for item in payload:
            if not isinstance(item, Mapping):
                logger.warning("Skipping non-object entry of type %s", type(item).__name__)
                continue
            if _is_structure(item):
                records.append(DeclarationRecord.from_dict(item))
            else:
                records.extend(_records_from_file_map(item))
        return records

    raise ProducerError(
        f"Unexpected SourceKitten payload type: {type(payload).__name__}"
    )


def load_forest(json_path: str) -> List[DeclarationRecord]:
    """Load a forest from a JSON file written by ``sourcekitten doc``.

    Raises:
        ProducerError: If the file is missing or is not valid JSON.
    """
    path = Path(json_path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ProducerError(f"SourceKitten JSON not found: {path}") from exc
    except OSError as exc:
        raise ProducerError(f"Error reading SourceKitten JSON {path}: {exc}") from exc

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProducerError(f"Invalid SourceKitten JSON in {path}: {exc}") from exc

    forest = parse_docs_payload(payload)
    logger.info("Loaded %d file structures from %s", len(forest), path)
    return forest


class SourceKittenProducer:
    """Runs ``sourcekitten doc`` and parses its output."""

    def __init__(self, executable: str = "sourcekitten", timeout_s: int = 600):
        self.executable = executable
        self.timeout_s = timeout_s

    def document_spm_module(self, module_name: str) -> List[DeclarationRecord]:
        """Document a Swift Package Manager module of the current package."""
        return self._run(
            ["doc", "--spm", "--module-name", module_name],
            description=f"SPM module '{module_name}'",
        )

    def document_module(
        self,
        module_name: str,
        arguments: Sequence[str],
        path: str,
    ) -> List[DeclarationRecord]:
        """Document a named Xcode module, building it with ``arguments``."""
        return self._run(
            ["doc", "--module-name", module_name, "--", *arguments],
            description=f"module '{module_name}'",
            cwd=path,
        )

    def document_project(
        self,
        arguments: Sequence[str],
        path: str,
    ) -> List[DeclarationRecord]:
        """Document the Xcode project found in ``path``."""
        return self._run(["doc", "--", *arguments], description="project", cwd=path)

    def _run(
        self,
        args: List[str],
        description: str,
        cwd: Optional[str] = None,
    ) -> List[DeclarationRecord]:
        cmd = [self.executable, *args]
        if cwd is not None and not os.path.isdir(cwd):
            raise ProducerError(f"Input folder not found: {cwd}")

        logger.info("Running SourceKitten for %s: %s", description, " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                check=True,
                text=True,
                capture_output=True,
                timeout=self.timeout_s,
                stdin=subprocess.DEVNULL,
            )
        except FileNotFoundError as exc:
            raise ProducerError(
                f"sourcekitten executable not found: {self.executable}"
            ) from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or "no error output"
            raise ProducerError(
                f"Failed to generate documentation for {description} "
                f"(exit={exc.returncode}): {detail}"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise ProducerError(
                f"sourcekitten timed out after {self.timeout_s}s for {description}"
            ) from exc

        try:
            payload = json.loads(result.stdout)
        except json.JSONDecodeError as exc:
            raise ProducerError(
                f"SourceKitten returned invalid JSON for {description}: {exc}"
            ) from exc

        forest = parse_docs_payload(payload)
        if not forest:
            raise ProducerError(f"Unable to parse {description}: no declarations")
        logger.info("SourceKitten documented %d files for %s", len(forest), description)
        return forest

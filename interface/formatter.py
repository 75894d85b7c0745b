"""
SwiftFormat integration.

The assembled interface is piped through ``swiftformat stdin`` so that the
emitted declarations are re-indented and wrapped like hand-written Swift.
"""

import logging
import subprocess
from typing import List, Sequence

from core.errors import FormatError

logger = logging.getLogger(__name__)


class SwiftFormatter:
    """Callable wrapper around the ``swiftformat`` executable."""

    def __init__(
        self,
        executable: str = "swiftformat",
        arguments: Sequence[str] = (),
        timeout_s: int = 600,
    ):
        self.executable = executable
        self.arguments = tuple(arguments)
        self.timeout_s = timeout_s

    def command(self) -> List[str]:
        """Build the argument vector that reads source from stdin."""
        return [self.executable, "stdin", "--quiet", *self.arguments]

    def __call__(self, text: str) -> str:
        """Format Swift source text.

        Raises:
            FormatError: If swiftformat is missing, times out or rejects the text.
        """
        cmd = self.command()
        logger.debug("Running formatter: %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                input=text,
                check=True,
                text=True,
                capture_output=True,
                timeout=self.timeout_s,
            )
        except FileNotFoundError as exc:
            raise FormatError(
                f"swiftformat executable not found: {self.executable}"
            ) from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or "no error output"
            raise FormatError(
                f"swiftformat failed (exit={exc.returncode}): {detail}"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise FormatError(
                f"swiftformat timed out after {self.timeout_s}s"
            ) from exc
        return result.stdout


def identity_formatter(text: str) -> str:
    """Formatter used with ``--no-format``: returns the text unchanged."""
    return text

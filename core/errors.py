"""Error taxonomy shared by the interface generator and its CLI."""

from __future__ import annotations


class ModuleInterfaceError(RuntimeError):
    """Base class for every fatal error reported to the user."""


class ProducerError(ModuleInterfaceError):
    """Raised when no declaration tree could be produced for a module."""


class FormatError(ModuleInterfaceError):
    """Raised when the source formatter rejects the assembled interface."""


class OutputError(ModuleInterfaceError):
    """Raised when the interface file or its folder cannot be written or removed."""


class ConfigValidationError(ModuleInterfaceError):
    """Raised when a settings file or setting value is invalid."""

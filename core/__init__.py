"""Core shared contracts and utilities."""

from core.errors import (
    ConfigValidationError,
    FormatError,
    ModuleInterfaceError,
    OutputError,
    ProducerError,
)
from core.structured_logging import (
    configure_structured_logging,
    get_run_id,
    module_scope,
    phase_scope,
    set_run_id,
)
from core.settings import (
    ToolSettings,
    env_flag,
    env_int,
    load_settings,
)

__all__ = [
    "ConfigValidationError",
    "FormatError",
    "ModuleInterfaceError",
    "OutputError",
    "ProducerError",
    "configure_structured_logging",
    "get_run_id",
    "module_scope",
    "phase_scope",
    "set_run_id",
    "ToolSettings",
    "env_flag",
    "env_int",
    "load_settings",
]

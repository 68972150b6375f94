"""Configuration management for the multigrid solver."""

from .settings import (
    MultigridConfig, ProblemConfig, SolverConfig, LoggingConfig,
    create_default_config, create_debug_config
)

__all__ = [
    "MultigridConfig",
    "ProblemConfig",
    "SolverConfig",
    "LoggingConfig",
    "create_default_config",
    "create_debug_config",
]

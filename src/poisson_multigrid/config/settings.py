"""Configuration classes for multigrid solver settings."""

import json
import yaml
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional, Union
from pathlib import Path
import logging

from ..utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)


@dataclass
class ProblemConfig:
    """Configuration for the manufactured Poisson problem."""
    level: int = 6
    modes: float = 1.0
    spacing: Optional[float] = None  # None: unit square, h = 1 / 2^level
    dtype: str = "float64"

    def validate(self) -> None:
        """Validate problem configuration."""
        if self.level < 1:
            raise ValueError(f"Grid level must be >= 1, got {self.level}")

        if self.modes <= 0:
            raise ValueError("Mode count must be positive")

        if self.spacing is not None and self.spacing <= 0:
            raise ValueError("Grid spacing must be positive")

        if self.dtype not in ["float32", "float64"]:
            raise ValueError(f"Unsupported dtype: {self.dtype}")


@dataclass
class SolverConfig:
    """Configuration for the multigrid solver."""
    smoother: str = "gauss_seidel"
    max_cycles: int = 20
    tolerance: float = 1e-10
    restriction_method: str = "full_weighting"
    prolongation_method: str = "bilinear"
    debug_checks: bool = False

    def validate(self) -> None:
        """Validate solver configuration."""
        valid_smoothers = ["gauss_seidel", "red_black"]
        if self.smoother not in valid_smoothers:
            raise ValueError(f"Invalid smoother type: {self.smoother}")

        if self.max_cycles <= 0:
            raise ValueError("Max cycles must be positive")

        if self.tolerance <= 0:
            raise ValueError("Tolerance must be positive")

        valid_restrictions = ["full_weighting", "injection"]
        if self.restriction_method not in valid_restrictions:
            raise ValueError(f"Invalid restriction method: {self.restriction_method}")

        if self.prolongation_method != "bilinear":
            raise ValueError(f"Invalid prolongation method: {self.prolongation_method}")


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_output: Optional[str] = None
    console_output: bool = True

    def validate(self) -> None:
        """Validate logging configuration."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if not isinstance(self.level, str) or self.level.upper() not in valid_levels:
            raise ValueError(f"Invalid logging level: {self.level}")


@dataclass
class MultigridConfig:
    """Complete configuration for a multigrid run."""
    problem: ProblemConfig = None
    solver: SolverConfig = None
    logging: LoggingConfig = None

    def __post_init__(self):
        """Initialize default configurations if not provided."""
        if self.problem is None:
            self.problem = ProblemConfig()
        if self.solver is None:
            self.solver = SolverConfig()
        if self.logging is None:
            self.logging = LoggingConfig()

    def validate(self) -> None:
        """Validate all configuration sections."""
        self.problem.validate()
        self.solver.validate()
        self.logging.validate()

        if self.problem.dtype == "float32" and self.solver.tolerance < 1e-6:
            logger.warning(f"Tolerance {self.solver.tolerance:.1e} is below what "
                           f"float32 arithmetic can usually reach")

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'MultigridConfig':
        """Create configuration from dictionary."""
        unknown = set(config_dict) - {'problem', 'solver', 'logging'}
        if unknown:
            raise ValueError(f"Unknown configuration sections: {sorted(unknown)}")

        config = cls()

        if 'problem' in config_dict:
            config.problem = ProblemConfig(**config_dict['problem'])

        if 'solver' in config_dict:
            config.solver = SolverConfig(**config_dict['solver'])

        if 'logging' in config_dict:
            config.logging = LoggingConfig(**config_dict['logging'])

        return config

    @classmethod
    def from_json(cls, json_path: Union[str, Path]) -> 'MultigridConfig':
        """Load configuration from JSON file."""
        json_path = Path(json_path)

        if not json_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {json_path}")

        with open(json_path, 'r') as f:
            config_dict = json.load(f)

        config = cls.from_dict(config_dict)
        config.validate()

        logger.info(f"Loaded configuration from {json_path}")
        return config

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> 'MultigridConfig':
        """Load configuration from YAML file."""
        yaml_path = Path(yaml_path)

        if not yaml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

        with open(yaml_path, 'r') as f:
            config_dict = yaml.safe_load(f) or {}

        config = cls.from_dict(config_dict)
        config.validate()

        logger.info(f"Loaded configuration from {yaml_path}")
        return config

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'MultigridConfig':
        """Load configuration from a .json, .yaml or .yml file."""
        suffix = Path(path).suffix.lower()
        if suffix == '.json':
            return cls.from_json(path)
        if suffix in ('.yaml', '.yml'):
            return cls.from_yaml(path)
        raise ValueError(f"Unsupported configuration format: {suffix}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'problem': asdict(self.problem),
            'solver': asdict(self.solver),
            'logging': asdict(self.logging)
        }

    def to_json(self, json_path: Union[str, Path], indent: int = 2) -> None:
        """Save configuration to JSON file."""
        json_path = Path(json_path)
        json_path.parent.mkdir(parents=True, exist_ok=True)

        with open(json_path, 'w') as f:
            json.dump(self.to_dict(), f, indent=indent)

        logger.info(f"Saved configuration to {json_path}")

    def to_yaml(self, yaml_path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        yaml_path = Path(yaml_path)
        yaml_path.parent.mkdir(parents=True, exist_ok=True)

        with open(yaml_path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, indent=2)

        logger.info(f"Saved configuration to {yaml_path}")

    def setup_logging(self) -> None:
        """Setup logging based on configuration."""
        setup_logging(
            level=self.logging.level,
            format_string=self.logging.format,
            log_file=self.logging.file_output,
            console_output=self.logging.console_output
        )
        logger.info(f"Logging configured: level={self.logging.level}")

    def __str__(self) -> str:
        """String representation of configuration."""
        return (f"MultigridConfig(level={self.problem.level}, "
                f"smoother={self.solver.smoother}, dtype={self.problem.dtype})")


def create_default_config() -> MultigridConfig:
    """Create default configuration."""
    return MultigridConfig()


def create_debug_config() -> MultigridConfig:
    """Create configuration with boundary invariant checks and verbose logging."""
    config = MultigridConfig()
    config.problem.level = 4
    config.solver.debug_checks = True
    config.logging.level = "DEBUG"

    return config

"""Unit tests for configuration, logging and timing utilities."""

import json
import logging

import pytest
import yaml
import sys
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from poisson_multigrid.config import (
    LoggingConfig, MultigridConfig, ProblemConfig, SolverConfig,
    create_debug_config, create_default_config
)
from poisson_multigrid.utils import LoggingContext, Timer, setup_logging, silence_logger
from poisson_multigrid.utils.logging_utils import ColoredFormatter

DEFAULT_CONFIG_FILE = Path(__file__).parent.parent.parent / "config" / "default.yaml"


class TestConfigSections:
    """Test cases for section validation."""

    def test_defaults_are_valid(self):
        """Default configuration validates."""
        config = create_default_config()
        config.validate()

        assert config.problem.level == 6
        assert config.problem.spacing is None
        assert config.solver.smoother == "gauss_seidel"
        assert config.solver.max_cycles == 20
        assert config.logging.level == "INFO"

    @pytest.mark.parametrize("kwargs", [
        {"level": 0},
        {"modes": 0.0},
        {"spacing": -1.0},
        {"dtype": "float16"},
    ])
    def test_invalid_problem(self, kwargs):
        """Invalid problem settings are rejected."""
        with pytest.raises(ValueError):
            ProblemConfig(**kwargs).validate()

    @pytest.mark.parametrize("kwargs", [
        {"smoother": "jacobi"},
        {"max_cycles": 0},
        {"tolerance": 0.0},
        {"restriction_method": "half_weighting"},
        {"prolongation_method": "cubic"},
    ])
    def test_invalid_solver(self, kwargs):
        """Invalid solver settings are rejected."""
        with pytest.raises(ValueError):
            SolverConfig(**kwargs).validate()

    def test_invalid_logging_level(self):
        """Unknown logging levels are rejected."""
        LoggingConfig(level="debug").validate()

        with pytest.raises(ValueError, match="Invalid logging level"):
            LoggingConfig(level="VERBOSE").validate()

    def test_non_string_logging_level(self, tmp_path):
        """A numeric level from a config file is a ValueError, not an AttributeError."""
        with pytest.raises(ValueError, match="Invalid logging level"):
            LoggingConfig(level=10).validate()

        path = tmp_path / "numeric_level.yaml"
        path.write_text("logging:\n  level: 10\n")
        with pytest.raises(ValueError, match="Invalid logging level"):
            MultigridConfig.from_yaml(path)

    def test_float32_tolerance_warning(self, caplog):
        """A tolerance below float32 resolution is accepted with a warning."""
        config = MultigridConfig(problem=ProblemConfig(dtype="float32"))

        with caplog.at_level(logging.WARNING, logger="poisson_multigrid"):
            config.validate()

        assert "float32" in caplog.text

    def test_debug_config(self):
        """Debug preset enables boundary checks on a small grid."""
        config = create_debug_config()
        config.validate()

        assert config.problem.level == 4
        assert config.solver.debug_checks
        assert config.logging.level == "DEBUG"


class TestConfigFiles:
    """Test cases for dictionary and file round trips."""

    def test_from_dict_partial(self):
        """Missing sections keep their defaults."""
        config = MultigridConfig.from_dict({"solver": {"smoother": "red_black"}})

        assert config.solver.smoother == "red_black"
        assert config.solver.max_cycles == 20
        assert config.problem == ProblemConfig()

    def test_from_dict_unknown_section(self):
        """Unknown sections are an error, not silently ignored."""
        with pytest.raises(ValueError, match="Unknown configuration sections"):
            MultigridConfig.from_dict({"solvers": {}})

    def test_from_dict_unknown_key(self):
        """Unknown keys inside a section are an error."""
        with pytest.raises(TypeError):
            MultigridConfig.from_dict({"problem": {"size": 65}})

    def test_yaml_round_trip(self, tmp_path):
        """to_yaml / from_yaml preserve every field."""
        config = MultigridConfig(
            problem=ProblemConfig(level=5, modes=2.0, spacing=0.25),
            solver=SolverConfig(smoother="red_black", tolerance=1e-8, debug_checks=True)
        )
        path = tmp_path / "nested" / "config.yaml"
        config.to_yaml(path)

        loaded = MultigridConfig.from_yaml(path)

        assert loaded.to_dict() == config.to_dict()
        assert yaml.safe_load(path.read_text())["problem"]["level"] == 5

    def test_json_round_trip(self, tmp_path):
        """to_json / from_file preserve every field."""
        config = create_debug_config()
        path = tmp_path / "config.json"
        config.to_json(path)

        loaded = MultigridConfig.from_file(path)

        assert loaded.to_dict() == config.to_dict()
        assert json.loads(path.read_text())["solver"]["debug_checks"] is True

    def test_from_file_errors(self, tmp_path):
        """Unsupported suffixes and missing files are reported."""
        with pytest.raises(ValueError, match="Unsupported configuration format"):
            MultigridConfig.from_file(tmp_path / "config.toml")

        with pytest.raises(FileNotFoundError):
            MultigridConfig.from_file(tmp_path / "missing.yaml")

    def test_invalid_file_contents(self, tmp_path):
        """Loaded files are validated."""
        path = tmp_path / "bad.yaml"
        path.write_text("solver:\n  max_cycles: -1\n")

        with pytest.raises(ValueError, match="Max cycles"):
            MultigridConfig.from_yaml(path)

    def test_empty_yaml_gives_defaults(self, tmp_path):
        """An empty file is the default configuration."""
        path = tmp_path / "empty.yml"
        path.write_text("")

        assert MultigridConfig.from_file(path).to_dict() == create_default_config().to_dict()

    def test_shipped_default_config(self):
        """The bundled default.yaml matches the built-in defaults."""
        loaded = MultigridConfig.from_yaml(DEFAULT_CONFIG_FILE)
        assert loaded.to_dict() == create_default_config().to_dict()

    def test_str(self):
        """Short summary."""
        assert str(create_default_config()) == \
            "MultigridConfig(level=6, smoother=gauss_seidel, dtype=float64)"


class TestLogging:
    """Test cases for logging setup."""

    def test_setup_logging_to_file(self, tmp_path):
        """Records reach the configured file."""
        log_file = tmp_path / "logs" / "run.log"
        config = MultigridConfig(logging=LoggingConfig(level="DEBUG", file_output=str(log_file),
                                                       console_output=False))
        config.setup_logging()

        logging.getLogger("poisson_multigrid.test").debug("stencil applied")
        for handler in logging.getLogger().handlers:
            handler.flush()

        contents = log_file.read_text()
        assert "stencil applied" in contents
        assert "Logging configured: level=DEBUG" in contents
        assert logging.getLogger().level == logging.DEBUG

    def test_invalid_level(self):
        """Unknown level names raise."""
        with pytest.raises(ValueError, match="Invalid log level"):
            setup_logging("LOUD")

    def test_colored_formatter_restores_record(self):
        """Coloring does not leak into other handlers."""
        record = logging.LogRecord("poisson_multigrid", logging.WARNING, __file__, 1,
                                   "residual stalled", None, None)
        formatted = ColoredFormatter("%(levelname)s %(message)s").format(record)

        assert "\033[33m" in formatted
        assert record.levelname == "WARNING"

    def test_logging_context(self):
        """Temporary levels are restored on exit."""
        logger = logging.getLogger("poisson_multigrid.context")
        logger.setLevel(logging.INFO)

        with LoggingContext(logging.DEBUG, "poisson_multigrid.context") as inner:
            assert inner.level == logging.DEBUG

        assert logger.level == logging.INFO

    def test_silence_logger(self, caplog):
        """Silenced loggers emit nothing."""
        with caplog.at_level(logging.DEBUG):
            with silence_logger("poisson_multigrid.quiet") as quiet:
                quiet.error("hidden")
            logging.getLogger("poisson_multigrid.quiet").error("visible")

        assert "hidden" not in caplog.text
        assert "visible" in caplog.text


class TestTimer:
    """Test cases for the timer."""

    def test_context_manager(self):
        """Elapsed time is recorded on exit."""
        with Timer("cycle") as timer:
            sum(range(1000))

        assert timer.elapsed_time is not None
        assert timer.elapsed_time >= 0.0

    def test_stop_without_start(self):
        """Stopping an unstarted timer is an error."""
        with pytest.raises(RuntimeError, match="not started"):
            Timer().stop()


if __name__ == "__main__":
    pytest.main([__file__])

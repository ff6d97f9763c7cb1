# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Configuration module for word search generator.

Handles loading configuration from YAML files and command-line arguments,
with proper merging and validation.
"""

import argparse
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any, Set

import yaml

from image_renderer import DEFAULT_PALETTE, RenderSettings


VALID_OUTPUT_FORMATS = ["png_puzzle", "png_resolved", "yaml_answers"]
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# argparse dest -> (config section, option); section None is top level
CLI_OPTIONS = {
    'input': (None, 'input_file'),
    'output': ('output', 'directory'),
    'format': ('output', 'formats'),
    'seed': ('generation', 'seed'),
    'attempts_per_cell': ('generation', 'attempts_per_cell'),
    'delay': ('output', 'delay_seconds'),
    'cell_size': ('render', 'cell_size'),
    'font': ('render', 'font_path'),
}


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


@dataclass
class GenerationConfig:
    """Configuration for puzzle generation."""
    attempts_per_cell: int = 50
    max_attempts: Optional[int] = None
    seed: Optional[int] = None


@dataclass
class RenderConfig:
    """Configuration for image rendering."""
    cell_size: int = 50
    font_scale: float = 0.8
    border_width: int = 2
    font_path: Optional[str] = None
    palette: List[List[int]] = field(
        default_factory=lambda: [list(c) for c in DEFAULT_PALETTE]
    )

    def to_settings(self) -> RenderSettings:
        """Build renderer settings from this configuration."""
        return RenderSettings(
            cell_size=self.cell_size,
            font_scale=self.font_scale,
            border_width=self.border_width,
            font_path=self.font_path,
            palette=[tuple(c) for c in self.palette],
        )


@dataclass
class OutputConfig:
    """Configuration for output."""
    directory: str = "."
    images_dir: str = "images"
    resolved_dir: str = "resolved"
    formats: List[str] = field(default_factory=lambda: [
        "png_puzzle", "png_resolved"
    ])
    create_directories: bool = True
    delay_seconds: float = 0.0
    log_level: str = "INFO"
    log_directory: str = "logs"
    log_file_prefix: str = "wordsearch_generator"
    enable_console_logging: bool = True


@dataclass
class GeneratorConfig:
    """Complete configuration for a batch run."""
    input_file: str = "words.csv"

    # Sub-configurations
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    # Dotted names of options set on the command line
    cli_overrides: Set[str] = field(
        default_factory=set, compare=False, repr=False
    )

    def __post_init__(self):
        """Convert dicts to dataclass instances if needed."""
        if isinstance(self.generation, dict):
            self.generation = GenerationConfig(**self.generation)
        if isinstance(self.render, dict):
            self.render = RenderConfig(**self.render)
        if isinstance(self.output, dict):
            self.output = OutputConfig(**self.output)

    @classmethod
    def from_yaml(cls, path: str) -> 'GeneratorConfig':
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            GeneratorConfig instance

        Raises:
            ConfigValidationError: If file doesn't exist or is invalid
        """
        path = Path(path)
        if not path.exists():
            raise ConfigValidationError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in {path}: {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigValidationError(
                f"Configuration file must contain a YAML mapping, got {type(data)}"
            )

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> 'GeneratorConfig':
        """Create GeneratorConfig from dictionary."""
        config = cls()
        config.input_file = data.get('input_file', config.input_file)

        sections = {
            'generation': GenerationConfig,
            'render': RenderConfig,
            'output': OutputConfig,
        }
        for name, section_cls in sections.items():
            section_data = data.get(name)
            if section_data is None:
                continue
            if not isinstance(section_data, dict):
                raise ConfigValidationError(
                    f"Section '{name}' must be a mapping"
                )
            try:
                setattr(config, name, section_cls(**section_data))
            except TypeError as e:
                raise ConfigValidationError(
                    f"Unknown option in section '{name}': {e}"
                )

        return config

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'GeneratorConfig':
        """
        Create configuration from command-line arguments.

        Every option the user actually gave is recorded in cli_overrides,
        so merge() can tell "--delay 0" apart from an omitted --delay.

        Args:
            args: Parsed command-line arguments

        Returns:
            GeneratorConfig instance
        """
        config = cls()

        for arg_name, (section, key) in CLI_OPTIONS.items():
            value = getattr(args, arg_name, None)
            if value is None:
                continue
            if arg_name == 'format':
                value = [f.strip() for f in value.split(',') if f.strip()]
            config._set(section, key, value)

        if getattr(args, 'verbose', False):
            config._set('output', 'log_level', "DEBUG")

        return config

    def _set(self, section: Optional[str], key: str, value: Any):
        """Set one option and remember that it was given explicitly."""
        target = getattr(self, section) if section else self
        setattr(target, key, value)
        self.cli_overrides.add(f"{section}.{key}" if section else key)

    @classmethod
    def merge(
        cls,
        yaml_config: 'GeneratorConfig',
        cli_config: 'GeneratorConfig'
    ) -> 'GeneratorConfig':
        """
        Merge configurations with CLI taking precedence over YAML.

        Only options listed in cli_config.cli_overrides are taken from the
        command line; everything else comes from the YAML file.

        Args:
            yaml_config: Configuration loaded from YAML file
            cli_config: Configuration from command-line arguments

        Returns:
            Merged GeneratorConfig instance
        """
        merged = GeneratorConfig(
            input_file=yaml_config.input_file,
            generation=GenerationConfig(**asdict(yaml_config.generation)),
            render=RenderConfig(**asdict(yaml_config.render)),
            output=OutputConfig(**asdict(yaml_config.output)),
        )

        for dotted in sorted(cli_config.cli_overrides):
            section, _, key = dotted.rpartition('.')
            source = getattr(cli_config, section) if section else cli_config
            merged._set(section or None, key, getattr(source, key))

        return merged

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not self.input_file or not str(self.input_file).strip():
            errors.append("input_file cannot be empty")

        # Generation
        if self.generation.attempts_per_cell < 1:
            errors.append("attempts_per_cell must be at least 1")
        if (self.generation.max_attempts is not None and
                self.generation.max_attempts < 1):
            errors.append("max_attempts must be at least 1")

        # Rendering
        if self.render.cell_size < 1:
            errors.append("cell_size must be positive")
        if not 0.0 < self.render.font_scale <= 1.0:
            errors.append("font_scale must be between 0.0 and 1.0")
        if self.render.border_width < 0:
            errors.append("border_width must be non-negative")
        if not self.render.palette:
            errors.append("palette must contain at least one colour")
        for color in self.render.palette:
            if (len(color) != 4 or
                    not all(isinstance(v, int) and 0 <= v <= 255 for v in color)):
                errors.append(
                    f"Invalid palette colour {color}. "
                    "Must be four integers [r, g, b, a] in 0-255"
                )

        # Output
        if not self.output.formats:
            errors.append("At least one output format is required")
        for fmt in self.output.formats:
            if fmt not in VALID_OUTPUT_FORMATS:
                errors.append(
                    f"Invalid output format '{fmt}'. "
                    f"Must be one of: {VALID_OUTPUT_FORMATS}"
                )
        if self.output.delay_seconds < 0:
            errors.append("delay_seconds must be non-negative")
        if self.output.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid log level '{self.output.log_level}'. "
                f"Must be one of: {VALID_LOG_LEVELS}"
            )

        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'input_file': self.input_file,
            'generation': asdict(self.generation),
            'render': asdict(self.render),
            'output': asdict(self.output),
        }


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Generate word search puzzle images from a batch file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Read words.csv, write images/ and resolved/ in the current directory
  wordsearch-generator

  # Using YAML configuration
  wordsearch-generator --config wordsearch.yaml

  # CLI arguments override YAML
  wordsearch-generator --config wordsearch.yaml --input puzzles.csv --seed 7
"""
    )

    # Configuration file
    parser.add_argument(
        "--config", "-c",
        metavar="PATH",
        help="YAML configuration file"
    )

    # Input / output
    parser.add_argument(
        "--input", "-i",
        metavar="PATH",
        help="Batch file of gridSize markers and words (default: words.csv)"
    )
    parser.add_argument(
        "--output", "-o",
        metavar="PATH",
        help="Directory holding images/ and resolved/ (default: .)"
    )
    parser.add_argument(
        "--format",
        metavar="FORMATS",
        help=f"Comma-separated output formats: {','.join(VALID_OUTPUT_FORMATS)}"
    )

    # Generation
    parser.add_argument(
        "--seed",
        type=int,
        metavar="INT",
        help="Random seed for reproducible puzzles"
    )
    parser.add_argument(
        "--attempts-per-cell",
        type=int,
        metavar="INT",
        help="Placement attempts per word, per grid cell (default: 50)"
    )
    parser.add_argument(
        "--delay",
        type=float,
        metavar="SECONDS",
        help="Pause between puzzles (default: 0)"
    )

    # Rendering
    parser.add_argument(
        "--cell-size",
        type=int,
        metavar="PX",
        help="Cell size in pixels (default: 50)"
    )
    parser.add_argument(
        "--font",
        metavar="PATH",
        help="TrueType font file for letters"
    )

    # Other options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate config and batch file without generating"
    )

    return parser


def load_config(args: Optional[argparse.Namespace] = None) -> GeneratorConfig:
    """
    Load configuration from command-line and/or YAML file.

    Args:
        args: Parsed command-line arguments (if None, parses sys.argv)

    Returns:
        Fully resolved GeneratorConfig

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if args is None:
        parser = create_argument_parser()
        args = parser.parse_args()

    # Load from YAML if specified
    yaml_config = None
    if getattr(args, 'config', None):
        yaml_config = GeneratorConfig.from_yaml(args.config)

    # Load from CLI
    cli_config = GeneratorConfig.from_args(args)

    # Merge configurations
    if yaml_config:
        config = GeneratorConfig.merge(yaml_config, cli_config)
    else:
        config = cli_config

    # Validate
    errors = config.validate()
    if errors:
        raise ConfigValidationError(
            "Configuration validation failed:\n" +
            "\n".join(f"  - {e}" for e in errors)
        )

    return config

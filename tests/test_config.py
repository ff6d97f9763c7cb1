# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Unit tests for config module."""

import os
import sys
import tempfile
import unittest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from config import (
    GeneratorConfig, GenerationConfig, RenderConfig, OutputConfig,
    ConfigValidationError, VALID_OUTPUT_FORMATS, create_argument_parser,
    load_config
)


class TestGeneratorConfig(unittest.TestCase):
    """Tests for GeneratorConfig class."""

    def test_default_config(self):
        """Test default configuration values."""
        config = GeneratorConfig()

        self.assertEqual(config.input_file, "words.csv")
        self.assertEqual(config.output.directory, ".")
        self.assertEqual(config.generation.attempts_per_cell, 50)
        self.assertIsNone(config.generation.seed)
        self.assertEqual(config.validate(), [])

    def test_nested_config_from_dict(self):
        """Test creating config with nested dict values."""
        config = GeneratorConfig(
            generation={'seed': 7},
            output={'directory': './test_output'}
        )

        self.assertEqual(config.generation.seed, 7)
        self.assertEqual(config.output.directory, './test_output')

    def test_validation_invalid_format(self):
        config = GeneratorConfig(output={'formats': ['svg_puzzle']})

        errors = config.validate()
        self.assertTrue(any("format" in e.lower() for e in errors))

    def test_validation_invalid_attempts(self):
        config = GeneratorConfig(generation={'attempts_per_cell': 0})

        errors = config.validate()
        self.assertTrue(any("attempts_per_cell" in e for e in errors))

    def test_validation_invalid_render(self):
        config = GeneratorConfig(render={'cell_size': 0, 'font_scale': 1.5})

        errors = config.validate()
        self.assertTrue(any("cell_size" in e for e in errors))
        self.assertTrue(any("font_scale" in e for e in errors))

    def test_validation_invalid_palette(self):
        config = GeneratorConfig(render={'palette': [[255, 0, 0]]})

        errors = config.validate()
        self.assertTrue(any("palette" in e.lower() for e in errors))

    def test_validation_negative_delay(self):
        config = GeneratorConfig(output={'delay_seconds': -1})

        errors = config.validate()
        self.assertTrue(any("delay" in e for e in errors))

    def test_to_dict(self):
        config = GeneratorConfig(input_file="batch.csv")

        result = config.to_dict()

        self.assertEqual(result['input_file'], "batch.csv")
        self.assertIn('generation', result)
        self.assertEqual(result['render']['cell_size'], 50)

    def test_render_settings(self):
        """RenderConfig converts palette lists to tuples."""
        settings = RenderConfig(cell_size=30).to_settings()

        self.assertEqual(settings.cell_size, 30)
        self.assertIsInstance(settings.palette[0], tuple)


class TestOutputConfig(unittest.TestCase):
    """Tests for OutputConfig class."""

    def test_default_values(self):
        config = OutputConfig()

        self.assertEqual(config.images_dir, "images")
        self.assertEqual(config.resolved_dir, "resolved")
        self.assertEqual(config.formats, ["png_puzzle", "png_resolved"])
        self.assertTrue(config.create_directories)
        self.assertEqual(config.delay_seconds, 0.0)

    def test_formats_are_known(self):
        for fmt in OutputConfig().formats:
            self.assertIn(fmt, VALID_OUTPUT_FORMATS)


class TestYAMLLoading(unittest.TestCase):
    """Tests for YAML configuration loading."""

    def setUp(self):
        """Create a temporary YAML file for testing."""
        self.temp_file = tempfile.NamedTemporaryFile(
            mode='w', suffix='.yaml', delete=False
        )
        self.temp_file.write('''
input_file: puzzles.csv

generation:
  seed: 42
  attempts_per_cell: 20

render:
  cell_size: 40

output:
  directory: "./test_output"
  formats: [png_puzzle, yaml_answers]
''')
        self.temp_file.close()

    def tearDown(self):
        os.unlink(self.temp_file.name)

    def test_load_from_yaml(self):
        config = GeneratorConfig.from_yaml(self.temp_file.name)

        self.assertEqual(config.input_file, "puzzles.csv")
        self.assertEqual(config.generation.seed, 42)
        self.assertEqual(config.generation.attempts_per_cell, 20)
        self.assertEqual(config.render.cell_size, 40)
        self.assertEqual(config.output.directory, "./test_output")
        self.assertEqual(config.output.formats, ["png_puzzle", "yaml_answers"])
        # Unset values keep defaults
        self.assertEqual(config.output.resolved_dir, "resolved")

    def test_load_nonexistent_file(self):
        with self.assertRaises(ConfigValidationError):
            GeneratorConfig.from_yaml("/nonexistent/path.yaml")

    def test_unknown_option(self):
        with open(self.temp_file.name, 'w') as f:
            f.write("generation:\n  max_ai_callbacks: 3\n")

        with self.assertRaises(ConfigValidationError):
            GeneratorConfig.from_yaml(self.temp_file.name)

    def test_non_mapping(self):
        with open(self.temp_file.name, 'w') as f:
            f.write("- just\n- a list\n")

        with self.assertRaises(ConfigValidationError):
            GeneratorConfig.from_yaml(self.temp_file.name)


class TestArguments(unittest.TestCase):
    """Tests for CLI argument handling."""

    def test_from_args(self):
        parser = create_argument_parser()
        args = parser.parse_args([
            "--input", "batch.csv", "--output", "out", "--seed", "0",
            "--format", "png_puzzle, yaml_answers", "--delay", "1.5",
            "--cell-size", "30", "--verbose"
        ])

        config = GeneratorConfig.from_args(args)

        self.assertEqual(config.input_file, "batch.csv")
        self.assertEqual(config.output.directory, "out")
        self.assertEqual(config.generation.seed, 0)
        self.assertEqual(config.output.formats, ["png_puzzle", "yaml_answers"])
        self.assertEqual(config.output.delay_seconds, 1.5)
        self.assertEqual(config.render.cell_size, 30)
        self.assertEqual(config.output.log_level, "DEBUG")

    def test_load_config_rejects_invalid(self):
        parser = create_argument_parser()
        args = parser.parse_args(["--format", "gif"])

        with self.assertRaises(ConfigValidationError):
            load_config(args)


class TestConfigMerge(unittest.TestCase):
    """Tests for configuration merging."""

    def cli(self, *argv):
        args = create_argument_parser().parse_args(list(argv))
        return GeneratorConfig.from_args(args)

    def test_merge_prefers_cli(self):
        """Test that CLI config takes precedence over YAML."""
        yaml_config = GeneratorConfig(input_file="yaml.csv")
        cli_config = self.cli("--input", "cli.csv")

        merged = GeneratorConfig.merge(yaml_config, cli_config)

        self.assertEqual(merged.input_file, "cli.csv")

    def test_merge_keeps_yaml_when_cli_omitted(self):
        """Test that YAML values are kept when an option is not given."""
        yaml_config = GeneratorConfig(
            input_file="yaml.csv",
            generation=GenerationConfig(seed=5),
            render={'cell_size': 64},
        )
        cli_config = self.cli()

        merged = GeneratorConfig.merge(yaml_config, cli_config)

        self.assertEqual(merged.input_file, "yaml.csv")
        self.assertEqual(merged.generation.seed, 5)
        self.assertEqual(merged.render.cell_size, 64)

    def test_merge_nested_override(self):
        yaml_config = GeneratorConfig(output={'directory': 'yaml_out'})
        cli_config = self.cli("--delay", "2")

        merged = GeneratorConfig.merge(yaml_config, cli_config)

        self.assertEqual(merged.output.directory, 'yaml_out')
        self.assertEqual(merged.output.delay_seconds, 2.0)

    def test_cli_value_equal_to_default_still_overrides(self):
        """--delay 0 and --attempts-per-cell 50 beat the YAML values."""
        yaml_config = GeneratorConfig(
            generation={'attempts_per_cell': 10},
            output={'delay_seconds': 5},
        )
        cli_config = self.cli("--delay", "0", "--attempts-per-cell", "50")

        merged = GeneratorConfig.merge(yaml_config, cli_config)

        self.assertEqual(merged.output.delay_seconds, 0.0)
        self.assertEqual(merged.generation.attempts_per_cell, 50)

    def test_load_config_delay_zero_over_yaml(self):
        with tempfile.NamedTemporaryFile(
            mode='w', suffix='.yaml', delete=False
        ) as f:
            f.write("output:\n  delay_seconds: 5\n")
        self.addCleanup(os.unlink, f.name)
        args = create_argument_parser().parse_args(
            ["--config", f.name, "--delay", "0"]
        )

        config = load_config(args)

        self.assertEqual(config.output.delay_seconds, 0.0)

    def test_cli_overrides_recorded(self):
        config = self.cli("--seed", "0", "--font", "a.ttf", "--verbose")

        self.assertEqual(
            config.cli_overrides,
            {"generation.seed", "render.font_path", "output.log_level"}
        )
        self.assertEqual(self.cli().cli_overrides, set())


if __name__ == '__main__':
    unittest.main()

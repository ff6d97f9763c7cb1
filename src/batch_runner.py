# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Batch runner.

Turns a batch file into puzzle images:
1. Read the batch file into puzzle specs
2. Generate each puzzle
3. Render blank and resolved PNGs (and optional YAML answers)
4. Pause between puzzles when a delay is configured

A failure in one puzzle is logged and recorded; the batch keeps going.
"""

import logging
import os
import random
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from answer_exporter import AnswerExporter
from batch_reader import read_batch_file
from config import GeneratorConfig
from image_renderer import GridImageRenderer, RenderError
from models import PuzzleResult, PuzzleSpec
from puzzle_generator import (
    PuzzleGenerator, PuzzleGenerationError, InvalidSizeError
)


@dataclass
class BatchReport:
    """Outcome of a batch run."""
    total: int = 0
    succeeded: List[int] = field(default_factory=list)
    failed: Dict[int, str] = field(default_factory=dict)
    files: Dict[int, Dict[str, str]] = field(default_factory=dict)
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.failed

    def __str__(self):
        lines = [
            f"Puzzles: {self.total}",
            f"Succeeded: {len(self.succeeded)}",
            f"Failed: {len(self.failed)}",
            f"Elapsed: {self.elapsed:.2f}s",
        ]
        for index, message in sorted(self.failed.items()):
            lines.append(f"  puzzle {index}: {message}")
        return "\n".join(lines)


def build_generator(config: GeneratorConfig) -> PuzzleGenerator:
    """Create a PuzzleGenerator from configuration."""
    gen = config.generation
    rng = random.Random(gen.seed) if gen.seed is not None else None
    return PuzzleGenerator(
        rng=rng,
        attempts_per_cell=gen.attempts_per_cell,
        max_attempts=gen.max_attempts,
    )


class BatchRunner:
    """Generates and writes every puzzle in a batch file."""

    def __init__(
        self,
        config: GeneratorConfig,
        generator: Optional[PuzzleGenerator] = None,
        renderer: Optional[GridImageRenderer] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the runner.

        Args:
            config: Resolved configuration
            generator: Puzzle generator (built from config if omitted)
            renderer: Image renderer (built from config if omitted)
            sleep: Delay function used between puzzles
        """
        self.config = config
        self.generator = generator or build_generator(config)
        self.renderer = renderer or GridImageRenderer(config.render.to_settings())
        self.exporter = AnswerExporter()
        self.sleep = sleep
        self.logger = logging.getLogger(__name__)

    @property
    def images_dir(self) -> str:
        return os.path.join(self.config.output.directory, self.config.output.images_dir)

    @property
    def resolved_dir(self) -> str:
        return os.path.join(self.config.output.directory, self.config.output.resolved_dir)

    def output_paths(self, index: int) -> Dict[str, str]:
        """Paths for each enabled output format of puzzle index."""
        paths = {
            'png_puzzle': os.path.join(self.images_dir, f"{index}.png"),
            'png_resolved': os.path.join(self.resolved_dir, f"{index}-resolved.png"),
            'yaml_answers': os.path.join(self.resolved_dir, f"{index}-answers.yaml"),
        }
        return {fmt: paths[fmt] for fmt in self.config.output.formats}

    def run(self, batch_path: Optional[str] = None) -> BatchReport:
        """
        Process a batch file.

        Args:
            batch_path: Batch file (defaults to config.input_file)

        Returns:
            BatchReport for the run

        Raises:
            OSError: If the batch file cannot be read
        """
        batch_path = batch_path or self.config.input_file
        specs = read_batch_file(batch_path)
        return self.run_specs(specs)

    def run_specs(self, specs: List[PuzzleSpec]) -> BatchReport:
        """Generate, render and write each spec in order."""
        start = time.time()
        report = BatchReport(total=len(specs))

        if self.config.output.create_directories:
            os.makedirs(self.images_dir, exist_ok=True)
            os.makedirs(self.resolved_dir, exist_ok=True)

        for position, spec in enumerate(specs):
            if position > 0 and self.config.output.delay_seconds > 0:
                self.logger.debug(f"Waiting {self.config.output.delay_seconds}s")
                self.sleep(self.config.output.delay_seconds)

            self.logger.info(
                f"Generating puzzle {spec.index} "
                f"({spec.label}, {len(spec.words)} words)"
            )
            try:
                report.files[spec.index] = self.process(spec)
                report.succeeded.append(spec.index)
            except (PuzzleGenerationError, RenderError, OSError) as e:
                self.logger.error(f"Error generating puzzle {spec.index}: {e}")
                report.failed[spec.index] = str(e)
            except Exception as e:
                self.logger.exception(
                    f"Unexpected error generating puzzle {spec.index}: {e}"
                )
                report.failed[spec.index] = f"{type(e).__name__}: {e}"

        report.elapsed = time.time() - start
        self.logger.info(
            f"Batch finished: {len(report.succeeded)}/{report.total} puzzle(s) "
            f"in {report.elapsed:.2f}s"
        )
        return report

    def process(self, spec: PuzzleSpec) -> Dict[str, str]:
        """
        Generate one puzzle and write its outputs.

        Every output is rendered before any file is written, so a render
        failure leaves no partial set of files behind.

        Returns:
            Paths written, keyed by format
        """
        if spec.size is None:
            raise InvalidSizeError(
                f"line {spec.line_number}: gridSize {spec.size_text!r} "
                "is not an integer"
            )

        result = self.generator.generate(spec.words, spec.size)
        paths = self.output_paths(spec.index)
        rendered = {fmt: self._render(fmt, spec, result) for fmt in paths}

        for fmt, data in rendered.items():
            with open(paths[fmt], 'wb') as f:
                f.write(data)
            self.logger.debug(f"   {fmt}: {paths[fmt]}")

        return paths

    def _render(self, fmt: str, spec: PuzzleSpec, result: PuzzleResult) -> bytes:
        if fmt == 'yaml_answers':
            return self.exporter.export(spec, result).encode('utf-8')
        if fmt == 'png_puzzle':
            return self.renderer.render_blank(result.grid)
        return self.renderer.render_resolved(result.grid, result.placements)

"""
Batch file reader.

A batch file describes several puzzles. A `gridSize,<n>` line starts a
puzzle and sets its size; each following non-blank line is one word:

    gridSize,4
    DOG
    CAT
    gridSize,5
    FISH

A gridSize line without an integer still starts a puzzle, with size None,
so only that puzzle fails when it is generated.
"""

import logging
import re
from typing import Iterable, List, Optional

from models import PuzzleSpec


MARKER_PREFIX = "gridSize"
MARKER_PATTERN = re.compile(r"^\s*gridSize\s*,\s*(-?\d+)\s*$")

logger = logging.getLogger(__name__)


def marker_value(text: str) -> str:
    """What follows the first comma of a gridSize line."""
    _, _, value = text.partition(",")
    return value.strip()


def parse_batch(lines: Iterable[str]) -> List[PuzzleSpec]:
    """
    Parse batch lines into puzzle specs.

    Args:
        lines: Lines of the batch file (trailing newlines allowed)

    Returns:
        Puzzle specs in input order, indexed from 1
    """
    specs: List[PuzzleSpec] = []
    current: Optional[PuzzleSpec] = None
    orphans = 0

    def finish(spec: Optional[PuzzleSpec]):
        if spec is None:
            return
        if spec.words:
            spec.index = len(specs) + 1
            specs.append(spec)
        else:
            logger.warning(
                f"gridSize marker on line {spec.line_number} has no words, skipped"
            )

    for line_number, line in enumerate(lines, start=1):
        text = line.strip()
        if not text:
            continue

        if text.startswith(MARKER_PREFIX):
            finish(current)
            match = MARKER_PATTERN.match(text)
            if match:
                current = PuzzleSpec(
                    index=0, size=int(match.group(1)), line_number=line_number
                )
            else:
                logger.warning(
                    f"line {line_number}: expected 'gridSize,<integer>', got {text!r}"
                )
                current = PuzzleSpec(
                    index=0, size=None, line_number=line_number,
                    size_text=marker_value(text)
                )
        elif current is None:
            orphans += 1
        else:
            current.words.append(text)

    finish(current)

    if orphans:
        logger.warning(
            f"Discarded {orphans} word(s) before the first gridSize line"
        )
    logger.debug(f"Parsed {len(specs)} puzzle(s)")
    return specs


def read_batch_file(path: str) -> List[PuzzleSpec]:
    """Read and parse a batch file."""
    logger.info(f"Reading batch file: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return parse_batch(f)
